"""User-facing Messages — pt-BR strings shared by the API and the client editor.

Invariants:
    - Pure data, no IO
    - Login failures share one message regardless of which check failed
"""

# --- Auth ---------------------------------------------------------------------

FILL_ALL_FIELDS = "Preencha todos os campos"
FILL_EMAIL_AND_PASSWORD = "Preencha email e senha"
EMAIL_TAKEN = "Email já cadastrado"
INVALID_CREDENTIALS = "Credenciais inválidas"
TOKEN_MISSING = "Token não fornecido"
TOKEN_INVALID = "Token inválido ou expirado"
USER_NOT_FOUND = "Usuário não encontrado"
SESSION_EXPIRED = "Sessão expirada"
NAME_REQUIRED = "Nome é obrigatório"
NAME_TOO_LONG = "Nome deve ter no máximo 100 caracteres"
EMAIL_INVALID = "Email inválido"
PASSWORD_TOO_SHORT = "A senha deve ter no mínimo 6 caracteres"

# --- Routes -------------------------------------------------------------------

ROUTE_NOT_FOUND = "Rota não encontrada"
ROUTE_DELETED = "Rota excluída com sucesso"
ROUTE_NAME_REQUIRED = "Nome da rota é obrigatório"
ROUTE_NAME_TOO_LONG = "Nome deve ter no máximo 200 caracteres"
ROUTE_MIN_POINTS = "A rota deve ter pelo menos 2 pontos"
COORDINATE_INVALID = "Coordenada inválida"

# --- Generic ------------------------------------------------------------------

INTERNAL_ERROR = "Erro interno do servidor"
UNKNOWN_ERROR = "Erro desconhecido"
CONNECTION_FAILED = "Falha de conexão com o servidor"

# --- Editor -------------------------------------------------------------------

SAVE_ROUTE_FAILED = "Erro ao salvar rota: {detail}"
DELETE_ROUTE_FAILED = "Erro ao excluir: {detail}"
LOAD_ROUTES_FAILED = "Erro ao buscar rotas: {detail}"
SEARCH_NO_RESULTS = "Nenhum resultado encontrado"
SEARCH_FAILED = "Erro na busca"
ROUTING_FAILED = "Erro ao calcular trajeto: {detail}"
SEARCHING = "Buscando..."
SAVING = "Salvando..."
SAVE = "Salvar"
GREETING = "Olá, {name}"


def point_count_label(count: int) -> str:
    """'1 ponto', '3 pontos'."""
    return f"{count} ponto{'' if count == 1 else 's'}"
