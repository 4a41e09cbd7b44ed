"""Auth Forms — client-side checks run before login/register requests are sent.

Invariants:
    - Return None when the form may be submitted, else the message to show
    - Checks are a convenience; the server re-validates everything
"""

from routesaver.core import messages
from routesaver.core.domain_types import PASSWORD_MIN_LENGTH

PASSWORDS_DIFFER = "As senhas não conferem."


def check_login_form(email: str, password: str) -> str | None:
    if not email.strip() or not password:
        return messages.FILL_ALL_FIELDS + "."
    return None


def check_register_form(
    name: str, email: str, password: str, confirm_password: str,
) -> str | None:
    if not name.strip() or not email.strip() or not password or not confirm_password:
        return messages.FILL_ALL_FIELDS + "."
    if password != confirm_password:
        return PASSWORDS_DIFFER
    if len(password) < PASSWORD_MIN_LENGTH:
        return messages.PASSWORD_TOO_SHORT + "."
    return None
