"""Services Layer — account and saved-route operations over an AsyncSession.

Invariants:
    - Services raise RouteSaverError subclasses, never HTTPException
    - Every route query is scoped by the authenticated user's id
"""
