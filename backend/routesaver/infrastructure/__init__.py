"""Infrastructure Layer — database, security, logging and external HTTP clients.

Invariants:
    - External failures (OSRM, Nominatim) surface as ExternalServiceError
    - Database failures surface as DatabaseError

Design Decisions:
    - httpx clients are injected so tests can swap in MockTransport
"""
