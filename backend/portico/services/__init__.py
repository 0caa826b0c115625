"""Services Layer — containers config, route groups and the registrars.

Invariants:
    - Registrars never talk to FastAPI directly; they go through RouteGroup / ApiRouter / WebRouter
    - Every route file is resolved on disk before it is imported
"""
