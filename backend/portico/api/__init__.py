"""API Layer — global error handlers.

Invariants:
    - Routes come from container route files, registered by services/routes_provider.py
    - All errors return structured JSON responses
"""
