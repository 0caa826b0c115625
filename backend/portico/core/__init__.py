"""Core Layer — pure naming logic, domain types, errors and protocols.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - No module in core/ touches the filesystem or FastAPI
"""
