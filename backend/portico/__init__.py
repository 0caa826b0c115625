"""Portico — container-based route registration for modular FastAPI applications.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
