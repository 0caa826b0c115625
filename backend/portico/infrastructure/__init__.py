"""Infrastructure Layer — logging setup and request throttling.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
