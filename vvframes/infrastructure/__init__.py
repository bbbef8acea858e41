"""Infrastructure Layer — HTTP client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic other than errors
    - All transport failures mapped to NetworkError (core/errors.py)
"""
