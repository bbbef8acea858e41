"""Services Layer — async lookups composed from core functions and HTTP calls.

Invariants:
    - Requests are awaited strictly in sequence (no fan-out)
    - Per-item failures are absorbed here; only search-API NetworkError escapes
"""
