"""vvframes — sparse frame lookup over packed WebP archives.

Invariants:
    - Package root contains no executable code beyond the version string

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
