"""Services Layer — business validation and search over the store Protocols.

Invariants:
    - Services depend on core/ Protocols only (stores injected by the caller)
    - Every failed check raises a core/errors.py type; nothing is recovered silently
    - Check order inside each operation is fixed (first failing rule wins)
"""
