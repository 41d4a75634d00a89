"""Infrastructure Layer — database sessions, SQL-backed stores, logging.

Invariants:
    - Stores implement the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions are translated to core/errors.py types before leaving
"""
