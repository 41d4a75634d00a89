"""API Layer — FastAPI routes, dependency wiring, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes parse, delegate to a service, and map entities to schemas; no rules here
"""
