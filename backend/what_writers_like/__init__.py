"""What Writers Like — writers, their works, and what other writers said about them.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
