"""Services Layer — orchestration of the pure core for request-handling callers.

Invariants:
    - Services compose core functions; they never reimplement core rules
    - Every accepted or rejected write is logged with structured extras
"""
