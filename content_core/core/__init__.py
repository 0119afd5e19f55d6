"""Core Layer — pure domain logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, schemas/ or infrastructure/
    - Every function is deterministic given its inputs (clocks are injected)

Design Decisions:
    - Functional core separated from imperative shell: services/ orchestrates and logs
"""
