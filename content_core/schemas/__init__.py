"""Pydantic Schemas — boundary validation for patches and outbound payloads.

Invariants:
    - Schemas validate at the system boundary (API or storage layers)
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from core dataclasses: schemas are wire contracts, core types are domain values
"""
