"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors excepted)
    - All external failures mapped to AtsError subclasses

Design Decisions:
    - Thin wrappers over raw clients (ADR: single responsibility)
"""
