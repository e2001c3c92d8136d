"""Services Layer — team-scoped use cases over the ORM (the imperative shell).

Invariants:
    - Every query on a business table is filtered by the resolved team_id
    - Permission checks happen before any read or write touches the database
    - Every mutation writes its audit row in the same transaction

Design Decisions:
    - One service module per aggregate for locality (ADR: ExMA no god objects)
    - Pure decisions delegated to core/, services only load, persist, and commit
"""
