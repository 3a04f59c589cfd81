"""Infrastructure — persistence adapters, database sessions and logging setup.

Invariants:
    - Adapters satisfy core.repository_protocols.BoardStore structurally
    - Infrastructure errors are mapped to core.errors.DatabaseError

Design Decisions:
    - SQLAlchemy for the durable store, an in-memory store for tests and local runs
"""
