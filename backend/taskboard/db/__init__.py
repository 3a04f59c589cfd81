"""Database Infrastructure — SQLAlchemy declarative Base for all ORM models.

Invariants:
    - Single engine per DatabaseSessionManager (infrastructure/database.py)
    - All sessions are synchronous: one core operation is one unit of work
"""
