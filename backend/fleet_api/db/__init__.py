"""Database Definitions — SQLAlchemy declarative Base.

Invariants:
    - Single Base shared by every ORM model and by alembic
"""
