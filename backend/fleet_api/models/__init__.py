"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - One generic documents table holds every kind

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from fleet_api.models.document import Document  # noqa: F401
