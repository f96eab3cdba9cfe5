"""
base.py

Declarative Base shared by every ORM model.

Alembic reads Base.metadata, so all models must inherit from this class
and be imported (see msc_api.models) before metadata is used.

"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
