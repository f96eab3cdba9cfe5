"""
session.py

Database engine and session factory.

The engine is created once per process from settings.DATABASE_URL and
disposed when the application shuts down (see msc_api.main lifespan).
Request handlers never touch the engine directly: they receive a Session
through the get_db dependency.

Design principles:
- connection settings are defined in one place only
- one Session per request, closed at request end
- pool_pre_ping=True drops connections that died while idle

Related files:
- msc_api.core.config        : DATABASE_URL
- msc_api.core.deps          : get_db dependency

"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from msc_api.core.config import settings


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
