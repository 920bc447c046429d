"""
database.py — Database Connection & Session Management
========================================================
Works with both SQLite (local dev, tests) and PostgreSQL (production).
Detects which one based on the DATABASE_URL.

There is no global engine: the app factory builds one `Database` and keeps it
on `app.state`. Request handlers get a session through `get_db`, so tests can
hand the app an in-memory database instead.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool
from fastapi import Request
from typing import Generator

Base = declarative_base()

DEFAULT_SQLITE_URL = "sqlite:///./lovesync.db"


def normalize_database_url(database_url: str) -> str:
    if not database_url:
        return DEFAULT_SQLITE_URL
    # Hosted Postgres often hands out "postgres://" but SQLAlchemy needs "postgresql://"
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url


class Database:
    """Owns the engine and the session factory for one app instance."""

    def __init__(self, database_url: str):
        self.url = normalize_database_url(database_url)

        # SQLite needs check_same_thread=False; PostgreSQL does not.
        # In-memory SQLite must share one connection or every session sees an empty DB.
        if self.url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(self.url, **kwargs)
        else:
            self.engine = create_engine(self.url, pool_pre_ping=True)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # Import registers the tables on Base.metadata
        from app import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        """True if a trivial query round-trips."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provides a DB session per request. Auto-closes when done."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
