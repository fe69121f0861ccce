from __future__ import annotations
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

class Database:
    """
    Owns the engine and session factory for one database URL.

    Opened by the app lifespan on startup and closed on shutdown; the handle is
    kept on ``app.state.database`` instead of module-level globals.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def open(self) -> "Database":
        if self.engine is not None:
            return self
        connect_args = {}
        if self.url.startswith("sqlite"):
            # TestClient runs the app in a worker thread
            connect_args["check_same_thread"] = False
        self.engine = create_engine(
            self.url, pool_pre_ping=True, echo=self.echo, connect_args=connect_args
        )
        if self.url.startswith("sqlite"):
            # SQLite ignores ON DELETE rules unless asked per connection
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._session_factory = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("database is not open")
        return self._session_factory()

    def create_all(self) -> None:
        from liftlog import models  # noqa: F401  # registers the tables

        Base.metadata.create_all(self.engine)

    def ping(self) -> None:
        with self.session() as db:
            db.execute(text("SELECT 1"))

# Dependency for FastAPI routes
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
