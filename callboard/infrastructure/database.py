"""Database handle — one lazily created engine and session factory per app."""

import threading
from typing import Generator, Optional

import structlog
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger(__name__)

Base = declarative_base()


class Database:
    """Owns the SQLAlchemy engine for one application instance.

    ``connect()`` is idempotent: the first call builds the engine under a
    lock, later calls return the same engine.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        if self._engine is not None:
            return self._engine

        with self._lock:
            if self._engine is None:
                kwargs = {"echo": self.echo, "pool_pre_ping": True}
                if self.url.startswith("sqlite"):
                    kwargs["connect_args"] = {"check_same_thread": False}
                    if ":memory:" in self.url or self.url in ("sqlite://", "sqlite:///"):
                        # A single shared connection, otherwise each session sees an empty db
                        kwargs["poolclass"] = StaticPool

                engine = create_engine(self.url, **kwargs)
                self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
                self._engine = engine
                logger.info("Database engine created", dialect=engine.dialect.name)

        return self._engine

    def create_all(self) -> None:
        # Import all models so SQLAlchemy knows about them
        from callboard.domain.models import auth_session, call_record, user, user_settings  # noqa: F401

        Base.metadata.create_all(bind=self.connect())

    def session(self) -> Session:
        self.connect()
        return self._session_factory()

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                self._session_factory = None


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency — one session per request."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
