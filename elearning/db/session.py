import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends, Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from elearning.core.errors import (
    ConfigurationError,
    DuplicateError,
    StorageError,
    ValidationError,
)
from elearning.db.init_db import init_db

logger = logging.getLogger(__name__)

# SQLSTATE 23505 (PostgreSQL), errno 1062 (MySQL), message text (SQLite)
_UNIQUE_SQLSTATE = "23505"
_UNIQUE_MYSQL_ERRNO = 1062


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity failure is a unique index or constraint clash."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == _UNIQUE_SQLSTATE:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _UNIQUE_MYSQL_ERRNO:
        return True
    return "unique constraint" in str(orig).lower()


class Database:
    """Lazily connected, process-wide database handle.

    Built once at startup and handed to route handlers through ``get_db``.
    The first ``ensure_connected()`` creates the engine, checks the
    connection and creates missing tables. A failed attempt caches nothing,
    so the next call tries again.
    """

    def __init__(self, url: str | None, pool_size: int = 1, connect_timeout: int = 5):
        if not url or not url.strip():
            raise ConfigurationError("DATABASE_URL is not set")
        self.url = url
        self.pool_size = pool_size
        self.connect_timeout = connect_timeout
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._session_factory is not None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    def ensure_connected(self) -> sessionmaker[Session]:
        factory = self._session_factory
        if factory is not None:
            return factory
        with self._lock:
            if self._session_factory is None:
                self._engine, self._session_factory = self._connect()
            return self._session_factory

    def _connect(self) -> tuple[Engine, sessionmaker[Session]]:
        engine = None
        try:
            engine = create_engine(self.url, pool_pre_ping=True, **self._engine_options())
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            init_db(engine)
        except SQLAlchemyError as e:
            if engine is not None:
                engine.dispose()
            logger.error("Database connection failed: %s", e)
            raise StorageError("Database connection failed") from e

        logger.info(
            "Database connected: %s", engine.url.render_as_string(hide_password=True)
        )
        return engine, sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def _engine_options(self) -> dict:
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite":
            options = {
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": self.connect_timeout,
                }
            }
            if url.database in (None, "", ":memory:"):
                # an in-memory database lives and dies with its one connection
                options["poolclass"] = StaticPool
            else:
                options.update(pool_size=self.pool_size, max_overflow=0)
            return options

        return {
            "pool_size": self.pool_size,
            "max_overflow": 0,
            "connect_args": {"connect_timeout": self.connect_timeout},
        }

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scope: rollback on any error, storage errors mapped to ours."""
        db = self.ensure_connected()()
        try:
            yield db
        except IntegrityError as e:
            db.rollback()
            logger.warning("Integrity error: %s", e.orig)
            if is_unique_violation(e):
                raise DuplicateError("Duplicate record") from e
            raise ValidationError("Record violates a data constraint") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Database error: %s", e)
            raise StorageError("Database operation failed") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None


def get_database(request: Request) -> Database:
    return request.app.state.database


# every request that needs DB will get a fresh session, and it will always close.
def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    with database.session() as db:
        yield db
