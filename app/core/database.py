# app/core/database.py

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.exceptions import StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

Base = declarative_base()


# ---------------------------------------------------
# DATABASE URL HELPERS
# ---------------------------------------------------

def normalize_database_url(url: str) -> str:
    # Convert old-style "postgres://" URIs if necessary
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def error_message(exc: Exception) -> str:
    """Driver-level message for a SQLAlchemy error, without the SQL echo."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


# ---------------------------------------------------
# CONNECTION MANAGER
# ---------------------------------------------------

class Database:
    """
    Owns the process-wide connection pool.

    The engine is created on first use and re-created after a failed
    connection attempt marks the pool as disconnected. One instance lives on
    `app.state.database` for the lifetime of the process.
    """

    def __init__(
        self,
        url: Optional[str],
        pool_size: int = 10,
        timeout_seconds: int = 30,
        pool_recycle: int = 1800,
    ):
        self.url = normalize_database_url(url) if url else None
        self.pool_size = pool_size
        self.timeout_seconds = timeout_seconds
        self.pool_recycle = pool_recycle

        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._disconnected = False
        self._lock = threading.Lock()

    def _engine_options(self) -> Dict[str, Any]:
        url = make_url(self.url)
        backend = url.get_backend_name()

        if backend == "sqlite":
            options: Dict[str, Any] = {
                "connect_args": {"check_same_thread": False, "timeout": self.timeout_seconds},
            }
            if url.database in (None, "", ":memory:"):
                # in-memory schema only lives as long as its single connection
                options["poolclass"] = StaticPool
            return options

        options = {
            "pool_size": self.pool_size,
            "max_overflow": 0,
            "pool_timeout": self.timeout_seconds,
            "pool_pre_ping": True,
            "pool_recycle": self.pool_recycle,
        }
        if backend == "postgresql":
            options["connect_args"] = {
                "connect_timeout": self.timeout_seconds,
                "options": f"-c statement_timeout={self.timeout_seconds * 1000}",
            }
        return options

    def _connect(self) -> None:
        if not self.url:
            logger.error("❌ DATABASE_URL is not set, add it to the environment or .env")
            raise StoreUnavailable(
                "Database unavailable",
                details="Environment variable DATABASE_URL is not set",
            )
        if self._engine is not None:
            logger.warning("⚠️ Connection pool marked disconnected, re-establishing")
            self._engine.dispose()

        logger.info("🔄 Creating database connection pool...")
        self._engine = create_engine(self.url, **self._engine_options())
        self._session_factory = sessionmaker(
            autoflush=False, bind=self._engine, info={"database": self}
        )
        self._disconnected = False

    @property
    def engine(self) -> Engine:
        if self._engine is None or self._disconnected:
            with self._lock:
                if self._engine is None or self._disconnected:
                    self._connect()
        return self._engine

    @property
    def connected(self) -> bool:
        return self._engine is not None and not self._disconnected

    def mark_disconnected(self) -> None:
        self._disconnected = True

    def acquire(self) -> Session:
        """
        Return a Session with a live connection already checked out.
        Caller is responsible for closing it (see `session()`).
        """
        self.engine  # lazily (re)establishes the pool
        db = self._session_factory()
        try:
            db.connection()
        except PoolTimeoutError as e:
            db.close()
            logger.error(f"❌ Timed out waiting for a pooled connection: {e}")
            raise StoreError("Timed out waiting for a database connection", details=str(e)) from e
        except (OperationalError, InterfaceError, DisconnectionError) as e:
            db.close()
            self.mark_disconnected()
            logger.error(f"❌ Database connection failed: {error_message(e)}")
            raise StoreUnavailable("Database unavailable", details=error_message(e)) from e
        return db

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context-manager for SQLAlchemy sessions.
        Use like:
            with database.session() as db:
                ...
        """
        db = self.acquire()
        try:
            yield db
        finally:
            db.close()

    def ping(self) -> None:
        """Run `SELECT 1`; raises StoreUnavailable when the store is unreachable."""
        with self.session() as db:
            try:
                db.execute(text("SELECT 1"))
            except SQLAlchemyError as e:
                self.mark_disconnected()
                raise StoreUnavailable("Database unavailable", details=error_message(e)) from e

    def dispose(self) -> None:
        if self._engine is not None:
            logger.info("🔌 Closing database connection pool")
            self._engine.dispose()
        self._engine = None
        self._session_factory = None


# ---------------------------------------------------
# ERROR TRANSLATION
# ---------------------------------------------------

@contextmanager
def store_guard(db: Session, message: str) -> Iterator[None]:
    """
    Roll back and re-raise SQLAlchemy failures as StoreError
    (StoreUnavailable when the connection itself was lost, which also
    marks the owning pool disconnected).
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ {message}: {error_message(e)}")
        if isinstance(e, DBAPIError) and e.connection_invalidated:
            database = db.info.get("database")
            if database is not None:
                database.mark_disconnected()
            raise StoreUnavailable(message, details=error_message(e)) from e
        raise StoreError(message, details=error_message(e)) from e


# ---------------------------------------------------
# FASTAPI DEPENDENCY
# ---------------------------------------------------

def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """
    FastAPI dependency to yield a SQLAlchemy session from the app's pool.
    Use in your route functions as:
        def some_route(..., db: Session = Depends(get_db)):
            ...
    """
    with get_database(request).session() as db:
        yield db
