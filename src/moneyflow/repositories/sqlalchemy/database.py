"""Database connection and session management."""

from typing import Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from moneyflow.config.settings import get_settings

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _install_sqlite_hooks(engine: Engine) -> None:
    """
    Make pysqlite honour transactions the way the ledger needs.

    The driver's own BEGIN handling is switched off so every unit starts with
    BEGIN IMMEDIATE, taking the write lock before the first read; foreign
    keys are enforced per connection.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_ledger_engine(database_url: str, busy_timeout: Optional[float] = None) -> Engine:
    """Create an engine for the ledger database."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False, pool_pre_ping=True)

    if busy_timeout is None:
        busy_timeout = get_settings().sqlite_busy_timeout_seconds
    connect_args = {"check_same_thread": False, "timeout": busy_timeout}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        engine = create_engine(
            database_url,
            connect_args=connect_args,
            poolclass=StaticPool,
            echo=False,
        )
    else:
        engine = create_engine(database_url, connect_args=connect_args, echo=False)
    _install_sqlite_hooks(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Build a session factory bound to ``engine``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_ledger_engine(settings.get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = create_session_factory(get_engine())
    return _SessionLocal


def create_tables(engine: Engine) -> None:
    """Create all ledger tables on ``engine``."""
    from moneyflow.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_db() -> None:
    """Initialize database tables."""
    create_tables(get_engine())


def reset_database() -> None:
    """Reset database state (for reconfiguration)."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None
