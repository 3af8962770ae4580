"""
Module: hr_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and transactional scope utilities.  This is the single point of database
    connection configuration for the reporting kernel.
Architecture position: Kernel > DB.  May import from db/base.py, exceptions.py
    and logging_config.py.  MUST NOT import from selectors/ or outer layers
    (except create_tables/drop_tables which import models).

Invariants enforced:
    - Report reads run inside read_only_scope(): one session, one transaction,
      a snapshot-consistent isolation level, and an unconditional rollback at
      the end.  Nothing is ever committed from a read-only scope.
    - PostgreSQL read scopes use REPEATABLE READ + READ ONLY, which gives a
      stable snapshot without taking locks that block writers.
    - File-backed SQLite databases run in WAL mode and SQLAlchemy emits BEGIN
      itself, so the first SELECT of a scope fixes its snapshot and writers
      on other connections can still commit.  The sqlite3 driver on its own
      only opens a transaction before DML.
    - In-memory SQLite shares one connection across all sessions and has no
      isolation between them.

Failure modes:
    - RuntimeError if get_engine/get_session/get_session_factory called before
      init_engine_from_url().
    - DataAccessError if a read-only scope cannot obtain a connection, or if
      its closing rollback fails while no other error is propagating.
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from hr_kernel.exceptions import DataAccessError
from hr_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

# Module-level engine and session factory
_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None

_READ_ONLY_OPTIONS: dict[str, dict[str, Any]] = {
    "postgresql": {"isolation_level": "REPEATABLE READ", "postgresql_readonly": True},
}


def _enable_sqlite_transactions(engine: Engine) -> None:
    """Have SQLAlchemy own BEGIN on a file-backed SQLite engine."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Build an engine for a database URL without installing it module-wide.

    Pooling arguments apply to server databases only.  An in-memory SQLite
    URL gets a StaticPool so every session sees the same database.

    Args:
        database_url: SQLAlchemy connection URL.
        echo: If True, log all SQL statements.
        pool_size: Number of connections to keep in the pool.
        max_overflow: Max connections beyond pool_size.
        pool_pre_ping: If True, test connections before use.
        pool_timeout: Seconds to wait for a pooled connection.
        pool_recycle: Seconds after which a connection is recycled.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(
            url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
        )

    connect_args = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        return create_engine(
            url, echo=echo, connect_args=connect_args, poolclass=StaticPool
        )

    engine = create_engine(url, echo=echo, connect_args=connect_args)
    _enable_sqlite_transactions(engine)
    return engine


def init_engine_from_url(database_url: str, echo: bool = False, **pool_options: Any) -> Engine:
    """
    Initialize the module-level engine and session factory.

    Accepts the pooling keywords of create_engine_from_url().
    """
    global _engine, _SessionFactory

    _engine = create_engine_from_url(database_url, echo=echo, **pool_options)
    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={
            "dialect": _engine.dialect.name,
            "echo": echo,
        },
    )

    return _engine


def get_engine() -> Engine:
    """
    Get the current engine instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


def get_session_factory() -> sessionmaker[Session]:
    """
    Get the session factory for creating sessions.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a read-write transactional scope around a series of operations.

    Used by seeding and administrative scripts; report generation uses
    read_only_scope() instead.

    Usage:
        with session_scope() as session:
            session.add(entity)
            # Commits on successful exit, rolls back on exception
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


@contextmanager
def read_only_scope(
    session_factory: Callable[[], Session] | None = None,
) -> Generator[Session, None, None]:
    """
    Provide a snapshot-consistent, read-only transactional scope.

    Every query issued through the yielded session runs in the same database
    transaction, so a dashboard built from several grouped queries observes
    one state of the store.  The transaction is always rolled back.

    Args:
        session_factory: Callable returning a new Session.  Defaults to the
            module-level factory from init_engine_from_url().

    Raises:
        DataAccessError: If a connection cannot be obtained, or the closing
            rollback fails after a clean exit.
    """
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        dialect = session.get_bind().dialect.name
        options = _READ_ONLY_OPTIONS.get(dialect, {})
        try:
            session.connection(execution_options=options)
        except SQLAlchemyError as exc:
            logger.error(
                "read_only_scope_connect_failed",
                extra={"dialect": dialect},
                exc_info=True,
            )
            raise DataAccessError("open_read_only_scope", str(exc)) from exc
        logger.debug("read_only_scope_started", extra={"dialect": dialect})
        yield session
    except BaseException:
        _end_read_only_scope(session, error_in_flight=True)
        raise
    else:
        _end_read_only_scope(session, error_in_flight=False)


def _end_read_only_scope(session: Session, error_in_flight: bool) -> None:
    # A failed rollback must not replace the error that ended the scope.
    try:
        session.rollback()
    except SQLAlchemyError as exc:
        logger.error("read_only_scope_rollback_failed", exc_info=True)
        if not error_in_flight:
            raise DataAccessError("close_read_only_scope", str(exc)) from exc
    finally:
        session.close()
        logger.debug("read_only_scope_closed")


def create_tables() -> None:
    """
    Create all tables defined in hr_kernel.models.

    Raises:
        RuntimeError: If engine is not initialized.
    """
    from hr_kernel.db.base import Base
    import hr_kernel.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """
    Drop all tables. Use with caution - primarily for testing.
    """
    from hr_kernel.db.base import Base
    import hr_kernel.models  # noqa: F401

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """
    Reset the engine and session factory.

    Useful for test cleanup.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None
