"""
Module: pizzeria_kernel.db.engine
Responsibility: SQLAlchemy engine construction, session factory creation,
    transactional scope utilities and store-conflict classification.
Architecture position: Kernel > DB.  May import from db/base.py.  MUST NOT
    import from services/, selectors/ or domain/ (except create_tables, which
    imports models so Base.metadata is populated).

Invariants enforced:
    - No module-level engine: callers build an Engine and a sessionmaker and
      pass them explicitly to the services that need them.
    - PostgreSQL sessions run at REPEATABLE READ (snapshot isolation).
    - SQLite transactions start with BEGIN IMMEDIATE, which takes the write
      lock up front and serializes placements; a busy timeout makes a
      contender wait instead of failing.

Failure modes:
    - OperationalError carrying SQLSTATE 40001/40P01 (PostgreSQL) or
      "database is locked" (SQLite) is a retryable conflict, see
      is_retryable_conflict().
    - Connection pool exhaustion if pool_size + max_overflow is exceeded.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pizzeria_kernel.logging_config import get_logger

logger = get_logger("db.engine")

POSTGRES_ISOLATION_LEVEL = "REPEATABLE READ"

# SQLSTATE codes PostgreSQL uses when it aborts a transaction for contention
_RETRYABLE_PG_CODES = frozenset({"40001", "40P01"})


def create_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 20,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
    sqlite_busy_timeout: float = 30.0,
) -> Engine:
    """
    Build an Engine for a PostgreSQL or SQLite database URL.

    Args:
        database_url: SQLAlchemy URL (postgresql://... or sqlite:///...).
        echo: If True, log all SQL statements.
        pool_size: Connections kept in the pool (PostgreSQL only).
        max_overflow: Max connections beyond pool_size (PostgreSQL only).
        pool_pre_ping: Test connections before use (PostgreSQL only).
        pool_timeout: Seconds to wait for a pooled connection (PostgreSQL only).
        pool_recycle: Seconds after which a connection is recycled (PostgreSQL only).
        sqlite_busy_timeout: Seconds a SQLite writer waits for the lock.

    Returns:
        SQLAlchemy Engine instance.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        engine = _create_sqlite_engine(database_url, echo, sqlite_busy_timeout)
    else:
        engine = create_engine(
            database_url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            isolation_level=POSTGRES_ISOLATION_LEVEL,
        )

    logger.info(
        "engine_initialized",
        extra={
            "dialect": engine.dialect.name,
            "database": url.database,
            "echo": echo,
        },
    )
    return engine


def _create_sqlite_engine(
    database_url: str,
    echo: bool,
    busy_timeout: float,
) -> Engine:
    url = make_url(database_url)
    in_memory = url.database in (None, "", ":memory:")

    kwargs: dict = {
        "echo": echo,
        "connect_args": {"check_same_thread": False, "timeout": busy_timeout},
    }
    if in_memory:
        kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Take transaction control away from pysqlite; "begin" below emits it.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create the session factory the kernel services receive.

    Objects stay readable after commit (expire_on_commit=False) so result
    DTOs can be built after the transaction has ended.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(
    session_factory: sessionmaker[Session],
) -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Postconditions: On normal exit, session is committed and closed.
        On exception, session is rolled back and closed.  The exception
        is re-raised to the caller.

    Usage:
        with session_scope(factory) as session:
            session.add(entity)
            # Commits on successful exit, rolls back on exception
    """
    session = session_factory()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.debug("transaction_rolled_back")
        raise
    finally:
        session.close()


def is_retryable_conflict(exc: BaseException) -> bool:
    """
    Classify a store exception as transient contention.

    True for PostgreSQL serialization failures and deadlocks and for SQLite
    lock timeouts; these abort the whole transaction, which is safe to run
    again from the start.
    """
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode in _RETRYABLE_PG_CODES:
        return True
    message = str(orig).lower()
    return "database is locked" in message or "database table is locked" in message


def create_tables(engine: Engine) -> None:
    """Create all tables defined in the models (idempotent)."""
    from pizzeria_kernel.db.base import Base
    import pizzeria_kernel.models  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


def drop_tables(engine: Engine) -> None:
    """
    Drop all tables. Use with caution - primarily for testing.
    """
    from pizzeria_kernel.db.base import Base
    import pizzeria_kernel.models  # noqa: F401

    Base.metadata.drop_all(engine)


def is_postgres(engine: Engine) -> bool:
    """Check if the engine is PostgreSQL."""
    return engine.dialect.name == "postgresql"
