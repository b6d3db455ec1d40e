from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_sqlite_memory(database_url: str) -> bool:
    return ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:")


def build_engine(database_url: str, debug: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the durable store.

    Raises whatever SQLAlchemy raises for an unknown dialect or a missing
    DB-API driver; callers treat that as the backend being unreachable.
    """
    is_sqlite = database_url.startswith("sqlite")
    engine_kwargs = {}
    connect_args = {}
    if is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": 30.0,  # Wait up to 30 seconds for lock to be released
        }
        if _is_sqlite_memory(database_url):
            # One shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(
        database_url,
        connect_args=connect_args,
        echo=debug,
        pool_pre_ping=True,  # Verify connections before using
        **engine_kwargs,
    )

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enforce foreign keys; enable WAL for file databases"""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not _is_sqlite_memory(database_url):
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA busy_timeout=30000")  # 30 seconds in milliseconds
            cursor.close()
            logger.debug("SQLite pragmas applied")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose objects stay readable after commit"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker):
    """Context manager for database transactions"""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Initialize database tables"""
    from .. import models  # noqa: F401  (registers tables on Base.metadata)

    logger.info("Initializing database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized successfully")
