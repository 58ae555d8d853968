from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from stackhelper.config import settings
from stackhelper.exceptions import PersistenceError

logger = logging.getLogger(__name__)

READ_ONLY_KEY = 'read_only'


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite gets thread-sharing enabled (FastAPI runs sync routes in a
    threadpool) and in-memory databases share one connection.
    """
    if database_url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}}
        if ':memory:' in database_url or database_url in ('sqlite://', 'sqlite:///'):
            kwargs['poolclass'] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, 'connect', set_sqlite_pragma)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True, pool_recycle=3600)


def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.database_url, echo=settings.db_echo)
SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


@event.listens_for(Session, "before_flush")
def _refuse_flush_when_read_only(session, flush_context, instances):
    if session.info.get(READ_ONLY_KEY):
        raise PersistenceError("flush", "Attempted to write inside a read-only transaction")


def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, read_only: bool = False):
    """
    Run a block inside one unit of work.

    Read-only blocks refuse any flush and are always rolled back. Write
    blocks are committed on success and rolled back on any exception.
    """
    if read_only:
        previous = db.info.get(READ_ONLY_KEY, False)
        db.info[READ_ONLY_KEY] = True
        try:
            yield db
        finally:
            db.info[READ_ONLY_KEY] = previous
            if not previous:
                db.rollback()
        return

    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_database(bind: Engine | None = None):
    """Create all tables known to the declarative Base."""
    # Import models so their tables are registered on Base.metadata
    import stackhelper.models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(target)
    logger.info(f"Database initialized: {target.url}")
