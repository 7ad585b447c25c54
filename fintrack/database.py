import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings


logger = logging.getLogger(__name__)


def apply_sqlite_pragmas(engine: Engine) -> bool:
    """Switch SQLite to WAL with a generous busy timeout to reduce locking."""
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
            conn.exec_driver_sql("PRAGMA busy_timeout=60000;")
    except OperationalError as e:
        # The database may be momentarily locked during reloader startup.
        logger.warning("Could not apply SQLite pragmas, continuing without them: %s", e)
        return False
    return True


def build_engine(database_url: str, echo: bool = False) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    sqlite_engine = create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False, "timeout": 60},
        poolclass=NullPool,  # avoid multiple pooled connections holding write locks
    )
    apply_sqlite_pragmas(sqlite_engine)
    return sqlite_engine


engine = build_engine(settings.database_url, settings.database_echo)


def get_session():
    with Session(engine) as session:
        yield session


def init_db():
    from .models import user, transaction, budget  # noqa: F401

    SQLModel.metadata.create_all(engine)
