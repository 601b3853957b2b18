from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pos_backend.config.settings import settings
from pos_backend.database.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Build an engine; SQLite gets FK enforcement so ON DELETE CASCADE holds."""
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(url, echo=echo, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    _engine: Engine = None
    _session_factory: sessionmaker = None

    @classmethod
    def get_engine(cls) -> Engine:
        if cls._engine is None:
            cls._engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        return cls._engine

    @classmethod
    def get_session_factory(cls) -> sessionmaker:
        if cls._session_factory is None:
            cls._session_factory = sessionmaker(bind=cls.get_engine(), expire_on_commit=False)
        return cls._session_factory

    @classmethod
    def reset(cls):
        if cls._engine is not None:
            cls._engine.dispose()
        cls._engine = None
        cls._session_factory = None


def init_db(engine: Optional[Engine] = None) -> None:
    """Create every tenancy table that does not exist yet."""
    # Registers all mapped classes on Base.metadata
    import pos_backend.database.registry  # noqa: F401

    Base.metadata.create_all(engine or Database.get_engine())


def get_db() -> Iterator[Session]:
    session = Database.get_session_factory()()
    try:
        yield session
    finally:
        session.close()
