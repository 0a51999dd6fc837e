"""
Database connection contract.

A Database wraps one SQLAlchemy engine for a chosen dialect. Repositories
receive sessions from it explicitly; there is no process-wide engine.
"""
from contextlib import contextmanager
from typing import Iterator, Optional
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from constants import Dialect
from exceptions import ConfigurationError, PersistenceError

logger = logging.getLogger(__name__)

Base = declarative_base()

MEMORY_DSN = ':memory:'


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.close()


class Database:
    """
    Connection contract shared by every backend.

    Build one with Database.postgres(), Database.sqlite() or
    Database.from_settings(), then call connect() before handing sessions
    to repositories and close() on shutdown.
    """

    def __init__(self, dialect: Dialect, dsn: str, debug: bool = False, auto_migrate: bool = False):
        self.dialect = dialect
        self.dsn = dsn
        self.debug = debug
        self.auto_migrate = auto_migrate
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @classmethod
    def postgres(cls, dsn: str, debug: bool = False, auto_migrate: bool = False) -> 'Database':
        """
        Network-connected PostgreSQL backend.

        Args:
            dsn: Either a full SQLAlchemy URL or a libpq DSN
                 ("host=... user=... dbname=...")
        """
        if not dsn:
            raise ConfigurationError("PostgreSQL DSN is required", missing_keys=['DSN'])
        return cls(Dialect.POSTGRES, dsn, debug=debug, auto_migrate=auto_migrate)

    @classmethod
    def sqlite(cls, path: str = MEMORY_DSN, debug: bool = False, auto_migrate: bool = True) -> 'Database':
        """
        Embedded SQLite backend. Defaults to a migrated in-memory database,
        which is what the test suite uses.
        """
        return cls(Dialect.SQLITE, path or MEMORY_DSN, debug=debug, auto_migrate=auto_migrate)

    @classmethod
    def from_settings(cls, settings) -> 'Database':
        """
        Select the backend from configuration.

        Uses the *_TEST pair when settings.env is 'test'.

        Raises:
            ConfigurationError: If the configured dialect is not supported
        """
        try:
            dialect = Dialect.from_string(settings.db_type_for_env)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported database type: {settings.db_type_for_env!r}",
                missing_keys=['DB_TYPE_TEST' if settings.is_test else 'DB_TYPE'],
            )

        constructors = {
            Dialect.POSTGRES: cls.postgres,
            Dialect.SQLITE: cls.sqlite,
        }
        return constructors[dialect](
            settings.dsn_for_env,
            debug=settings.debug,
            auto_migrate=settings.auto_migrate_db,
        )

    @property
    def url(self) -> str:
        if self.dialect == Dialect.SQLITE:
            if self.dsn.startswith('sqlite:'):
                return self.dsn
            return f'sqlite:///{self.dsn}'
        if '://' in self.dsn:
            return self.dsn
        # libpq keyword DSN is passed through to psycopg2 via connect_args
        return 'postgresql+psycopg2://'

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def _engine_kwargs(self) -> dict:
        if self.dialect == Dialect.SQLITE:
            kwargs = {'connect_args': {'check_same_thread': False}}
            if self.dsn in (MEMORY_DSN, 'sqlite://', 'sqlite:///:memory:'):
                # Every session must see the same in-memory database
                kwargs['poolclass'] = StaticPool
            return kwargs

        kwargs = {
            'pool_pre_ping': True,  # Verify connections are alive before using
            'pool_recycle': 3600,  # Recycle connections after 1 hour to prevent stale connections
        }
        if '://' not in self.dsn:
            kwargs['connect_args'] = {'dsn': self.dsn}
        return kwargs

    def connect(self) -> Engine:
        """
        Open the engine and optionally migrate the schema.

        Returns:
            The SQLAlchemy engine

        Raises:
            PersistenceError: If the engine cannot be created or migration fails
        """
        if self.engine is not None:
            return self.engine

        try:
            engine = create_engine(self.url, echo=self.debug, **self._engine_kwargs())
        except Exception as e:
            raise PersistenceError('connect', f"Failed to create {self.dialect.value} engine: {e}") from e

        if self.dialect == Dialect.SQLITE:
            event.listen(engine, "connect", _set_sqlite_pragma)

        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Connected to {self.dialect.value} database")

        if self.auto_migrate:
            from init_db import init_database
            init_database(engine)

        return engine

    def session(self) -> Session:
        """Open a new session, connecting first if needed."""
        if self._session_factory is None:
            self.connect()
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a session that is closed on exit."""
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def get_db(self) -> Iterator[Session]:
        """Dependency for FastAPI routes"""
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        """Dispose of the engine and all pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info(f"Closed {self.dialect.value} database")
        self.engine = None
        self._session_factory = None
