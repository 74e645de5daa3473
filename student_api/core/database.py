import logging
import os
import tempfile

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .exceptions import StorageError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def create_db_engine(database_path: str, echo: bool = False) -> Engine:
    """
    Create the SQLite engine shared by every request.

    The connection is used from FastAPI's worker threads, so the sqlite3
    same-thread check is disabled. ``:memory:`` keeps a single connection
    alive for the lifetime of the engine, otherwise every checkout would
    see a fresh empty database.
    """
    if database_path == MEMORY_PATH:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
    else:
        engine = create_engine(
            URL.create("sqlite", database=database_path),
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        logger.debug(f"New database connection established to {database_path}")

    return engine


# =============================================================================
# STORAGE PROBES
# =============================================================================

def ensure_directory(database_path: str) -> str:
    """Create the directory holding the database file. Idempotent."""
    directory = os.path.dirname(os.path.abspath(database_path))
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise StorageError(f"failed to create database directory {directory}: {e}") from e
    return directory


def check_file_access(database_path: str) -> None:
    """Open an existing database file for reading and for writing."""
    try:
        with open(database_path, "rb"):
            pass
    except OSError as e:
        raise StorageError(f"database file {database_path} exists but is not readable: {e}") from e

    try:
        with open(database_path, "r+b"):
            pass
    except OSError as e:
        raise StorageError(f"database file {database_path} exists but is not writable: {e}") from e


def check_directory_writable(directory: str) -> None:
    """Create and remove a hidden file to prove a new database can be created."""
    try:
        fd, probe_path = tempfile.mkstemp(prefix=".students_db_probe_", dir=directory)
        os.close(fd)
        os.remove(probe_path)
    except OSError as e:
        raise StorageError(f"database directory {directory} is not writable: {e}") from e


def check_write_transaction(engine: Engine) -> None:
    """
    Begin and roll back a write transaction.

    BEGIN IMMEDIATE takes the write lock, which fails on read-only
    filesystems and files that stat() reports as writable.
    """
    try:
        with engine.connect() as connection:
            connection.exec_driver_sql("BEGIN IMMEDIATE")
            connection.exec_driver_sql("ROLLBACK")
    except SQLAlchemyError as e:
        raise StorageError(f"database is not writable: {e}") from e


def create_database_tables(engine: Engine) -> None:
    """Create all tables defined in models. No-op for existing tables."""
    # Register the models on Base.metadata
    from student_api.models import student  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise StorageError(f"failed to create tables: {e}") from e


# =============================================================================
# INITIALIZATION
# =============================================================================

def init_storage(database_path: str, strict: bool = True, echo: bool = False) -> Engine:
    """
    Prepare the database before serving traffic.

    On return the directory exists, the file is readable and writable (or
    can be created), a write transaction succeeded and the schema exists.
    Raises StorageError otherwise.

    Args:
        database_path: path of the SQLite file, or ``:memory:``
        strict: run the access probes and the test transaction
        echo: log every SQL statement

    Returns:
        Engine: the engine to hand to the record store
    """
    logger.info(f"Initializing database at {database_path}...")

    if database_path != MEMORY_PATH:
        directory = ensure_directory(database_path)
        if strict:
            if os.path.exists(database_path):
                check_file_access(database_path)
            else:
                check_directory_writable(directory)

    engine = create_db_engine(database_path, echo=echo)
    try:
        if strict:
            check_write_transaction(engine)
        create_database_tables(engine)
    except StorageError:
        engine.dispose()
        raise

    logger.info("✅ Database initialized successfully!")
    return engine
