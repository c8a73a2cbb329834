"""
SQLite connection management for the pdfshelf index.

One DatabaseManager per process points at the index file. The file comes
from config.json, or from a database name given on the command line: a
bare name lives in the per-user config directory, anything with a path
separator is used as a path. Connections run in WAL mode so searches can
read while an `add` is writing.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from ..core import get_config, get_logger, DatabaseError
from ..core.config_loader import resolve_database_path
from ..utils import ensure_directory

logger = get_logger(__name__)


class DatabaseManager:
    """
    Opens connections to the index file.

    Every connection is short-lived: callers take one through connection()
    for reads or cursor() for writes, and it is closed on exit.
    """

    def __init__(self, db_path: Path = None):
        """
        Initialize database manager.

        Args:
            db_path: Path to the index file. Defaults to config value.
        """
        if db_path is None:
            db_path = get_config().paths.database_path

        self.db_path = Path(db_path)
        ensure_directory(self.db_path.parent)

    def _create_connection(self) -> sqlite3.Connection:
        """Open the index file with Row access and WAL journaling."""
        try:
            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=30.0
            )

            conn.row_factory = sqlite3.Row

            # fails here, not at connect, when the file is not a database
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.execute("PRAGMA temp_store=MEMORY")

            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Cannot open index {self.db_path}: {e}",
                {"path": str(self.db_path)}
            )

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Read access to the index.

        SQLite errors raised by the caller's queries propagate unchanged.

        Yields:
            SQLite connection with Row factory enabled.
        """
        conn = self._create_connection()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self, commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
        """
        Write access to the index, as one transaction.

        The transaction is committed on success and rolled back on any
        error. SQLite errors are reported as DatabaseError naming the file.

        Args:
            commit: Whether to commit on successful exit.

        Yields:
            SQLite cursor for query execution.

        Raises:
            DatabaseError: If a statement fails.
        """
        conn = self._create_connection()
        cursor = conn.cursor()

        try:
            yield cursor
            if commit:
                conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise DatabaseError(
                f"Index write failed: {e}",
                {"path": str(self.db_path), "type": e.__class__.__name__}
            ) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get the singleton DatabaseManager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def configure_database(
    name: Union[str, Path] = None,
    base_dir: Path = None
) -> DatabaseManager:
    """
    Point the singleton DatabaseManager at an index.

    Args:
        name: Database name or path, as given with --db. A bare name is
              placed in the user config directory. None uses config.json.
        base_dir: Base for relative paths in name.

    Returns:
        The new DatabaseManager.
    """
    global _db_manager

    db_path = None
    if name is not None:
        db_path = resolve_database_path(str(name), base_dir)

    _db_manager = DatabaseManager(db_path)
    logger.debug(f"Using index: {_db_manager.db_path}")
    return _db_manager


@contextmanager
def get_connection() -> Generator[sqlite3.Connection, None, None]:
    """Read access to the configured index."""
    with get_db_manager().connection() as conn:
        yield conn


@contextmanager
def get_cursor(commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
    """Write access to the configured index; see DatabaseManager.cursor."""
    with get_db_manager().cursor(commit=commit) as cur:
        yield cur
