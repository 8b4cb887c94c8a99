"""SQLite-backed user store.

sqlite3 is blocking, so every lookup runs in a worker thread with its own
short-lived connection; the event loop keeps serving other requests while
the query runs.
"""

import asyncio
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from common.logger import get_logger

from .interface import UserStore
from .types import DuplicateUserError, StoreConnectionError, StoreError, User

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL
)
"""


class SQLiteUserStore(UserStore):
    """User store reading from a SQLite database file."""

    def __init__(self, db_path: str | Path):
        """Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            conn.row_factory = sqlite3.Row
            return conn
        except sqlite3.Error as e:
            raise StoreConnectionError(f"Failed to open SQLite user store: {e}") from e

    def create_schema(self) -> None:
        """Create the users table if it does not exist."""
        conn = self._connect()
        try:
            conn.execute(SCHEMA_SQL)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to create users table: {e}") from e
        finally:
            conn.close()

    def add_users(self, users: Iterable[User]) -> int:
        """Insert users.

        Returns:
            Number of users inserted

        Raises:
            DuplicateUserError: If a user id already exists
        """
        conn = self._connect()
        try:
            rows = [(user.id, user.name, user.email) for user in users]
            conn.executemany("INSERT INTO users (id, name, email) VALUES (?, ?, ?)", rows)
            conn.commit()
            return len(rows)
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise DuplicateUserError(f"Failed to insert users: {e}") from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Failed to insert users: {e}") from e
        finally:
            conn.close()

    def _fetch_user(self, user_id: str) -> User | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, name, email FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read user {user_id!r}: {e}") from e
        finally:
            conn.close()

        if row is None:
            return None
        return User(id=row["id"], name=row["name"], email=row["email"])

    async def get_user(self, user_id: str) -> User | None:
        user = await asyncio.to_thread(self._fetch_user, user_id)
        if user is None:
            logger.debug(f"No user with id {user_id!r} in {self.db_path}")
        return user
