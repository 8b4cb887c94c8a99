"""Factory for creating user stores from configuration."""

from dataclasses import dataclass
from pathlib import Path

from .interface import UserStore
from .memory import InMemoryUserStore
from .sqlite_store import SQLiteUserStore
from .types import StoreType


@dataclass
class StoreConfig:
    """User store configuration.

    Attributes:
        store_type: Backend ('memory' or 'sqlite')
        db_path: Path to the SQLite database file (SQLite only)
        latency: Simulated lookup latency in seconds (memory only)
    """

    store_type: StoreType | str
    db_path: Path | None = None
    latency: float = 0.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.store_type, str):
            try:
                self.store_type = StoreType(self.store_type.lower())
            except ValueError as e:
                raise ValueError(
                    f"Unsupported user store type: {self.store_type}. "
                    f"Must be one of: {', '.join(t.value for t in StoreType)}"
                ) from e

        if self.store_type == StoreType.SQLITE:
            if self.db_path is None:
                raise ValueError("db_path is required for the SQLite user store")
            if isinstance(self.db_path, str):
                self.db_path = Path(self.db_path)


def create_store(config: StoreConfig) -> UserStore:
    """Create the user store described by ``config``.

    Example:
        >>> create_store(StoreConfig(store_type="memory"))
        >>> create_store(StoreConfig(store_type="sqlite", db_path=Path("./data/users.db")))
    """
    if config.store_type == StoreType.SQLITE:
        return SQLiteUserStore(config.db_path)
    return InMemoryUserStore(latency=config.latency)


def get_store() -> UserStore:
    """Create the user store selected by environment configuration."""
    from common.env import env

    config = StoreConfig(
        store_type=env.user_store_type(),
        db_path=env.user_store_path(),
        latency=env.user_store_latency(),
    )
    return create_store(config)
