"""Environment configuration interface for user-graph.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place. Values can also
come from a ``.env`` file in the working directory.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from common.constants import DEFAULT_HOST, DEFAULT_PORT, GRAPHQL_PATH, USER_STORE_PATH

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def graphql_host() -> str:
        """Get the address the HTTP server binds to.

        Returns:
            Bind address, defaults to '127.0.0.1'
        """
        return os.getenv("GRAPHQL_HOST", DEFAULT_HOST)

    @staticmethod
    def graphql_port() -> int:
        """Get the port the HTTP server listens on.

        Returns:
            Port, defaults to 3030
        """
        return int(os.getenv("GRAPHQL_PORT", str(DEFAULT_PORT)))

    @staticmethod
    def graphql_path() -> str:
        """Get the path serving both the GraphQL endpoint and the console.

        Returns:
            URL path, defaults to '/graphql'
        """
        path = os.getenv("GRAPHQL_PATH", GRAPHQL_PATH)
        return path if path.startswith("/") else f"/{path}"

    @staticmethod
    def request_timeout() -> float:
        """Get the per-request execution timeout.

        Returns:
            Timeout in seconds, defaults to 30.0. Zero or less disables it.
        """
        return float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30.0"))

    @staticmethod
    def cors_origins() -> list[str]:
        """Get the origins allowed to call the API from a browser.

        Returns:
            List of origins, defaults to ['http://localhost:3000']
        """
        raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @staticmethod
    def user_store_type() -> str:
        """Get the user store backend (memory or sqlite).

        Returns:
            Store type, defaults to 'memory'
        """
        return os.getenv("USER_STORE_TYPE", "memory")

    @staticmethod
    def user_store_path() -> Path:
        """Get the SQLite user store file path.

        Returns:
            Path to SQLite database file, defaults to ./data/users.db
        """
        return Path(os.getenv("USER_STORE_PATH", str(USER_STORE_PATH)))

    @staticmethod
    def user_store_latency() -> float:
        """Get the simulated lookup latency of the in-memory store.

        Returns:
            Latency in seconds, defaults to 0.0
        """
        return float(os.getenv("USER_STORE_LATENCY", "0.0"))

    @staticmethod
    def log_level() -> str:
        """Get the default logging level.

        Returns:
            Level name, defaults to 'INFO'
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()


# Singleton instance for convenient access
env = Environment()
