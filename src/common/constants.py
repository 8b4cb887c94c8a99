"""Shared constants for the user-graph application.

For environment-based configuration (bind address, store backend, etc.),
use the env module:
    from common.env import env
    port = env.graphql_port()
"""

from pathlib import Path

API_NAME = "User Graph API"
API_VERSION = "0.1.0"

# Server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3030
GRAPHQL_PATH = "/graphql"

# Data directories
DATA_DIR = Path("./data")
USER_STORE_PATH = DATA_DIR / "users.db"
