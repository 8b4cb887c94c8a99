"""
CLI for running and inspecting the user-graph GraphQL server.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from api.schema import build_graph, create_executor
from common.env import env
from common.logger import error, get_logger, setup_logging, success
from engine import ExecutionRequest, print_sdl
from store import DEFAULT_USERS, DuplicateUserError, SQLiteUserStore, StoreError

logger = get_logger(__name__)


def cmd_serve(args):
    """Start the HTTP server."""
    import uvicorn

    setup_logging(level=args.log_level)
    logger.info(f"Serving GraphQL on http://{args.host}:{args.port}{env.graphql_path()}")

    try:
        uvicorn.run(
            "api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


def cmd_schema(args):
    """Print the schema in SDL."""
    sdl = print_sdl(build_graph())
    if args.output:
        Path(args.output).write_text(sdl + "\n")
        success(f"Schema written to {args.output}")
    else:
        print(sdl)


def cmd_query(args):
    """Execute one GraphQL request locally and print the JSON response."""
    if args.file:
        query = Path(args.file).read_text()
    elif args.query:
        query = args.query
    else:
        error("Provide a query string or --file")
        sys.exit(1)

    try:
        variables = json.loads(args.variables) if args.variables else {}
    except json.JSONDecodeError as e:
        error(f"--variables is not valid JSON: {e}")
        sys.exit(1)
    if not isinstance(variables, dict):
        error("--variables must be a JSON object")
        sys.exit(1)

    request = ExecutionRequest(query=query, operation_name=args.operation, variables=variables)
    response = asyncio.run(create_executor().execute(request))
    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    if response.errors:
        sys.exit(2)


def cmd_seed(args):
    """Create a SQLite user store holding the default users."""
    db_path = Path(args.db_path)
    store = SQLiteUserStore(db_path)
    try:
        store.create_schema()
        count = store.add_users(DEFAULT_USERS)
    except DuplicateUserError:
        error(f"{db_path} already contains the default users")
        sys.exit(1)
    except StoreError as e:
        error(str(e))
        sys.exit(1)
    success(f"Seeded {count} user(s) into {db_path}")


def main():
    """Main entry point for the user-graph CLI."""
    parser = argparse.ArgumentParser(
        description="Minimal GraphQL server for user lookups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the GraphQL HTTP server",
    )
    serve_parser.add_argument(
        "--host",
        default=env.graphql_host(),
        help=f"Bind address (default: {env.graphql_host()})",
    )
    serve_parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=env.graphql_port(),
        help=f"Port (default: {env.graphql_port()})",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )
    serve_parser.add_argument(
        "--log-level",
        default=env.log_level().lower(),
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (default: info)",
    )

    # Schema command
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the GraphQL schema (SDL)",
    )
    schema_parser.add_argument(
        "--output",
        "-o",
        help="Write the schema to this file instead of stdout",
    )

    # Query command
    query_parser = subparsers.add_parser(
        "query",
        help="Run a GraphQL query without starting the server",
    )
    query_parser.add_argument(
        "query",
        nargs="?",
        help="GraphQL query text",
    )
    query_parser.add_argument(
        "--file",
        "-f",
        help="Read the query from a file",
    )
    query_parser.add_argument(
        "--variables",
        "-v",
        help="Variables as a JSON object",
    )
    query_parser.add_argument(
        "--operation",
        "-o",
        help="Operation name to execute",
    )

    # Seed command
    seed_parser = subparsers.add_parser(
        "seed",
        help="Create a SQLite user store with the default users",
    )
    seed_parser.add_argument(
        "--db-path",
        "-d",
        default=str(env.user_store_path()),
        help=f"SQLite database file (default: {env.user_store_path()})",
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "schema":
        cmd_schema(args)
    elif args.command == "query":
        cmd_query(args)
    elif args.command == "seed":
        cmd_seed(args)


if __name__ == "__main__":
    main()
