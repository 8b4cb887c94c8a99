"""FastAPI application with the GraphQL endpoint for user-graph."""

import asyncio

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from strawberry.http.ides import get_graphql_ide_html

from api.schema import create_executor
from common.constants import API_NAME, API_VERSION
from common.env import env
from common.logger import get_logger
from engine import ExecutionRequest, QueryExecutor, RequestPayloadError

logger = get_logger(__name__)


def _transport_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"errors": [{"message": message}]}, status_code=status_code)


def create_app(
    executor: QueryExecutor | None = None,
    graphql_path: str | None = None,
    request_timeout: float | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        executor: Query executor; defaults to one built over the configured store
        graphql_path: Path of the endpoint and console; defaults to GRAPHQL_PATH
        request_timeout: Seconds before a request is cancelled; defaults to
            REQUEST_TIMEOUT_SECONDS, zero or less disables the timeout

    Returns:
        Configured FastAPI application
    """
    path = graphql_path or env.graphql_path()
    timeout = env.request_timeout() if request_timeout is None else request_timeout

    app = FastAPI(
        title=API_NAME,
        description="GraphQL API for looking up users",
        version=API_VERSION,
    )
    app.state.executor = executor or create_executor()

    # Enable CORS for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=env.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post(path)
    async def graphql_endpoint(request: Request) -> JSONResponse:
        """Execute a GraphQL request.

        GraphQL errors are part of a 200 response; only a malformed body
        (400) or an execution timeout (504) fail at the HTTP level.
        """
        try:
            payload = await request.json()
        except ValueError:
            return _transport_error(400, "Request body must be valid JSON.")

        try:
            execution_request = ExecutionRequest.from_payload(payload)
        except RequestPayloadError as e:
            return _transport_error(400, str(e))

        execution = app.state.executor.execute(execution_request, context={"request": request})
        try:
            if timeout > 0:
                response = await asyncio.wait_for(execution, timeout=timeout)
            else:
                response = await execution
        except asyncio.TimeoutError:
            logger.warning(f"GraphQL request cancelled after {timeout:g}s")
            return _transport_error(504, f"Request did not complete within {timeout:g} seconds.")

        return JSONResponse(response.to_dict())

    @app.get(path, response_class=HTMLResponse)
    async def graphql_console() -> HTMLResponse:
        """Interactive GraphiQL console posting to this same path."""
        return HTMLResponse(get_graphql_ide_html())

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "graphql_endpoint": path,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.debug(f"GraphQL endpoint mounted at {path}")
    return app


app = create_app()
