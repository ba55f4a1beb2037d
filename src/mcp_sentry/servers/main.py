"""Main FastMCP server setup for Sentry integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_sentry.logging_config import mask_sensitive
from mcp_sentry.sentry.config import SentryConfig

from .context import MainAppContext
from .sentry import sentry_mcp

logger = logging.getLogger("mcp-sentry.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Sentry MCP server lifespan starting...")
    sentry_config = SentryConfig.from_env()
    logger.info(
        f"Sentry configuration loaded: host={sentry_config.url}, "
        f"token={mask_sensitive(sentry_config.access_token)}, "
        f"ssl_verify={sentry_config.ssl_verify}, timeout={sentry_config.timeout}s"
    )

    app_context = MainAppContext(sentry_config=sentry_config)
    try:
        yield {"app_lifespan_context": app_context}
    finally:
        logger.info("Main Sentry MCP server lifespan shutdown complete.")


main_mcp = FastMCP(
    name="sentry-api-mcp-stdio",
    instructions="Read-only access to Sentry organizations, issues and events.",
    lifespan=main_lifespan,
)
main_mcp.mount(sentry_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)


async def run_server(transport: str = "stdio", port: int = 8000) -> None:
    """Run the Sentry MCP server with the given transport."""
    if transport == "stdio":
        await main_mcp.run_async(transport="stdio")
    else:
        await main_mcp.run_async(transport=transport, host="0.0.0.0", port=port)
