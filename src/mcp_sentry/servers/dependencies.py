"""Dependency providers for SentryFetcher with context awareness.

Provides get_sentry_fetcher for use in tool functions.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_sentry.sentry import SentryFetcher
from mcp_sentry.servers.context import MainAppContext

logger = logging.getLogger("mcp-sentry.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext published by the server lifespan, if any."""
    request_context = ctx.request_context
    lifespan_ctx = request_context.lifespan_context if request_context else None
    if isinstance(lifespan_ctx, MainAppContext):
        return lifespan_ctx
    if isinstance(lifespan_ctx, dict):
        app_ctx = lifespan_ctx.get("app_lifespan_context")
        if isinstance(app_ctx, MainAppContext):
            return app_ctx
    return None


async def get_sentry_fetcher(ctx: Context) -> SentryFetcher:
    """Returns a SentryFetcher built from the server's Sentry configuration.

    Raises:
        ValueError: If the Sentry client is not configured.
    """
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.sentry_config is None:
        logger.error("Sentry configuration is not available in the lifespan context.")
        raise ValueError(
            "Sentry client (fetcher) not available. Ensure server is configured correctly."
        )
    logger.debug("get_sentry_fetcher: creating fetcher from lifespan config.")
    return SentryFetcher(config=app_ctx.sentry_config)
