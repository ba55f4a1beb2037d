"""Sentry API module for MCP Sentry.

This module provides the fetcher that turns tool arguments into
authenticated Sentry API requests and shaped results.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..exceptions import SentryApiError
from ..logging_config import log_operation
from ..utils.fields import select_fields
from .client import SentryClient
from .config import SentryConfig
from .resources import (
    GET_PROJECT_EVENT,
    LIST_ISSUE_EVENTS,
    LIST_ORGANIZATIONS,
    LIST_PROJECT_ISSUES,
    RESOURCES,
    QueryParam,
    SentryResource,
)
from .results import OperationResult


class SentryFetcher:
    """Runs Sentry resource fetches and shapes their results.

    The fetcher holds configuration only. Each call opens its own HTTP
    client, so concurrent calls share no state.
    """

    def __init__(
        self,
        config: SentryConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Sentry configuration
            transport: Optional httpx transport passed to every client
            logger: Logger for diagnostics, ``null_logger()`` silences it
        """
        self.config = config
        self.transport = transport
        self.logger = logger or logging.getLogger("mcp-sentry.sentry")

    async def fetch(
        self, resource: SentryResource, arguments: Mapping[str, Any]
    ) -> OperationResult:
        """Fetch a resource and shape the response.

        Args:
            resource: The resource to fetch
            arguments: Tool arguments; path parameters, query parameters and
                the optional ``fields`` specification

        Returns:
            A success result with the shaped data, or a failure result. This
            method does not raise for API, network or decoding errors.
        """
        with log_operation(self.logger, resource.name):
            missing = resource.missing_params(arguments)
            if missing:
                message = f"Missing required parameter(s): {', '.join(missing)}"
                self.logger.warning(f"{resource.name} rejected: {message}")
                return OperationResult.failure(resource.output_key, message)

            fields = arguments.get("fields")
            effective_fields = fields if fields is not None else resource.default_fields
            self.logger.debug(
                f"Effective fields for {resource.name}: {effective_fields}"
            )

            try:
                path = resource.build_path(arguments)
                params = resource.build_query(arguments)
                async with SentryClient(
                    self.config, transport=self.transport, logger=self.logger
                ) as client:
                    payload = await client.get(path, params)
            except SentryApiError as e:
                return OperationResult.failure(
                    resource.output_key, str(e), status_code=e.status_code
                )
            except Exception as e:
                self.logger.error(
                    f"Network or other error in {resource.name}: {e!r}", exc_info=True
                )
                return OperationResult.failure(
                    resource.output_key,
                    f"An unexpected error occurred: {_describe(e)}",
                )

            return OperationResult.success(
                resource.output_key, select_fields(payload, effective_fields)
            )

    async def list_organizations(self, **arguments: Any) -> OperationResult:
        """Return the organizations available to the authenticated token."""
        return await self.fetch(LIST_ORGANIZATIONS, arguments)

    async def list_project_issues(self, **arguments: Any) -> OperationResult:
        """Return the issues of a project."""
        return await self.fetch(LIST_PROJECT_ISSUES, arguments)

    async def list_issue_events(self, **arguments: Any) -> OperationResult:
        """Return the events of an issue."""
        return await self.fetch(LIST_ISSUE_EVENTS, arguments)

    async def get_project_event(self, **arguments: Any) -> OperationResult:
        """Return one event of a project, including its entries."""
        return await self.fetch(GET_PROJECT_EVENT, arguments)


def _describe(error: Exception) -> str:
    # httpx timeouts and some transport errors carry an empty message
    return str(error) or type(error).__name__


__all__ = [
    "OperationResult",
    "QueryParam",
    "RESOURCES",
    "SentryClient",
    "SentryConfig",
    "SentryFetcher",
    "SentryResource",
]
