"""Sentry REST API client."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..exceptions import MCPSentryAuthenticationError, SentryApiError
from .config import SentryConfig

QueryParams = Sequence[tuple[str, str]]


class SentryClient:
    """Async client for the Sentry REST API.

    One client wraps one ``httpx.AsyncClient``; use it as an async context
    manager so the connection pool is closed when the call completes.
    """

    def __init__(
        self,
        config: SentryConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the Sentry client.

        Args:
            config: Sentry configuration
            transport: Optional httpx transport, mainly for tests
            logger: Logger for request diagnostics
        """
        self.config = config
        self.logger = logger or logging.getLogger("mcp-sentry.sentry.client")
        self.session = httpx.AsyncClient(
            base_url=config.url,
            headers={"Accept": "application/json", **config.auth_headers},
            verify=config.ssl_verify,
            timeout=config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "SentryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def build_url(self, path: str, params: QueryParams | None = None) -> httpx.URL:
        """Build the absolute URL for an API path and query parameters."""
        url = self.session.base_url.join(path)
        if params:
            url = url.copy_merge_params(list(params))
        return url

    async def get(self, path: str, params: QueryParams | None = None) -> Any:
        """Send a GET request to the Sentry API.

        Args:
            path: Absolute API path, e.g. ``/api/0/organizations/``
            params: Ordered query parameters; repeated names are kept

        Returns:
            The decoded JSON body

        Raises:
            MCPSentryAuthenticationError: On 401/403 responses
            SentryApiError: On any other non-success response
            httpx.RequestError: On network failures and timeouts
            ValueError: If the body is not valid JSON
        """
        url = self.build_url(path, params)
        self.logger.debug(f"Sending GET request to {url}")

        response = await self.session.get(url)
        if not response.is_success:
            body = response.text
            self.logger.error(
                f"API Error: {response.status_code} {response.reason_phrase} - {body}"
            )
            error_class = (
                MCPSentryAuthenticationError
                if response.status_code in (401, 403)
                else SentryApiError
            )
            raise error_class(response.status_code, response.reason_phrase, body)

        return response.json()

    async def close(self) -> None:
        """Close HTTP session."""
        await self.session.aclose()
