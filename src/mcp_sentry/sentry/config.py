"""Configuration module for Sentry API interactions."""

import os
from dataclasses import dataclass, field
from urllib.parse import urlparse

from ..utils.env import get_env_float, is_env_ssl_verify
from .constants import (
    DEFAULT_TIMEOUT,
    ENV_SENTRY_ACCESS_TOKEN,
    ENV_SENTRY_HOST,
    ENV_SENTRY_SSL_VERIFY,
    ENV_SENTRY_TIMEOUT,
)


@dataclass(frozen=True)
class SentryConfig:
    """Sentry API configuration.

    Authentication always uses a bearer access token (an auth token or an
    internal integration token) supplied from outside the server.
    """

    url: str  # Base URL for Sentry, e.g. https://sentry.io
    access_token: str = field(repr=False)  # Bearer token, never printed
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: float = DEFAULT_TIMEOUT  # Per-request timeout in seconds

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Sentry host URL is required")
        if not self.access_token:
            raise ValueError("Sentry access token is required")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"Sentry host must be an http(s) URL, got '{self.url}'"
            )
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @property
    def auth_headers(self) -> dict[str, str]:
        """Headers that authenticate a request against the Sentry API."""
        return {"Authorization": f"Bearer {self.access_token}"}

    @classmethod
    def from_env(cls) -> "SentryConfig":
        """Create configuration from environment variables.

        Returns:
            SentryConfig with values from environment variables.

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = os.getenv(ENV_SENTRY_HOST, "").strip()
        access_token = os.getenv(ENV_SENTRY_ACCESS_TOKEN, "").strip()

        missing = [
            name
            for name, value in (
                (ENV_SENTRY_HOST, url),
                (ENV_SENTRY_ACCESS_TOKEN, access_token),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                "Both --host and --access-token (or their corresponding "
                f"SENTRY_ environment variables) are required. Missing: {', '.join(missing)}"
            )

        return cls(
            url=url,
            access_token=access_token,
            ssl_verify=is_env_ssl_verify(ENV_SENTRY_SSL_VERIFY),
            timeout=get_env_float(ENV_SENTRY_TIMEOUT, DEFAULT_TIMEOUT),
        )
