class MCPSentryError(Exception):
    """Base exception for MCP-Sentry errors."""

    pass


class SentryApiError(MCPSentryError):
    """Raised when the Sentry API answers with a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"API Error: {status_code} {reason}\n{body}")


class MCPSentryAuthenticationError(SentryApiError):
    """Raised when Sentry API authentication fails (401/403)."""

    pass
