"""Entry point for running the MCP Sentry server."""

from mcp_sentry import main

if __name__ == "__main__":
    main()
