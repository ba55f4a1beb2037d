import asyncio
import logging
import os

import click
from dotenv import load_dotenv

__version__ = "1.0.0"

from .logging_config import log_operation, setup_logger
from .sentry.config import SentryConfig
from .sentry.constants import (
    ENV_SENTRY_ACCESS_TOKEN,
    ENV_SENTRY_HOST,
    ENV_SENTRY_SSL_VERIFY,
    ENV_SENTRY_TIMEOUT,
)
from .utils.env import is_env_truthy

logger = logging.getLogger("mcp-sentry")


def _verbosity_to_level(verbose: int) -> str:
    if verbose == 0 and is_env_truthy("MCP_VERBOSE"):
        verbose = 1
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return os.getenv("LOG_LEVEL", "WARNING")


@click.command(context_settings={"help_option_names": ["--help", "-H"]})
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for HTTP transports",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option("-h", "--host", help="The Sentry host URL (e.g., https://sentry.io)")
@click.option("-t", "--access-token", help="The Sentry API access token")
@click.option(
    "--ssl-verify/--no-ssl-verify",
    default=None,
    help="Verify SSL certificates of the Sentry host (default: verify)",
)
@click.option(
    "--timeout",
    type=float,
    help="Timeout in seconds for each Sentry API request (default: 30)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    host: str | None,
    access_token: str | None,
    ssl_verify: bool | None,
    timeout: float | None,
) -> None:
    """MCP Sentry Server - read-only Sentry API tools for MCP

    The host and access token may also be given as SENTRY_HOST and
    SENTRY_ACCESS_TOKEN; command line flags take precedence.
    """
    logging_level = _verbosity_to_level(verbose)
    setup_logger(
        name="mcp-sentry",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        # Load environment variables from file if specified, otherwise try default .env
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Command line arguments override the environment
        if host:
            os.environ[ENV_SENTRY_HOST] = host
        if access_token:
            os.environ[ENV_SENTRY_ACCESS_TOKEN] = access_token
        if ssl_verify is not None:
            os.environ[ENV_SENTRY_SSL_VERIFY] = str(ssl_verify).lower()
        if timeout is not None:
            os.environ[ENV_SENTRY_TIMEOUT] = str(timeout)

        try:
            SentryConfig.from_env()
        except ValueError as e:
            logger.error(f"Invalid Sentry configuration: {e}")
            raise click.UsageError(str(e)) from e

    from .servers import run_server

    logger.info(f"Starting MCP Sentry v{__version__} with {transport} transport")
    asyncio.run(run_server(transport=transport, port=port))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
