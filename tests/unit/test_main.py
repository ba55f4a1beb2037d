"""Tests for the mcp-sentry command line entry point."""

import os
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mcp_sentry import main


@pytest.fixture
def cli_env():
    """Isolate the CLI from the real environment, .env files and the server."""
    run_server = MagicMock(return_value="server-coroutine")
    with (
        patch.dict(os.environ, {}, clear=True),
        patch("mcp_sentry.load_dotenv") as mock_load_dotenv,
        patch("mcp_sentry.setup_logger") as mock_setup_logger,
        patch("mcp_sentry.asyncio.run") as mock_asyncio_run,
        patch("mcp_sentry.servers.run_server", run_server),
    ):
        yield {
            "load_dotenv": mock_load_dotenv,
            "setup_logger": mock_setup_logger,
            "asyncio_run": mock_asyncio_run,
            "run_server": run_server,
        }


def test_missing_configuration_fails(cli_env):
    result = CliRunner().invoke(main, [])

    assert result.exit_code != 0
    assert "--host and --access-token" in result.output
    cli_env["asyncio_run"].assert_not_called()


def test_flags_start_stdio_server(cli_env):
    result = CliRunner().invoke(
        main, ["-h", "https://sentry.example.com", "-t", "sntrys_cli"]
    )

    assert result.exit_code == 0, result.output
    assert os.environ["SENTRY_HOST"] == "https://sentry.example.com"
    assert os.environ["SENTRY_ACCESS_TOKEN"] == "sntrys_cli"
    cli_env["run_server"].assert_called_once_with(transport="stdio", port=8000)
    cli_env["asyncio_run"].assert_called_once_with("server-coroutine")


def test_flags_override_environment(cli_env):
    os.environ["SENTRY_HOST"] = "https://env.example.com"
    os.environ["SENTRY_ACCESS_TOKEN"] = "sntrys_env"

    result = CliRunner().invoke(main, ["--host", "https://flag.example.com"])

    assert result.exit_code == 0, result.output
    assert os.environ["SENTRY_HOST"] == "https://flag.example.com"
    assert os.environ["SENTRY_ACCESS_TOKEN"] == "sntrys_env"


def test_environment_only(cli_env):
    os.environ["SENTRY_HOST"] = "https://env.example.com"
    os.environ["SENTRY_ACCESS_TOKEN"] = "sntrys_env"

    result = CliRunner().invoke(main, ["--transport", "sse", "--port", "9100"])

    assert result.exit_code == 0, result.output
    cli_env["run_server"].assert_called_once_with(transport="sse", port=9100)


def test_optional_flags_written_to_environment(cli_env):
    result = CliRunner().invoke(
        main,
        [
            "-h",
            "https://sentry.example.com",
            "-t",
            "tok",
            "--no-ssl-verify",
            "--timeout",
            "12.5",
        ],
    )

    assert result.exit_code == 0, result.output
    assert os.environ["SENTRY_SSL_VERIFY"] == "false"
    assert os.environ["SENTRY_TIMEOUT"] == "12.5"


def test_invalid_host_fails(cli_env):
    result = CliRunner().invoke(main, ["-h", "sentry.example.com", "-t", "tok"])

    assert result.exit_code != 0
    cli_env["asyncio_run"].assert_not_called()


def test_env_file_is_loaded(cli_env, tmp_path):
    env_file = tmp_path / "sentry.env"
    env_file.write_text("SENTRY_HOST=https://sentry.io\n")

    CliRunner().invoke(main, ["--env-file", str(env_file), "-t", "tok"])

    cli_env["load_dotenv"].assert_called_once_with(str(env_file))


@pytest.mark.parametrize(
    ("args", "level"),
    [([], "WARNING"), (["-v"], "INFO"), (["-vv"], "DEBUG")],
)
def test_verbosity_sets_log_level(cli_env, args, level):
    CliRunner().invoke(main, [*args, "-h", "https://sentry.io", "-t", "tok"])

    assert cli_env["setup_logger"].call_args.kwargs["level"] == level


def test_help_does_not_clash_with_host_flag():
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "--access-token" in result.output
    assert "--host" in result.output
