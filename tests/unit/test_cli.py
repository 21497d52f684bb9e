"""Unit tests for the command-line interface."""

from unittest.mock import patch

from click.testing import CliRunner

from guestgate.cli import cli
from guestgate.core.config import get_settings


def test_info_shows_configuration():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "GuestGate v" in result.output
    assert "API Prefix:   /api/v1" in result.output


def test_commands_are_registered():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("serve", "init-db", "grant-admin", "info"):
        assert command in result.output


def test_serve_passes_options_to_uvicorn():
    with patch("uvicorn.run") as run:
        result = CliRunner().invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "9000", "--no-reload"])

    assert result.exit_code == 0
    args, kwargs = run.call_args
    assert args == ("guestgate.infrastructure.api.app:app",)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is False


def test_init_db_refuses_in_production_without_force():
    settings = get_settings().model_copy(update={"environment": "production"})
    with patch("guestgate.cli.get_settings", return_value=settings):
        result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations" in result.output
