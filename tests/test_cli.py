from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from push_demo.cli import cli
from push_demo.config import Env
from push_demo.exceptions import PushAPIError


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("PUSH_ENV", "SHOW_API_RESPONSE", "WALLET_PRIVATE_KEY", "SOCKET_DEMO_WINDOW", "LOG_LEVEL", "LOG_FILE_PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "push_demo.log"))
    return CliRunner()


def test_list_in_demo_order(runner):
    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 0
    ids = [line.split(":")[0].strip() for line in result.output.splitlines()]
    assert ids == [
        "U-001", "U-002", "U-003",
        "C-001", "C-002", "C-003", "C-004",
        "P-001", "P-002", "P-003",
        "C-005", "K-001",
    ]
    assert "U-001: PushAPI.user.getFeeds\n" in result.output
    assert "K-001: Push Notification - PushSDKSocket() [channel]" in result.output


def test_list_filtered(runner):
    result = runner.invoke(cli, ["list", "--category", "payloads"])

    assert result.exit_code == 0
    assert len(result.output.splitlines()) == 3


def test_categories(runner):
    result = runner.invoke(cli, ["categories"])

    assert result.exit_code == 0
    assert "user: 3 steps" in result.output
    assert "channel: 5 steps" in result.output
    assert "socket: 1 steps" in result.output


def test_run_applies_overrides(runner):
    with patch("push_demo.cli.run_demo", new_callable=AsyncMock) as run_demo:
        result = runner.invoke(cli, ["run", "--env", "dev", "--show-response", "--window", "2", "-c", "user"])

    assert result.exit_code == 0, result.output
    kwargs = run_demo.await_args.kwargs
    assert kwargs["category"] == "user"
    assert kwargs["step_id"] is None
    assert kwargs["config"].env == Env.DEV
    assert kwargs["config"].show_api_response is True
    assert kwargs["config"].socket_window == 2.0


def test_run_all_category_means_full_sequence(runner):
    with patch("push_demo.cli.run_demo", new_callable=AsyncMock) as run_demo:
        result = runner.invoke(cli, ["run", "--category", "all"])

    assert result.exit_code == 0, result.output
    assert run_demo.await_args.kwargs["category"] is None
    assert run_demo.await_args.kwargs["config"].env == Env.STAGING


def test_run_failure_exits_non_zero(runner):
    with patch("push_demo.cli.run_demo", new_callable=AsyncMock, side_effect=PushAPIError("down", status_code=503)):
        result = runner.invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "PushAPIError: down" in result.output


def test_run_rejects_bad_env(runner):
    result = runner.invoke(cli, ["run", "--env", "mainnet"])
    assert result.exit_code == 2


@pytest.mark.parametrize("var,value", [
    ("PUSH_ENV", "mainnet"),
    ("SHOW_API_RESPONSE", "maybe"),
    ("SOCKET_DEMO_WINDOW", "soon"),
    ("LOG_LEVEL", "verbose"),
])
def test_bad_environment_is_reported(runner, monkeypatch, var, value):
    monkeypatch.setenv(var, value)

    with patch("push_demo.cli.run_demo", new_callable=AsyncMock) as run_demo:
        result = runner.invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "ConfigurationError" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    run_demo.assert_not_called()


def test_negative_window_is_rejected(runner):
    result = runner.invoke(cli, ["run", "--window", "-1"])
    assert result.exit_code == 2
