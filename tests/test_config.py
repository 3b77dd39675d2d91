import pytest

from push_demo.config import (
    DEFAULT_SOCKET_WINDOW,
    DemoConfig,
    Env,
    api_base_url,
    skip_channel_steps,
    socket_url,
)
from push_demo.exceptions import ConfigurationError


def test_defaults_from_empty_environment():
    config = DemoConfig.load_from_env(environ={})

    assert config.env == Env.STAGING
    assert config.show_api_response is False
    assert config.wallet_private_key is None
    assert config.chain_id == 11155111
    assert config.socket_window == DEFAULT_SOCKET_WINDOW
    assert config.has_channel_key is False


def test_values_are_read_from_environment():
    config = DemoConfig.load_from_env(environ={
        "PUSH_ENV": "DEV",
        "SHOW_API_RESPONSE": "true",
        "WALLET_PRIVATE_KEY": "ab" * 32,
        "SOCKET_DEMO_WINDOW": "1.5",
        "PUSH_CHAIN_ID": "1",
        "LOG_LEVEL": "debug",
    })

    assert config.env == Env.DEV
    assert config.show_api_response is True
    assert config.wallet_private_key == "ab" * 32
    assert config.socket_window == 1.5
    assert config.chain_id == 1
    assert config.log_level == "DEBUG"


def test_empty_private_key_counts_as_missing():
    config = DemoConfig.load_from_env(environ={"WALLET_PRIVATE_KEY": "   "})
    assert config.wallet_private_key is None


def test_unknown_env_tier_is_rejected():
    with pytest.raises(ConfigurationError, match="PUSH_ENV"):
        DemoConfig.load_from_env(environ={"PUSH_ENV": "mainnet"})


def test_bad_boolean_is_rejected():
    with pytest.raises(ConfigurationError, match="SHOW_API_RESPONSE"):
        DemoConfig.load_from_env(environ={"SHOW_API_RESPONSE": "maybe"})


def test_bad_number_is_rejected():
    with pytest.raises(ConfigurationError, match="SOCKET_DEMO_WINDOW"):
        DemoConfig.load_from_env(environ={"SOCKET_DEMO_WINDOW": "soon"})


def test_negative_window_is_rejected():
    with pytest.raises(ConfigurationError):
        DemoConfig.load_from_env(environ={"SOCKET_DEMO_WINDOW": "-1"})


def test_env_file_values_do_not_override_environment(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PUSH_ENV=prod\nSHOW_API_RESPONSE=1\n")

    config = DemoConfig.load_from_env(environ={"PUSH_ENV": "local"}, env_file=str(env_file))

    assert config.env == Env.LOCAL
    assert config.show_api_response is True


def test_private_key_is_hidden_from_repr():
    config = DemoConfig(wallet_private_key="cd" * 32)
    assert "cd" * 32 not in repr(config)


def test_config_is_immutable():
    config = DemoConfig()
    with pytest.raises(Exception):
        config.env = Env.PROD


def test_urls_per_environment():
    assert api_base_url(Env.PROD) == "https://backend.epns.io/apis"
    assert api_base_url(Env.STAGING) == "https://backend-staging.epns.io/apis"
    assert socket_url(Env.DEV) == "https://backend-dev.epns.io"
    assert DemoConfig(env=Env.LOCAL).api_url == "http://localhost:4000/apis"


def test_chain_tables():
    assert DemoConfig(chain_id=1).chain_source == "ETH_MAINNET"
    assert DemoConfig().chain_source == "ETH_TEST_SEPOLIA"
    with pytest.raises(ConfigurationError):
        DemoConfig(chain_id=137).comm_contract


@pytest.mark.parametrize("environ,expected", [
    ({}, True),
    ({"WALLET_PRIVATE_KEY": ""}, True),
    ({"WALLET_PRIVATE_KEY": "ab" * 32}, False),
])
def test_skip_channel_steps(environ, expected):
    assert skip_channel_steps(environ) is expected


def test_unknown_log_level_is_rejected():
    with pytest.raises(ConfigurationError, match="log_level"):
        DemoConfig.load_from_env(environ={"LOG_LEVEL": "verbose"})


def test_log_level_is_normalised():
    assert DemoConfig(log_level=" warning ").log_level == "WARNING"
