import os
from enum import Enum
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class Env(str, Enum):
    PROD = "prod"
    STAGING = "staging"
    DEV = "dev"
    # local backend only
    LOCAL = "local"


BACKEND_URLS: Dict[Env, str] = {
    Env.PROD: "https://backend.epns.io",
    Env.STAGING: "https://backend-staging.epns.io",
    Env.DEV: "https://backend-dev.epns.io",
    Env.LOCAL: "http://localhost:4000",
}

# EPNS comm contract used as the EIP-712 verifying contract, per chain id
COMM_CONTRACTS: Dict[int, str] = {
    1: "0xb3971BCef2D791bc4027BbfeDFb47319A4AAaaAa",
    11155111: "0x0C34d54a09CFe75BCcd878A469206Ae77E0fe6e7",
}

CHAIN_SOURCES: Dict[int, str] = {
    1: "ETH_MAINNET",
    11155111: "ETH_TEST_SEPOLIA",
}

DEFAULT_CHAIN_ID = 11155111
DEFAULT_SOCKET_WINDOW = 4.0

REQUIRED_CHANNEL_ENV_VARS = ("WALLET_PRIVATE_KEY",)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def api_base_url(env: Env) -> str:
    return f"{BACKEND_URLS[env]}/apis"


def socket_url(env: Env) -> str:
    return BACKEND_URLS[env]


def skip_channel_steps(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Check whether the channel steps have to be skipped.

    Returns True if any of REQUIRED_CHANNEL_ENV_VARS is missing or empty.
    """
    environ = os.environ if environ is None else environ
    for var in REQUIRED_CHANNEL_ENV_VARS:
        if not environ.get(var):
            return True
    return False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


class DemoConfig(BaseModel):
    """Read-only configuration for one demo run."""

    model_config = ConfigDict(frozen=True)

    env: Env = Env.STAGING
    show_api_response: bool = False
    wallet_private_key: Optional[str] = Field(default=None, repr=False)
    chain_id: int = DEFAULT_CHAIN_ID
    socket_window: float = Field(default=DEFAULT_SOCKET_WINDOW, ge=0)
    request_timeout: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"
    log_file_path: str = "/tmp/logs/push_demo.log"

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @property
    def api_url(self) -> str:
        return api_base_url(self.env)

    @property
    def socket_url(self) -> str:
        return socket_url(self.env)

    @property
    def comm_contract(self) -> str:
        try:
            return COMM_CONTRACTS[self.chain_id]
        except KeyError:
            raise ConfigurationError(f"No comm contract known for chain {self.chain_id}")

    @property
    def chain_source(self) -> str:
        try:
            return CHAIN_SOURCES[self.chain_id]
        except KeyError:
            raise ConfigurationError(f"No payload source known for chain {self.chain_id}")

    @property
    def has_channel_key(self) -> bool:
        return bool(self.wallet_private_key)

    @classmethod
    def load_from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = None,
    ) -> "DemoConfig":
        """
        Build the config from environment variables.

        Values from `env_file` never override the ones already present in
        the environment. Without an explicit mapping, a `.env` file in the
        working directory tree is loaded into os.environ first.
        """
        if environ is None:
            load_dotenv(env_file, override=False)
            values: Dict[str, str] = dict(os.environ)
        else:
            values = {}
            if env_file:
                values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
            values.update(environ)

        kwargs = {}

        env_name = values.get("PUSH_ENV", Env.STAGING.value).strip().lower()
        try:
            kwargs["env"] = Env(env_name)
        except ValueError:
            allowed = ", ".join(e.value for e in Env)
            raise ConfigurationError(f"PUSH_ENV must be one of {allowed}, got {env_name!r}")

        if "SHOW_API_RESPONSE" in values:
            kwargs["show_api_response"] = _parse_bool("SHOW_API_RESPONSE", values["SHOW_API_RESPONSE"])

        private_key = (values.get("WALLET_PRIVATE_KEY") or "").strip()
        kwargs["wallet_private_key"] = private_key or None

        for name, field, cast in (
            ("PUSH_CHAIN_ID", "chain_id", int),
            ("SOCKET_DEMO_WINDOW", "socket_window", float),
            ("PUSH_REQUEST_TIMEOUT", "request_timeout", float),
        ):
            if values.get(name):
                try:
                    kwargs[field] = cast(values[name])
                except ValueError:
                    raise ConfigurationError(f"{name} must be a number, got {values[name]!r}")

        if values.get("LOG_LEVEL"):
            kwargs["log_level"] = values["LOG_LEVEL"].upper()
        if values.get("LOG_FILE_PATH"):
            kwargs["log_file_path"] = values["LOG_FILE_PATH"]

        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid demo configuration: {e}")
