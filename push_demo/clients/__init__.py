"""HTTP Clients for the push demo."""

from .base_client import BaseClient
from .push_client import PushClient, parse_feed

__all__ = ["BaseClient", "PushClient", "parse_feed"]
