"""
HTTP plumbing shared by the push clients.

One lazily created httpx.AsyncClient per instance and debug logging of every
exchange. Each request is made exactly once; non-2xx answers surface as
PushAPIError and transport errors propagate unchanged.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..exceptions import PushAPIError

logger = logging.getLogger(__name__)


class BaseClient:
    """
    Async JSON client bound to one API base URL.

    `transport` is handed to httpx unchanged; tests pass an
    httpx.MockTransport there.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        log_requests: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.log_requests = log_requests
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self):
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request once.

        Raises:
            httpx.HTTPError: for connection and timeout failures
        """
        if self.log_requests:
            logger.debug(f"-> {method} {path} {kwargs.get('params') or ''}")
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise
        if self.log_requests:
            logger.debug(f"<- {method} {path} {response.status_code}")
        return response

    def _raise_for_status(self, response: httpx.Response, method: str, path: str):
        if response.is_success:
            return
        detail = self._json_or_none(response)
        logger.error(f"{method} {path} -> {response.status_code}: {detail}")
        raise PushAPIError(
            f"{method} {path} failed with status {response.status_code}: {detail}",
            status_code=response.status_code,
        )

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._request("GET", path, params=params)
        self._raise_for_status(response, "GET", path)
        return self._json_or_none(response)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        """POST and decode the body; an empty body gives None."""
        response = await self.post_raw(path, json=json)
        return self._json_or_none(response)

    async def post_raw(self, path: str, json: Optional[Any] = None) -> httpx.Response:
        """POST returning the response itself, for callers that need the status."""
        response = await self._request("POST", path, json=json)
        self._raise_for_status(response, "POST", path)
        return response
