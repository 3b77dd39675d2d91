"""
Push Notification REST API Client.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

import httpx
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex

from ..config import CHAIN_SOURCES, COMM_CONTRACTS, DEFAULT_CHAIN_ID, Env, api_base_url
from ..exceptions import MissingChannelSignerError, PushAPIError, PushValidationError
from ..signers import address_from_caip, validated_caip
from ..utils.payload_builder import (
    IdentityType,
    NotificationType,
    Recipients,
    build_direct_payload,
    build_identity,
    build_payload_typed_data,
    build_subscription_typed_data,
    resolve_recipients,
)
from .base_client import BaseClient

logger = logging.getLogger(__name__)


def parse_feed(item: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten one raw feed entry into the fields a notification UI shows."""
    payload = item.get("payload") or {}
    data = payload.get("data") or {}
    notification = payload.get("notification") or {}
    return {
        "cta": data.get("acta", ""),
        "title": data.get("asub") or notification.get("title", ""),
        "message": data.get("amsg") or notification.get("body", ""),
        "icon": data.get("icon", ""),
        "url": data.get("url", ""),
        "sid": data.get("sid", ""),
        "app": data.get("app", ""),
        "image": data.get("aimg", ""),
        "blockchain": item.get("source", ""),
        "notification": notification,
        "secret": data.get("secret", ""),
    }


async def _invoke_callback(callback: Optional[Callable], *args):
    if callback is None:
        return
    if asyncio.iscoroutinefunction(callback):
        await callback(*args)
    else:
        callback(*args)


class PushClient(BaseClient):
    """
    Client for the Push Notification backend.

    Covers feeds, subscriptions, channel lookup/search, opt-in/opt-out,
    notification sends and the subscriber list.
    """

    def __init__(
        self,
        env: Env = Env.STAGING,
        chain_id: int = DEFAULT_CHAIN_ID,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_base_url(env), timeout, transport=transport)
        self.env = env
        self.chain_id = chain_id

    def _caip(self, address: str) -> str:
        return validated_caip(address, self.chain_id)

    @staticmethod
    def _chain_id_of(caip: str) -> int:
        return int(caip.split(":")[1])

    @staticmethod
    def _comm_contract(chain_id: int) -> str:
        if chain_id not in COMM_CONTRACTS:
            raise PushValidationError(f"Unsupported chain for signing: {chain_id}")
        return COMM_CONTRACTS[chain_id]

    @staticmethod
    def _sign(signer: LocalAccount, typed_data: Dict[str, Any]) -> str:
        signable = encode_typed_data(full_message=typed_data)
        return to_hex(signer.sign_message(signable).signature)

    # -------------------------------------------------------------------------
    # User
    # -------------------------------------------------------------------------

    async def get_feeds(
        self,
        user: str,
        page: int = 1,
        limit: int = 10,
        spam: bool = False,
        raw: bool = False,
    ) -> List[Dict]:
        """Get the notification feed (or spam feed) of a user."""
        user_caip = self._caip(user)
        data = await self.get(
            f"/v1/users/{user_caip}/feeds",
            params={"page": page, "limit": limit, "spam": str(spam).lower()},
        )
        feeds = (data or {}).get("feeds", [])
        if raw:
            return feeds
        return [parse_feed(item) for item in feeds]

    async def get_subscriptions(self, user: str) -> List[Dict]:
        """Get the channels a user is subscribed to."""
        user_caip = self._caip(user)
        data = await self.get(f"/v1/users/{user_caip}/subscriptions")
        return (data or {}).get("subscriptions", [])

    # -------------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------------

    async def get_channel(self, channel: str) -> Optional[Dict]:
        """Get channel details."""
        channel_caip = self._caip(channel)
        return await self.get(f"/v1/channels/{channel_caip}")

    async def search_channels(self, query: str, page: int = 1, limit: int = 10) -> List[Dict]:
        """Search channels by name or address."""
        if not query:
            raise PushValidationError("Search query must not be empty")
        if page < 1 or limit < 1:
            raise PushValidationError(f"Invalid pagination: page={page}, limit={limit}")
        data = await self.get(
            "/v1/channels/search",
            params={"page": page, "limit": limit, "query": query},
        )
        if isinstance(data, dict):
            return data.get("channels", [])
        return data or []

    async def get_subscribers(self, channel: str) -> List[Dict]:
        """Get the subscriber list of a channel (deprecated backend route)."""
        channel_caip = self._caip(channel)
        data = await self.post(
            "/v1/channels/_get_subscribers",
            json={"channel": channel_caip, "op": "read"},
        )
        return (data or {}).get("subscribers", [])

    async def subscribe(
        self,
        signer: LocalAccount,
        channel_address: str,
        user_address: str,
        on_success: Optional[Callable] = None,
        on_error: Optional[Callable] = None,
    ) -> Dict[str, str]:
        """Opt a user into a channel. Failures are reported, not raised."""
        return await self._change_subscription(
            "Subscribe", "subscribe", signer, channel_address, user_address, on_success, on_error,
        )

    async def unsubscribe(
        self,
        signer: LocalAccount,
        channel_address: str,
        user_address: str,
        on_success: Optional[Callable] = None,
        on_error: Optional[Callable] = None,
    ) -> Dict[str, str]:
        """Opt a user out of a channel. Failures are reported, not raised."""
        return await self._change_subscription(
            "Unsubscribe", "unsubscribe", signer, channel_address, user_address, on_success, on_error,
        )

    async def _change_subscription(
        self,
        action: str,
        route: str,
        signer: LocalAccount,
        channel_address: str,
        user_address: str,
        on_success: Optional[Callable],
        on_error: Optional[Callable],
    ) -> Dict[str, str]:
        channel_caip = self._caip(channel_address)
        user_caip = self._caip(user_address)
        chain_id = self._chain_id_of(channel_caip)

        typed_data = build_subscription_typed_data(
            action,
            address_from_caip(channel_caip),
            address_from_caip(user_caip),
            chain_id,
            self._comm_contract(chain_id),
        )
        user_field = "subscriber" if action == "Subscribe" else "unsubscriber"
        body = {
            "verificationProof": self._sign(signer, typed_data),
            "message": {
                **typed_data["message"],
                "channel": channel_caip,
                user_field: user_caip,
            },
        }

        try:
            await self.post(f"/v1/channels/{channel_caip}/{route}", json=body)
        except (PushAPIError, httpx.HTTPError) as e:
            logger.error(f"{action} {user_caip} -> {channel_caip} failed: {e}")
            await _invoke_callback(on_error, e)
            return {"status": "error", "message": str(e)}

        logger.info(f"{action} {user_caip} -> {channel_caip} succeeded")
        await _invoke_callback(on_success)
        verb = "opted into" if action == "Subscribe" else "opted out of"
        return {"status": "success", "message": f"successfully {verb} channel"}

    # -------------------------------------------------------------------------
    # Payloads
    # -------------------------------------------------------------------------

    async def send_notification(
        self,
        signer: Optional[LocalAccount],
        notification_type: NotificationType,
        identity_type: IdentityType,
        notification: Dict[str, str],
        payload: Dict[str, str],
        channel: str,
        recipients: Optional[Recipients] = None,
    ) -> Dict[str, Any]:
        """
        Send a notification from a channel.

        Args:
            signer: Channel (or delegate) signer
            notification_type: BROADCAST, TARGETTED or SUBSET
            identity_type: Only DIRECT_PAYLOAD is supported
            notification: {"title", "body"} shown by push clients
            payload: {"title", "body", "cta", "img"} shown in the app
            channel: Channel address, CAIP or plain
            recipients: One address (TARGETTED), a list (SUBSET), None (BROADCAST)

        Returns:
            {"status": http status, "data": response body or None}
        """
        if signer is None:
            raise MissingChannelSignerError()

        channel_caip = self._caip(channel)
        chain_id = self._chain_id_of(channel_caip)
        resolved = resolve_recipients(notification_type, recipients, channel_caip, self.chain_id)

        identity = build_identity(
            identity_type,
            build_direct_payload(notification, payload, notification_type, resolved),
        )
        signature = self._sign(
            signer,
            build_payload_typed_data(identity, chain_id, self._comm_contract(chain_id)),
        )

        body = {
            "verificationProof": f"eip712v2:{signature}::uid::{uuid.uuid4()}",
            "identity": identity,
            "sender": channel_caip,
            "source": CHAIN_SOURCES[chain_id],
            "recipient": resolved,
        }
        response = await self.post_raw("/v1/payloads/", json=body)
        logger.info(f"Notification type {int(notification_type)} sent from {channel_caip}: {response.status_code}")
        return {"status": response.status_code, "data": self._json_or_none(response)}
