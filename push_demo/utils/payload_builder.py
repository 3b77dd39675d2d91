"""
Payload builders for notification sends.

Provides the options for the three demo sends and the transformations the
push backend expects: recipient resolution, direct payload identity and
EIP-712 typed data.
"""

import json
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from ..exceptions import PushValidationError
from ..signers import DemoSigners, validated_caip


EIP712_DOMAIN_NAME = "EPNS COMM V1"

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

DEMO_NOTIFICATION = {"title": "notification TITLE:", "body": "notification BODY"}
DEMO_PAYLOAD = {"title": "payload title", "body": "sample msg body", "cta": "", "img": ""}


class NotificationType(IntEnum):
    BROADCAST = 1
    TARGETTED = 3
    SUBSET = 4


class IdentityType(IntEnum):
    MINIMAL = 0
    IPFS = 1
    DIRECT_PAYLOAD = 2
    SUBGRAPH = 3


class SendMode(Enum):
    """Recipient targeting used by the demo sends."""
    SINGLE = "single"
    SUBSET = "subset"
    BROADCAST = "broadcast"

    @property
    def notification_type(self) -> NotificationType:
        return {
            SendMode.SINGLE: NotificationType.TARGETTED,
            SendMode.SUBSET: NotificationType.SUBSET,
            SendMode.BROADCAST: NotificationType.BROADCAST,
        }[self]


Recipients = Union[str, List[str]]


def to_json(value: Any) -> str:
    """Compact JSON, byte-compatible with JSON.stringify for plain data."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_notification_options(mode: SendMode, signers: DemoSigners) -> Dict[str, Any]:
    """
    Build send_notification() keyword arguments for one of the demo sends.

    All modes share the notification and payload metadata. The recipient
    field differs:
    - SINGLE: "recipients" is the user CAIP string
    - SUBSET: "recipients" is [user CAIP, dummy CAIP]
    - BROADCAST: no "recipients" key at all

    Raises:
        MissingChannelSignerError: if signers has no channel identity
    """
    options: Dict[str, Any] = {
        "signer": signers.channel,
        "notification_type": mode.notification_type,
        "identity_type": IdentityType.DIRECT_PAYLOAD,
        "notification": dict(DEMO_NOTIFICATION),
        "payload": dict(DEMO_PAYLOAD),
        "channel": signers.channel_caip,
    }

    if mode == SendMode.SINGLE:
        options["recipients"] = signers.user_caip
    elif mode == SendMode.SUBSET:
        options["recipients"] = [signers.user_caip, signers.dummy_caip]

    return options


def resolve_recipients(
    notification_type: NotificationType,
    recipients: Optional[Recipients],
    channel: str,
    chain_id: int,
) -> Union[str, Dict[str, None]]:
    """
    Convert demo-level recipients to the wire shape.

    Returns:
        BROADCAST: the channel CAIP address
        TARGETTED: a single CAIP address
        SUBSET: {caip_address: None, ...}
    """
    if notification_type == NotificationType.BROADCAST:
        return validated_caip(channel, chain_id)

    if notification_type == NotificationType.TARGETTED:
        if not isinstance(recipients, str):
            raise PushValidationError("Targeted notifications need exactly one recipient string")
        return validated_caip(recipients, chain_id)

    if notification_type == NotificationType.SUBSET:
        if isinstance(recipients, str) or not recipients:
            raise PushValidationError("Subset notifications need a non-empty list of recipients")
        return {validated_caip(r, chain_id): None for r in recipients}

    raise PushValidationError(f"Unsupported notification type: {notification_type}")


def build_direct_payload(
    notification: Dict[str, str],
    payload: Dict[str, str],
    notification_type: NotificationType,
    recipients: Union[str, Dict[str, None]],
) -> Dict[str, Any]:
    """Build the payload body carried inside a direct-payload identity."""
    return {
        "notification": {
            "title": notification.get("title", ""),
            "body": notification.get("body", ""),
        },
        "data": {
            "acta": payload.get("cta", ""),
            "aimg": payload.get("img", ""),
            "amsg": payload.get("body", ""),
            "asub": payload.get("title", ""),
            "type": str(int(notification_type)),
        },
        "recipients": recipients,
    }


def build_identity(identity_type: IdentityType, direct_payload: Dict[str, Any]) -> str:
    if identity_type != IdentityType.DIRECT_PAYLOAD:
        raise PushValidationError(f"Only direct payload identities are supported, got {identity_type}")
    return f"{int(identity_type)}+{to_json(direct_payload)}"


def build_typed_data(
    primary_type: str,
    fields: List[Dict[str, str]],
    message: Dict[str, Any],
    chain_id: int,
    verifying_contract: str,
) -> Dict[str, Any]:
    """Full EIP-712 message in the shape eth_account's encode_typed_data takes."""
    return {
        "types": {
            "EIP712Domain": EIP712_DOMAIN_TYPE,
            primary_type: fields,
        },
        "primaryType": primary_type,
        "domain": {
            "name": EIP712_DOMAIN_NAME,
            "chainId": chain_id,
            "verifyingContract": verifying_contract,
        },
        "message": message,
    }


def build_subscription_typed_data(
    action: str,
    channel_address: str,
    user_address: str,
    chain_id: int,
    verifying_contract: str,
) -> Dict[str, Any]:
    """
    Typed data for an opt-in ("Subscribe") or opt-out ("Unsubscribe").

    Addresses are plain Ethereum addresses, not CAIP.
    """
    user_field = "subscriber" if action == "Subscribe" else "unsubscriber"
    return build_typed_data(
        action,
        [
            {"name": "channel", "type": "address"},
            {"name": user_field, "type": "address"},
            {"name": "action", "type": "string"},
        ],
        {"channel": channel_address, user_field: user_address, "action": action},
        chain_id,
        verifying_contract,
    )


def build_payload_typed_data(identity: str, chain_id: int, verifying_contract: str) -> Dict[str, Any]:
    return build_typed_data(
        "Data",
        [{"name": "data", "type": "string"}],
        {"data": identity},
        chain_id,
        verifying_contract,
    )
