"""
Demo identities.

Three identities take part in a run:
- channel: optional signer built from WALLET_PRIVATE_KEY, owns the channel
- user: random signer, subscribes and receives notifications
- dummy: random address, only used as a second recipient
"""

import re
from dataclasses import dataclass
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_checksum_address

from .config import DEFAULT_CHAIN_ID
from .exceptions import MissingChannelSignerError, PushValidationError

CAIP_NAMESPACE = "eip155"

_ETH_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_PRIVATE_KEY_RE = re.compile(r"^0x[a-fA-F0-9]{64}$")
_CHAIN_ID_RE = re.compile(r"^[0-9]+$")


def is_valid_eth_address(address: str) -> bool:
    if not isinstance(address, str) or not _ETH_ADDRESS_RE.match(address):
        return False
    # All-lower or all-upper addresses carry no checksum
    body = address[2:]
    if body == body.lower() or body == body.upper():
        return True
    return is_checksum_address(address)


def is_caip_address(address: str) -> bool:
    parts = address.split(":") if isinstance(address, str) else []
    return len(parts) == 3 and all(parts)


def address_from_caip(address: str) -> str:
    """Return the account part of a CAIP address, or the input if it is not CAIP."""
    if is_caip_address(address):
        return address.split(":")[2]
    return address


def caip_address(address: str, chain_id: int = DEFAULT_CHAIN_ID, namespace: str = CAIP_NAMESPACE) -> str:
    """Build a `namespace:chainId:address` identifier. CAIP input is returned unchanged."""
    if is_caip_address(address):
        return address
    return f"{namespace}:{chain_id}:{address}"


def validated_caip(address: str, chain_id: int = DEFAULT_CHAIN_ID) -> str:
    """caip_address(), rejecting anything that is not an eip155 Ethereum account."""
    if is_caip_address(address):
        namespace, chain, _ = address.split(":")
        if namespace != CAIP_NAMESPACE or not _CHAIN_ID_RE.match(chain):
            raise PushValidationError(f"Invalid CAIP address: {address}")
    if not is_valid_eth_address(address_from_caip(address)):
        raise PushValidationError(f"Invalid address: {address}")
    return caip_address(address, chain_id)


def normalize_private_key(private_key: str) -> str:
    """Return the key 0x-prefixed. Raises ValueError unless it is 32 bytes of hex."""
    key = private_key.strip()
    key = key if key.startswith("0x") else f"0x{key}"
    if not _PRIVATE_KEY_RE.match(key):
        raise ValueError("Private key must be 32 bytes of hex")
    return key


@dataclass(frozen=True)
class DemoSigners:
    user: LocalAccount
    dummy_address: str
    channel: Optional[LocalAccount] = None
    chain_id: int = DEFAULT_CHAIN_ID

    @classmethod
    def generate(
        cls,
        channel_private_key: Optional[str] = None,
        chain_id: int = DEFAULT_CHAIN_ID,
    ) -> "DemoSigners":
        channel = Account.from_key(normalize_private_key(channel_private_key)) if channel_private_key else None
        return cls(
            user=Account.create(),
            dummy_address=Account.create().address,
            channel=channel,
            chain_id=chain_id,
        )

    @property
    def has_channel(self) -> bool:
        return self.channel is not None

    @property
    def channel_address(self) -> str:
        if self.channel is None:
            raise MissingChannelSignerError()
        return self.channel.address

    @property
    def user_address(self) -> str:
        return self.user.address

    @property
    def channel_caip(self) -> str:
        return caip_address(self.channel_address, self.chain_id)

    @property
    def user_caip(self) -> str:
        return caip_address(self.user_address, self.chain_id)

    @property
    def dummy_caip(self) -> str:
        return caip_address(self.dummy_address, self.chain_id)
