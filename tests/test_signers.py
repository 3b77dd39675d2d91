import pytest
from eth_account import Account

from push_demo.exceptions import MissingChannelSignerError, PushValidationError
from push_demo.signers import (
    DemoSigners,
    address_from_caip,
    caip_address,
    is_caip_address,
    is_valid_eth_address,
    normalize_private_key,
    validated_caip,
)


CHANNEL_PRIVATE_KEY = "0x" + "4c" * 32
CHECKSUMMED = Account.from_key(CHANNEL_PRIVATE_KEY).address


class TestAddressHelpers:
    def test_caip_address_wraps_plain_address(self):
        assert caip_address(CHECKSUMMED, 11155111) == f"eip155:11155111:{CHECKSUMMED}"

    def test_caip_address_keeps_caip_input(self):
        caip = f"eip155:1:{CHECKSUMMED}"
        assert caip_address(caip, 11155111) == caip

    def test_address_from_caip(self):
        assert address_from_caip(f"eip155:5:{CHECKSUMMED}") == CHECKSUMMED
        assert address_from_caip(CHECKSUMMED) == CHECKSUMMED

    def test_is_caip_address(self):
        assert is_caip_address(f"eip155:1:{CHECKSUMMED}")
        assert not is_caip_address(CHECKSUMMED)
        assert not is_caip_address("eip155::0xabc")

    def test_checksum_is_enforced_for_mixed_case(self):
        assert is_valid_eth_address(CHECKSUMMED)
        assert is_valid_eth_address(CHECKSUMMED.lower())
        assert is_valid_eth_address("0x" + CHECKSUMMED[2:].upper())

        body = CHECKSUMMED[2:]
        flipped = "".join(c.swapcase() if c.isalpha() else c for c in body)
        if flipped not in (body.lower(), body.upper()):
            assert not is_valid_eth_address("0x" + flipped)

    @pytest.mark.parametrize("address", ["", "0x123", "not an address", None, "0x" + "g" * 40])
    def test_invalid_addresses(self, address):
        assert not is_valid_eth_address(address)

    def test_validated_caip_rejects_garbage(self):
        with pytest.raises(PushValidationError):
            validated_caip("0xnothex")

    @pytest.mark.parametrize("prefix", ["eip155:abc:", "solana:1:", "eip155:\u00b2:"])
    def test_validated_caip_rejects_bad_prefix(self, prefix):
        with pytest.raises(PushValidationError, match="Invalid CAIP address"):
            validated_caip(prefix + CHECKSUMMED)

    def test_validated_caip_keeps_valid_caip(self):
        assert validated_caip(f"eip155:5:{CHECKSUMMED}") == f"eip155:5:{CHECKSUMMED}"


class TestPrivateKey:
    def test_prefix_is_added(self):
        assert normalize_private_key("4c" * 32) == "0x" + "4c" * 32

    def test_whitespace_is_stripped(self):
        assert normalize_private_key(f"  {CHANNEL_PRIVATE_KEY}\n") == CHANNEL_PRIVATE_KEY

    @pytest.mark.parametrize("key", ["0x1234", "zz" * 32, "0x" + "4c" * 33])
    def test_malformed_keys(self, key):
        with pytest.raises(ValueError):
            normalize_private_key(key)


class TestDemoSigners:
    def test_channel_signer_from_key(self):
        signers = DemoSigners.generate(channel_private_key=CHANNEL_PRIVATE_KEY)

        assert signers.has_channel
        assert signers.channel_address == CHECKSUMMED
        assert signers.channel_caip == f"eip155:11155111:{CHECKSUMMED}"

    def test_key_without_prefix_is_accepted(self):
        signers = DemoSigners.generate(channel_private_key=CHANNEL_PRIVATE_KEY[2:])
        assert signers.channel_address == CHECKSUMMED

    def test_no_key_means_no_channel(self):
        signers = DemoSigners.generate()

        assert not signers.has_channel
        with pytest.raises(MissingChannelSignerError):
            signers.channel_address
        with pytest.raises(MissingChannelSignerError):
            signers.channel_caip

    def test_user_and_dummy_are_fresh_each_run(self):
        first = DemoSigners.generate()
        second = DemoSigners.generate()

        assert first.user_address != second.user_address
        assert first.dummy_address != second.dummy_address
        assert first.user_address != first.dummy_address

    def test_caip_uses_configured_chain(self):
        signers = DemoSigners.generate(chain_id=1)
        assert signers.user_caip.startswith("eip155:1:")
        assert signers.dummy_caip.endswith(signers.dummy_address)
