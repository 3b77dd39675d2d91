"""
Channel Steps (C-001 to C-005)

Channel lookup, search, opt-in/opt-out and the subscriber list.
All of them need the channel identity.
"""

from ..runner import register_step
from .base import BaseStep

SEARCH_QUERY = "push"
SEARCH_PAGE = 1
SEARCH_LIMIT = 20


@register_step
class GetChannel(BaseStep):
    """C-001: Channel details."""

    id = "C-001"
    name = "PushAPI.channels.getChannel()"
    api_name = "PushAPI.channels.getChannel"
    description = "Looks up the channel owned by WALLET_PRIVATE_KEY"
    category = "channel"
    requires_channel = True

    async def execute(self):
        # Plain address on purpose, the client converts it to CAIP
        return await self.client.get_channel(channel=self.signers.channel_address)


@register_step
class SearchChannels(BaseStep):
    """C-002: Paginated channel search."""

    id = "C-002"
    name = "PushAPI.channels.search()"
    api_name = "PushAPI.channels.search"
    description = "Searches channels matching 'push'"
    category = "channel"
    requires_channel = True

    async def execute(self):
        return await self.client.search_channels(
            query=SEARCH_QUERY,
            page=SEARCH_PAGE,
            limit=SEARCH_LIMIT,
        )


@register_step
class SubscribeToChannel(BaseStep):
    """C-003: User opts into the channel."""

    id = "C-003"
    name = "PushAPI.channels.subscribe()"
    api_name = "PushAPI.channels.subscribe"
    description = "Signs and sends an opt-in for the random user"
    category = "channel"
    requires_channel = True

    async def execute(self):
        return await self.client.subscribe(
            signer=self.signers.user,
            channel_address=self.signers.channel_caip,
            user_address=self.signers.user_caip,
            on_success=lambda: self.presenter.show_success("opt in success"),
            on_error=lambda error: self.presenter.show_error("opt in error"),
        )


@register_step
class UnsubscribeFromChannel(BaseStep):
    """C-004: User opts out of the channel."""

    id = "C-004"
    name = "PushAPI.channels.unsubscribe()"
    api_name = "PushAPI.channels.unsubscribe"
    description = "Signs and sends an opt-out for the random user"
    category = "channel"
    requires_channel = True

    async def execute(self):
        return await self.client.unsubscribe(
            signer=self.signers.user,
            channel_address=self.signers.channel_caip,
            user_address=self.signers.user_caip,
            on_success=lambda: self.presenter.show_success("opt out success"),
            on_error=lambda error: self.presenter.show_error("opt out error"),
        )


@register_step
class GetSubscribers(BaseStep):
    """C-005: Subscriber list of the channel."""

    id = "C-005"
    name = "PushAPI.channels._getSubscribers()"
    api_name = "PushAPI.channels._getSubscribers"
    description = "Lists the channel's subscribers (deprecated route)"
    category = "channel"
    requires_channel = True

    async def execute(self):
        return await self.client.get_subscribers(channel=self.signers.channel_caip)
