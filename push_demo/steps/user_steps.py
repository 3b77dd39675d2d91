"""
User Steps (U-001 to U-003)

Calls that only need the random user identity. They always run.
"""

from ..runner import register_step
from .base import BaseStep


@register_step
class GetFeeds(BaseStep):
    """U-001: Notification feed of the user."""

    id = "U-001"
    name = "PushAPI.user.getFeeds"
    api_name = "PushAPI.user.getFeeds"
    description = "Fetches the user's inbox feed"
    category = "user"

    async def execute(self):
        return await self.client.get_feeds(user=self.signers.user_caip)


@register_step
class GetSpamFeeds(BaseStep):
    """U-002: Spam feed of the user."""

    id = "U-002"
    name = "PushAPI.user.getFeeds [Spam]"
    api_name = "PushAPI.user.getFeeds [Spam]"
    description = "Fetches notifications from channels the user is not subscribed to"
    category = "user"

    async def execute(self):
        return await self.client.get_feeds(user=self.signers.user_caip, spam=True)


@register_step
class GetSubscriptions(BaseStep):
    """U-003: Channels the user is subscribed to."""

    id = "U-003"
    name = "PushAPI.user.getSubscriptions"
    api_name = "PushAPI.user.getSubscriptions"
    description = "Lists the user's channel subscriptions"
    category = "user"

    async def execute(self):
        return await self.client.get_subscriptions(user=self.signers.user_caip)
