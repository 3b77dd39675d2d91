"""
Notification Steps (P-001 to P-003)

The same direct-payload notification sent with three recipient targetings.
"""

from ..runner import register_step
from ..utils.payload_builder import SendMode, build_notification_options
from .base import BaseStep


class SendNotificationStep(BaseStep):
    """Shared send; subclasses only pick the targeting mode."""

    api_name = "PushAPI.payloads.sendNotification"
    category = "payloads"
    requires_channel = True
    status_code = 204
    mode: SendMode = SendMode.SINGLE

    def options(self) -> dict:
        return build_notification_options(self.mode, self.signers)

    async def execute(self):
        return await self.client.send_notification(**self.options())


@register_step
class SendToSingleRecipient(SendNotificationStep):
    """P-001: Target one recipient."""

    id = "P-001"
    name = "PushAPI.payloads.sendNotification() [Direct Payload, Single Recipient]"
    description = "Sends a notification to the random user only"
    mode = SendMode.SINGLE


@register_step
class SendToRecipientSubset(SendNotificationStep):
    """P-002: Target an explicit list of recipients."""

    id = "P-002"
    name = "PushAPI.payloads.sendNotification() [Direct Payload, Batch of Recipients (Subset)]"
    description = "Sends a notification to the user and the dummy address"
    mode = SendMode.SUBSET


@register_step
class BroadcastToAllSubscribers(SendNotificationStep):
    """P-003: Broadcast to every subscriber."""

    id = "P-003"
    name = "PushAPI.payloads.sendNotification() [Direct Payload, All Recipients (Broadcast)]"
    description = "Sends a notification to every subscriber of the channel"
    mode = SendMode.BROADCAST
