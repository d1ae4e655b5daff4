import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer
from django.contrib.auth.models import AnonymousUser

from hostel.services import events

logger = logging.getLogger(__name__)


class CollectionConsumer(AsyncWebsocketConsumer):
    """Push change events for one collection to a subscribed client.

    Close codes: 4001 when the connection is not authenticated, 4004 for
    an unknown collection.
    """

    async def connect(self):
        self.subscriptions = []
        self.collection = self.scope["url_route"]["kwargs"].get("collection")
        user = self.scope.get("user") or AnonymousUser()

        if not user.is_authenticated:
            await self.close(code=4001)
            return
        if self.collection not in events.COLLECTIONS:
            await self.close(code=4004)
            return

        for group in events.subscription_groups(user, self.collection):
            await self.channel_layer.group_add(group, self.channel_name)
            self.subscriptions.append(group)
        await self.accept()
        logger.debug("User %s subscribed to %s via %s", user.pk, self.collection, self.subscriptions)
        await self.send(json.dumps({"type": "subscribed", "collection": self.collection}))

    async def disconnect(self, close_code):
        for group in getattr(self, "subscriptions", []):
            await self.channel_layer.group_discard(group, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        # push only; answer pings so clients can keep the socket alive
        if text_data and text_data.strip() == "ping":
            await self.send(json.dumps({"type": "pong"}))

    async def collection_change(self, event):
        # event: {"type": "collection.change", "collection", "action", "id", "userId", "data"}
        await self.send(json.dumps(event, default=str))
