"""
Tree Sync
In-process broadcast of schema trees between editor sessions sharing a channel name.
"""

from collections import defaultdict
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError
from returns.pipeline import is_successful

from blueprint import Node
from core import (
    JSONParseError,
    ValidationError,
    dumps_bytes,
    get_logger,
    loads,
    validate_json_size,
    validate_tree,
)
from core.validate import MAX_PAYLOAD_SIZE, MAX_TREE_DEPTH, MAX_TREE_NODES
from monitoring import metrics_collector

logger = get_logger(__name__)

SCHEMA_UPDATE = "SCHEMA_UPDATE"

TreeListener = Callable[[Node], None]


class SyncHub:
    """Routes encoded messages to every channel opened under the same name."""

    def __init__(
        self,
        max_payload_size: int = MAX_PAYLOAD_SIZE,
        max_tree_depth: int = MAX_TREE_DEPTH,
        max_tree_nodes: int = MAX_TREE_NODES,
    ) -> None:
        self.max_payload_size = max_payload_size
        self.max_tree_depth = max_tree_depth
        self.max_tree_nodes = max_tree_nodes
        self._channels: dict[str, list["SyncChannel"]] = defaultdict(list)

    def open(self, name: str) -> "SyncChannel":
        """Open a new channel; it receives what its peers broadcast."""
        channel = SyncChannel(self, name)
        self._channels[name].append(channel)
        logger.debug("sync_channel_open", channel=name, peers=len(self._channels[name]) - 1)
        return channel

    def peers(self, name: str) -> int:
        return len(self._channels.get(name, ()))

    def deliver(self, name: str, data: bytes) -> int:
        """Hand an encoded message from an external transport to every channel named ``name``."""
        channels = list(self._channels.get(name, ()))
        for channel in channels:
            channel._receive(data)
        return len(channels)

    def _detach(self, channel: "SyncChannel") -> None:
        channels = self._channels.get(channel.name, [])
        if channel in channels:
            channels.remove(channel)
        if not channels:
            self._channels.pop(channel.name, None)

    def _publish(self, sender: "SyncChannel", data: bytes) -> int:
        delivered = 0
        # Copy so listeners may open or close channels during delivery
        for channel in list(self._channels.get(sender.name, ())):
            if channel is sender:
                continue
            channel._receive(data)
            delivered += 1
        return delivered


class SyncChannel:
    """
    One session's endpoint on a hub.

    Outgoing trees are wrapped in a ``{"type": "SCHEMA_UPDATE", "payload": tree}``
    envelope; incoming envelopes are validated before listeners see a Node.
    """

    def __init__(self, hub: SyncHub, name: str) -> None:
        self.hub = hub
        self.name = name
        self._listeners: list[TreeListener] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: TreeListener) -> Callable[[], None]:
        """Register ``listener`` for received trees; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def broadcast_update(self, tree: Node) -> int:
        """Send ``tree`` to every other channel; returns the number of peers reached."""
        if self._closed:
            logger.warning("sync_broadcast_closed", channel=self.name)
            return 0
        data = dumps_bytes({"type": SCHEMA_UPDATE, "payload": tree.to_wire()})
        metrics_collector.record_sync_message("out")
        return self.hub._publish(self, data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        self.hub._detach(self)
        logger.debug("sync_channel_closed", channel=self.name)

    def _receive(self, data: bytes) -> None:
        tree = self._decode(data)
        if tree is None:
            return
        metrics_collector.record_sync_message("in")
        for listener in list(self._listeners):
            listener(tree)

    def _decode(self, data: bytes) -> Node | None:
        try:
            validate_json_size(data, self.hub.max_payload_size, "Sync message")
            message: Any = loads(data)
        except (ValidationError, JSONParseError) as e:
            logger.warning("sync_message_dropped", channel=self.name, reason=str(e))
            metrics_collector.record_error("invalid_message", "sync")
            return None

        if not isinstance(message, dict) or message.get("type") != SCHEMA_UPDATE:
            logger.debug("sync_message_ignored", channel=self.name)
            return None

        payload = message.get("payload")
        result = validate_tree(payload, self.hub.max_tree_depth, self.hub.max_tree_nodes)
        if not is_successful(result):
            error = result.failure()
            logger.warning("sync_tree_rejected", channel=self.name, reason=error.message)
            metrics_collector.record_error("invalid_tree", "sync")
            return None
        try:
            return Node.from_wire(payload)
        except PydanticValidationError as e:
            logger.warning("sync_tree_rejected", channel=self.name, reason=f"{e.error_count()} invalid fields")
            metrics_collector.record_error("invalid_tree", "sync")
            return None
