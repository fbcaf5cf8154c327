"""Change notifications that drive live collection subscriptions."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from redis.asyncio import Redis
from redis.asyncio.client import PubSub
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Fans out "collection changed" notifications to subscribers.

    Every listener reads from its own in-process queue. With a Redis client,
    notifications travel over pub/sub so every worker process sees them, and a
    background task copies them into the queue. If a publish fails, the
    notification still reaches the listeners of the publishing process.
    """

    def __init__(self, redis_client: Redis | None = None, channel_prefix: str = "suds_changes"):
        """Initialize change feed.

        Args:
            redis_client: Optional Redis client. If None, fan-out is in-process.
            channel_prefix: Prefix for pub/sub channel names
        """
        self.redis = redis_client
        self.distributed = redis_client is not None
        self.channel_prefix = channel_prefix
        self._listeners: dict[str, set[asyncio.Queue[str]]] = defaultdict(set)

    def _channel(self, collection: str) -> str:
        return f"{self.channel_prefix}:{collection}"

    async def publish(self, collection: str) -> None:
        """Notify subscribers that a collection changed."""
        if self.distributed:
            try:
                await self.redis.publish(self._channel(collection), collection)
                return
            except RedisError as exc:
                logger.warning(
                    f"Failed to publish change for {collection}, "
                    f"only local listeners will see it: {exc}"
                )

        self._deliver_locally(collection)

    def _deliver_locally(self, collection: str) -> None:
        for queue in self._listeners.get(collection, ()):
            queue.put_nowait(collection)

    def listener_count(self, collection: str) -> int:
        return len(self._listeners.get(collection, ()))

    @asynccontextmanager
    async def listen(self, collection: str) -> AsyncIterator[AsyncIterator[str]]:
        """Register for notifications on a collection for the life of the context."""
        queue: asyncio.Queue[str] = asyncio.Queue()
        pubsub: PubSub | None = None
        relay: asyncio.Task[None] | None = None

        if self.distributed:
            pubsub = self.redis.pubsub()
            await pubsub.subscribe(self._channel(collection))
            relay = asyncio.create_task(self._relay_pubsub(pubsub, queue))

        self._listeners[collection].add(queue)
        try:
            yield self._drain_queue(queue)
        finally:
            self._listeners[collection].discard(queue)
            if not self._listeners[collection]:
                del self._listeners[collection]
            if relay is not None:
                relay.cancel()
                with suppress(asyncio.CancelledError):
                    await relay
            if pubsub is not None:
                # Closing resets the connection and drops its subscriptions
                await pubsub.aclose()

    @staticmethod
    async def _drain_queue(queue: asyncio.Queue[str]) -> AsyncIterator[str]:
        while True:
            yield await queue.get()

    @staticmethod
    async def _relay_pubsub(pubsub: PubSub, queue: asyncio.Queue[str]) -> None:
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                data = message["data"]
                queue.put_nowait(data.decode() if isinstance(data, bytes) else data)
        except RedisError as exc:
            logger.warning(f"Change feed pub/sub connection lost: {exc}")
