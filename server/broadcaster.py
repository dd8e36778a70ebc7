"""Fan-out of navigation messages from the receiver thread to WebSocket clients."""

import asyncio

__all__ = ["NavigationBroadcaster"]


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    # Drop the oldest message so a slow client never stalls the receiver thread
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


class NavigationBroadcaster:
    """Subscriber queues plus the latest navigation message.

    ``publish`` is called from the receiver thread; every other method runs
    on the event loop thread, and ``publish`` hands its work over with
    ``call_soon_threadsafe``, so no lock is needed.

    A new subscriber is primed with the latest message, so a client that
    connects between fixes sees the current position right away.
    """

    def __init__(self) -> None:
        self._queues: list[asyncio.Queue[str]] = []
        self._latest: str | None = None

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    @property
    def latest(self) -> str | None:
        return self._latest

    def subscribe(self, maxsize: int) -> asyncio.Queue[str]:
        """Register and return a new bounded subscriber queue."""
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        if self._latest is not None:
            queue.put_nowait(self._latest)
        self._queues.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[str]) -> None:
        """Unregister a subscriber queue; unknown queues are ignored."""
        if queue in self._queues:
            self._queues.remove(queue)

    def publish(self, message: str, loop: asyncio.AbstractEventLoop) -> None:
        """Hand a message over from the receiver thread."""
        loop.call_soon_threadsafe(self._deliver, message)

    def _deliver(self, message: str) -> None:
        self._latest = message
        for queue in self._queues:
            _enqueue_message(queue, message)
