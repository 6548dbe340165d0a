"""Process-wide reload notifications.

Every attached :class:`Receiver` owns an unbounded queue, so a publish
fans out to all of them without blocking and a slow receiver never holds
back the others. Everything runs on the event loop thread (signals are
delivered there by ``loop.add_signal_handler``), so no lock is needed.
"""
import asyncio
import logging

from liveserver.errors import BusClosed

logger = logging.getLogger(__name__)

_CLOSED = object()


class Receiver:
    def __init__(self, bus):
        self._bus = bus
        self._queue = asyncio.Queue()
        self._torn_down = False

    @property
    def pending(self):
        """Number of notifications not yet received."""
        return self._queue.qsize() - int(self._torn_down)

    async def receive(self):
        item = await self._queue.get()
        if item is _CLOSED:
            # keep the marker so later calls fail the same way
            self._queue.put_nowait(_CLOSED)
            raise BusClosed()

    def drain(self):
        """Discard pending notifications without waiting. Returns the count."""
        dropped = 0
        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item is _CLOSED:
                self._queue.put_nowait(_CLOSED)
                break
            dropped += 1
        return dropped

    def detach(self):
        self._bus._receivers.discard(self)

    def _deliver(self, item=None):
        if item is _CLOSED:
            self._torn_down = True
        self._queue.put_nowait(item)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.detach()


class ReloadBus:
    def __init__(self):
        self._receivers = set()
        self._closed = False

    @property
    def closed(self):
        return self._closed

    @property
    def receiver_count(self):
        return len(self._receivers)

    def attach(self):
        receiver = Receiver(self)
        if self._closed:
            receiver._deliver(_CLOSED)
        else:
            self._receivers.add(receiver)
        return receiver

    def publish(self):
        """Queue one reload notification on every attached receiver.

        Returns how many receivers were reached. Raises :class:`BusClosed`
        once the bus has been closed.
        """
        if self._closed:
            raise BusClosed()
        receivers = list(self._receivers)
        for receiver in receivers:
            receiver._deliver()
        logger.debug("Published reload to %d receiver(s)", len(receivers))
        return len(receivers)

    def close(self):
        if self._closed:
            return
        self._closed = True
        for receiver in list(self._receivers):
            receiver._deliver(_CLOSED)
        self._receivers.clear()
