import asyncio
import enum
import logging

from liveserver.errors import BusClosed

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    ATTACHING = "attaching"
    DRAINING = "draining"
    ACTIVE = "active"
    CLOSED = "closed"


class LiveClientSession:
    """One browser tab's reload socket.

    Notifications that were already pending when the tab connected are
    dropped; after that every notification becomes one empty binary
    frame. Anything received from the peer, a close included, ends the
    session.
    """

    def __init__(self, ws, bus):
        self.ws = ws
        self.bus = bus
        self.state = None
        self.pushed = 0

    def _enter(self, state):
        logger.debug("Session %s -> %s", id(self), state.value)
        self.state = state

    async def run(self):
        self._enter(SessionState.ATTACHING)
        with self.bus.attach() as receiver:
            self._enter(SessionState.DRAINING)
            dropped = receiver.drain()
            if dropped:
                logger.debug("Dropped %d stale reload(s)", dropped)

            self._enter(SessionState.ACTIVE)
            peer = asyncio.ensure_future(self.ws.receive())
            notified = None
            try:
                while True:
                    notified = asyncio.ensure_future(receiver.receive())
                    done, _ = await asyncio.wait(
                        {peer, notified}, return_when=asyncio.FIRST_COMPLETED
                    )
                    if peer in done:
                        logger.debug("socket close")
                        break
                    try:
                        notified.result()
                    except BusClosed:
                        logger.debug("Reload bus closed, ending session")
                        break
                    if not await self._push():
                        break
            finally:
                await _cancel(peer, notified)
                self._enter(SessionState.CLOSED)

    async def _push(self):
        try:
            await self.ws.send_bytes(b"")
        except ConnectionError as exc:
            logger.error("Error sending reload message: %r", exc)
            return False
        self.pushed += 1
        logger.debug("Sent refresh message to page")
        return True


async def _cancel(*tasks):
    tasks = [task for task in tasks if task is not None]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
