import asyncio
import logging
import signal

from liveserver.errors import BusClosed, TriggerUnavailable

logger = logging.getLogger(__name__)


class TriggerListener:
    """Publishes one reload on the bus for every SIGHUP the process gets."""

    def __init__(self, bus, signum=None):
        if signum is None:
            signum = getattr(signal, "SIGHUP", None)
        self.bus = bus
        self.signum = signum
        self._loop = None

    @property
    def listening(self):
        return self._loop is not None

    def start(self, loop=None):
        if self.signum is None:
            raise TriggerUnavailable("SIGHUP is not available on this platform")
        if loop is None:
            loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(self.signum, self._on_signal)
        except (NotImplementedError, RuntimeError, ValueError) as exc:
            raise TriggerUnavailable(
                f"Creating listener for {signal.Signals(self.signum).name}: {exc}"
            ) from exc
        self._loop = loop
        logger.info("Listening for %s", signal.Signals(self.signum).name)

    def stop(self):
        if self._loop is None:
            return
        self._loop.remove_signal_handler(self.signum)
        self._loop = None

    def _on_signal(self):
        try:
            self.bus.publish()
        except BusClosed:
            logger.error("Done listening for signals")
            self.stop()
            return
        logger.info("Received SIGHUP signal")
