"""Development file server that reloads browser tabs on SIGHUP."""

from liveserver.app import make_app
from liveserver.bus import Receiver, ReloadBus
from liveserver.errors import BusClosed, LiveServerError, TriggerUnavailable

__version__ = "0.1.0"

__all__ = [
    "BusClosed",
    "LiveServerError",
    "Receiver",
    "ReloadBus",
    "TriggerUnavailable",
    "make_app",
]
