import asyncio
import os
import signal

import pytest

from liveserver.app import BUS_KEY, TRIGGER_KEY, make_app
from liveserver.bus import ReloadBus
from liveserver.errors import TriggerUnavailable
from liveserver.trigger import TriggerListener

from .conftest import wait_for_receivers

pytestmark = pytest.mark.skipif(
    not hasattr(signal, "SIGHUP"), reason="SIGHUP is POSIX only"
)


async def test_sighup_publishes_once():
    bus = ReloadBus()
    receiver = bus.attach()
    listener = TriggerListener(bus)
    listener.start()
    try:
        os.kill(os.getpid(), signal.SIGHUP)
        await asyncio.wait_for(receiver.receive(), 2)
        await asyncio.sleep(0.05)
        assert receiver.pending == 0
    finally:
        listener.stop()
    assert not listener.listening


async def test_listener_stops_when_bus_is_closed():
    bus = ReloadBus()
    listener = TriggerListener(bus)
    listener.start()
    bus.close()

    os.kill(os.getpid(), signal.SIGHUP)
    for _ in range(100):
        if not listener.listening:
            break
        await asyncio.sleep(0.01)
    assert not listener.listening
    listener.stop()


async def test_missing_signal_is_unavailable():
    listener = TriggerListener(ReloadBus())
    listener.signum = None
    with pytest.raises(TriggerUnavailable):
        listener.start()


async def test_sighup_reloads_connected_pages(aiohttp_client, site):
    client = await aiohttp_client(make_app(site))
    assert client.app[TRIGGER_KEY].listening
    bus = client.app[BUS_KEY]

    first = await client.ws_connect("/ws")
    second = await client.ws_connect("/ws")
    await wait_for_receivers(bus, 2)

    os.kill(os.getpid(), signal.SIGHUP)

    for ws in (first, second):
        msg = await ws.receive(timeout=2)
        assert msg.data == b""

    await first.close()
    await second.close()
