import logging
from pathlib import Path

from aiohttp import web

from liveserver.bus import ReloadBus
from liveserver.paths import resolve_path
from liveserver.responder import not_found, respond
from liveserver.session import LiveClientSession
from liveserver.trigger import TriggerListener

logger = logging.getLogger(__name__)

ROOT_KEY = web.AppKey("root", Path)
BUS_KEY = web.AppKey("bus", ReloadBus)
TRIGGER_KEY = web.AppKey("trigger", TriggerListener)


# -------- WebSocket --------
async def websocket_handler(request):
    ws = web.WebSocketResponse()
    await ws.prepare(request)

    session = LiveClientSession(ws, request.app[BUS_KEY])
    try:
        await session.run()
    finally:
        await ws.close()
    return ws


# -------- HTTP handlers --------
async def file_handler(request):
    path = resolve_path(request.app[ROOT_KEY], request.match_info.get("path", ""))
    if path is None:
        return not_found()
    return await respond(request, path)


async def static_handler(request):
    path = resolve_path(request.app[ROOT_KEY], request.match_info.get("path", ""))
    if path is None or not path.is_file():
        return not_found()
    return web.FileResponse(path)


# -------- Lifecycle --------
async def start_trigger(app):
    app[TRIGGER_KEY].start()


async def stop_trigger(app):
    app[TRIGGER_KEY].stop()


async def close_bus(app):
    app[BUS_KEY].close()


def make_app(root, static_only=False, trigger=True):
    """Build the application serving ``root``.

    With ``static_only`` the directory is served as-is: no script
    injection, no ``/ws`` and no SIGHUP handling. ``trigger=False`` keeps
    the live routes but leaves the signal handler uninstalled.
    """
    app = web.Application()
    app[ROOT_KEY] = Path(root)

    if static_only:
        app.router.add_get("/", static_handler)
        app.router.add_get("/{path:.*}", static_handler)
        return app

    bus = ReloadBus()
    app[BUS_KEY] = bus
    app.router.add_get("/ws", websocket_handler)
    app.router.add_get("/", file_handler)
    app.router.add_get("/{path:.*}", file_handler)

    if trigger:
        app[TRIGGER_KEY] = TriggerListener(bus)
        app.on_startup.append(start_trigger)
        app.on_cleanup.append(stop_trigger)
    app.on_shutdown.append(close_bus)
    return app
