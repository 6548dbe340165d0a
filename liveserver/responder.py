import asyncio
import logging
import mimetypes
import os

from aiohttp import web

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}

RELOAD_SCRIPT = """<script>
(() => {
  const url = new URL(window.location);
  url.pathname = '/ws';
  url.search = '';
  url.hash = '';
  url.protocol = window.location.protocol === 'https:' ? 'wss:' : 'ws:';

  const socket = new WebSocket(url);
  console.log('Connecting to WebSocket...');
  socket.addEventListener('open', () => console.log('Connected.'));
  socket.addEventListener('message', () => window.location.reload());

  window.socket = socket;
})();
</script>"""


def inject_script(html):
    """Put the reload script before the first ``</body>``, or at the end."""
    injected = html.replace("</body>", RELOAD_SCRIPT + "</body>", 1)
    if len(injected) == len(html):
        injected = html + RELOAD_SCRIPT
    return injected


def guess_media_type(path):
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or "application/octet-stream"


def not_found():
    return web.Response(status=404, text="404: Page not found.")


# -------- HTML --------
async def _respond_html(path, media_type):
    loop = asyncio.get_running_loop()
    try:
        html = await loop.run_in_executor(None, _read_text, path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error when reading file at path %s: %r", path, exc)
        return not_found()
    return web.Response(
        text=inject_script(html), content_type=media_type, headers=NO_CACHE_HEADERS
    )


def _read_text(path):
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


# -------- Everything else --------
async def _respond_stream(request, path, media_type):
    loop = asyncio.get_running_loop()
    try:
        f, size = await loop.run_in_executor(None, _open_binary, path)
    except OSError as exc:
        logger.error("Error when reading file at path %s: %r", path, exc)
        return not_found()

    try:
        response = web.StreamResponse(headers=NO_CACHE_HEADERS)
        response.content_type = media_type
        response.content_length = size
        await response.prepare(request)
        while True:
            try:
                chunk = await loop.run_in_executor(None, f.read, CHUNK_SIZE)
            except OSError as exc:
                # headers are already out, all we can do is stop
                logger.error("Error while streaming %s: %r", path, exc)
                break
            if not chunk:
                break
            await response.write(chunk)
        await response.write_eof()
        return response
    finally:
        f.close()


def _open_binary(path):
    f = open(path, "rb")
    try:
        return f, os.fstat(f.fileno()).st_size
    except OSError:
        f.close()
        raise


async def respond(request, path):
    """Build the response for a file that :func:`resolve_path` accepted."""
    media_type = guess_media_type(path)
    if media_type == "text/html":
        return await _respond_html(path, media_type)
    return await _respond_stream(request, path, media_type)
