import asyncio

import pytest


@pytest.fixture
def site(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text("<html><body>Hi</body></html>")
    (root / "docs").mkdir()
    (root / "docs" / "index.html").write_text("<p>no body tag</p>")
    (root / "logo.bin").write_bytes(bytes(range(256)) * 1024)
    (root / "style.css").write_text("body { color: red; }")
    (tmp_path / "secret.txt").write_text("top secret")
    return root


async def wait_for_receivers(bus, count, timeout=2.0):
    """Wait until ``count`` sessions are attached and past their drain."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while bus.receiver_count != count:
        if loop.time() > deadline:
            raise AssertionError(
                f"expected {count} receivers, have {bus.receiver_count}"
            )
        await asyncio.sleep(0.01)
