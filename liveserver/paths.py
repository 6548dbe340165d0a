import logging
from pathlib import Path, PurePosixPath, PureWindowsPath

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def is_safe(request_path):
    """Check a request path only names things below the server root.

    Rejects root anchors, drive or UNC prefixes, ``..`` segments and NUL
    bytes. ``.`` and empty segments are harmless and ignored.
    """
    if "\x00" in request_path:
        return False
    path = PurePosixPath(request_path)
    if path.anchor:
        return False
    for part in path.parts:
        if part == "..":
            return False
        windows = PureWindowsPath(part)
        if windows.anchor or ".." in windows.parts:
            return False
    return True


def resolve_path(root, request_path):
    """Map the tail of a request URL onto a file under ``root``.

    Returns ``None`` whenever the path is unsafe or nothing exists there,
    so callers cannot tell the two apart.
    """
    if not is_safe(request_path):
        return None
    full_path = Path(root).joinpath(*PurePosixPath(request_path).parts)
    try:
        if full_path.is_dir():
            full_path = full_path / INDEX_FILE
        if not full_path.exists():
            return None
    except OSError as exc:
        # ENAMETOOLONG, or EACCES on a parent directory
        logger.error("Error when looking up path %s: %r", full_path, exc)
        return None
    return full_path
