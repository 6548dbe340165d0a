import logging
import sys

from aiohttp import web

from liveserver.app import make_app
from liveserver.cli import parse_args
from liveserver.errors import TriggerUnavailable

logger = logging.getLogger("liveserver")


def main(argv=None):
    config = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("parsed cli: %s", config)

    app = make_app(config.directory, static_only=config.static_only)

    print(f"Listening at http://{config.addr}:{config.port}")
    try:
        web.run_app(app, host=config.addr, port=config.port, print=None)
    except TriggerUnavailable as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("Opening TCP listener: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
