import argparse
import ipaddress
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Config:
    directory: Path
    port: int = 4000
    addr: str = "0.0.0.0"
    static_only: bool = False
    verbose: bool = False


def _ip_address(value):
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid IP address: {value!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="liveserver",
        description="Serve a directory and reload open pages on SIGHUP",
    )
    parser.add_argument("directory", type=Path, help="Directory to serve")
    parser.add_argument(
        "-p", "--port", type=int, default=4000,
        help="Port on which to listen for requests",
    )
    parser.add_argument(
        "-a", "--addr", type=_ip_address, default="0.0.0.0",
        help="Address on which to listen for requests",
    )
    parser.add_argument(
        "-s", "--static", dest="static_only", action="store_true",
        help="Plain static server: no script injection, no /ws, SIGHUP is ignored",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log at DEBUG level"
    )
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.directory.is_dir():
        parser.error(f"not a directory: {args.directory}")
    if not 0 <= args.port <= 65535:
        parser.error(f"port out of range: {args.port}")
    return Config(
        directory=args.directory.resolve(),
        port=args.port,
        addr=args.addr,
        static_only=args.static_only,
        verbose=args.verbose,
    )
