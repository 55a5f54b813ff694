from __future__ import annotations

import argparse
import json
import logging

from .constants import DEFAULT_TIMEOUT_S
from .errors import TransferError
from .orchestrator import run_connecting, serve
from .receiver import Receiver
from .role import RoleStrategy
from .transmitter import Transmitter

logger = logging.getLogger(__name__)


def port_number(text: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be 0-65535, got {port}")
    return port


def make_role(args: argparse.Namespace) -> RoleStrategy:
    role = args.role
    if role is None:
        # a bare HOST PORT invocation listens as transmitter, HOST PORT PATH
        # listens as receiver
        role = "recv" if args.path is not None else "send"
    if role == "send":
        return Transmitter()
    return Receiver(directory=args.out_dir)


def cmd_transfer(args: argparse.Namespace) -> int:
    role = make_role(args)
    argument = args.path or ""

    try:
        if args.mode == "connect":
            metrics = run_connecting(args.host, args.port, role, argument, timeout=args.timeout)
        else:
            metrics = serve(args.host, args.port, role, argument, timeout=args.timeout)
    except TransferError as exc:
        logger.error("%s: %s", role.name, exc)
        return 1

    payload = {
        "role": role.name,
        "file": metrics.file_name,
        "bytes": metrics.bytes_transferred,
        "seconds": metrics.duration_s,
        "mbps": metrics.throughput_mbps,
    }
    print(json.dumps(payload, indent=2) if args.json else payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="txf", description="Send one file over a TCP connection.")
    p.add_argument("host", help="address to listen on or connect to")
    p.add_argument("port", type=port_number)
    p.add_argument("path", nargs="?", default=None, help="file to send")
    p.add_argument("--mode", choices=["listen", "connect"], default="listen")
    p.add_argument("--role", choices=["send", "recv"], default=None)
    p.add_argument("--out-dir", default=".", help="where received files are written")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help="socket timeout in seconds")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_transfer)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
