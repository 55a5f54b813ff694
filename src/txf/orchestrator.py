from __future__ import annotations

import logging
import socket

from .errors import TransportError
from .net import apply_timeout, connecting, listening
from .role import Metrics, RoleStrategy

logger = logging.getLogger(__name__)


def serve(
    host: str,
    port: int,
    role: RoleStrategy,
    argument: str = "",
    timeout: float | None = None,
) -> Metrics:
    """Listen on ``host:port`` and run ``role`` over the first connection."""
    try:
        listener = listening(host, port, timeout=timeout)
    except (OSError, OverflowError) as exc:
        raise TransportError(f"cannot listen on {host}:{port}: {exc}") from exc
    with listener:
        return run_listening(listener, role, argument, timeout=timeout)


def run_listening(
    listener: socket.socket,
    role: RoleStrategy,
    argument: str = "",
    timeout: float | None = None,
) -> Metrics:
    local_host, local_port = listener.getsockname()[:2]
    logger.info("* server (%s) address %s port %d", role.name, local_host, local_port)

    ctx = role.init(argument)
    try:
        role.check(ctx)
        try:
            conn, peer = listener.accept()
        except OSError as exc:
            raise TransportError(f"accept failed: {exc}") from exc
        with conn:
            apply_timeout(conn, timeout)
            logger.info("connected from %s port %d", peer[0], peer[1])
            return role.run(conn, ctx)
    finally:
        role.finish(ctx)


def run_connecting(
    host: str,
    port: int,
    role: RoleStrategy,
    argument: str = "",
    timeout: float | None = None,
) -> Metrics:
    """Connect to ``host:port`` and run ``role`` over that connection."""
    logger.info("* client (%s)", role.name)

    ctx = role.init(argument)
    try:
        role.check(ctx)
        try:
            conn = connecting(host, port, timeout=timeout)
        except (OSError, OverflowError) as exc:
            raise TransportError(f"cannot connect to {host}:{port}: {exc}") from exc
        with conn:
            logger.info("connected to %s port %d", host, port)
            return role.run(conn, ctx)
    finally:
        role.finish(ctx)
