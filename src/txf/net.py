from __future__ import annotations

import logging
import socket
from typing import Iterator

from .constants import BLOCK_SIZE

logger = logging.getLogger(__name__)


def apply_timeout(sock: socket.socket, timeout: float | None) -> None:
    if timeout is not None and timeout > 0:
        sock.settimeout(timeout)


def listening(host: str, port: int, timeout: float | None = None) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(1)
    except OSError:
        sock.close()
        raise
    apply_timeout(sock, timeout)
    return sock


def connecting(host: str, port: int, timeout: float | None = None) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    apply_timeout(sock, timeout)
    try:
        sock.connect((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def send_all(sock: socket.socket, buffer: bytes, size: int | None = None) -> int:
    """Write ``size`` bytes of ``buffer``; return how many actually went out.

    A result below ``size`` means the connection failed. Nothing is retried
    beyond the write loop itself.
    """
    if size is None:
        size = len(buffer)
    view = memoryview(buffer)[:size]
    pos = 0
    while pos < size:
        try:
            written = sock.send(view[pos:])
        except OSError as exc:
            logger.debug("send failed after %d/%d bytes: %s", pos, size, exc)
            break
        if written <= 0:
            break
        pos += written
    return pos


def recv_all(sock: socket.socket, size: int) -> bytes:
    """Read until ``size`` bytes arrive or the peer goes away.

    A result shorter than ``size`` means the connection failed.
    """
    data = bytearray()
    while len(data) < size:
        try:
            chunk = sock.recv(size - len(data))
        except OSError as exc:
            logger.debug("recv failed after %d/%d bytes: %s", len(data), size, exc)
            break
        if not chunk:
            logger.debug("peer closed after %d/%d bytes", len(data), size)
            break
        data.extend(chunk)
    return bytes(data)


def chunk_sizes(total: int, block: int = BLOCK_SIZE) -> Iterator[int]:
    for offset in range(0, total, block):
        yield min(block, total - offset)
