from __future__ import annotations

import logging
import os
import socket
import time
from dataclasses import dataclass

from .constants import HEADER_SIZE, MAX_FILE_SIZE, MAX_PATH_LEN
from .errors import ProtocolError, ResourceError, TransportError, ValidationError
from .header import TransferHeader
from .net import chunk_sizes, recv_all, send_all
from .paths import extract_filename, is_valid_filename, normalize_path
from .role import Metrics, WorkContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Transmitter:
    """Reads a local file and sends it, then waits for the receiver's ack."""

    max_path_len: int = MAX_PATH_LEN

    @property
    def name(self) -> str:
        return "send"

    def init(self, argument: str) -> WorkContext:
        ctx = WorkContext(path=normalize_path(argument, self.max_path_len))
        file_name = extract_filename(ctx.path.replace(os.sep, "/"))
        if not is_valid_filename(file_name):
            logger.error("invalid file name derived from %r", argument)
            return ctx

        ctx.header = TransferHeader.request(file_name, 0)
        try:
            f = open(ctx.path, "rb")
        except OSError as exc:
            logger.error("cannot open %s: %s", ctx.path, exc)
            return ctx

        size = os.fstat(f.fileno()).st_size
        if size > MAX_FILE_SIZE:
            logger.error("%s is too large to send (%d bytes)", ctx.path, size)
            f.close()
            return ctx

        ctx.file = f
        ctx.size = size
        ctx.header = TransferHeader.request(file_name, size)
        logger.info("%s, %d byte", file_name, size)
        return ctx

    def check(self, ctx: WorkContext) -> None:
        if ctx.header is None:
            raise ValidationError(f"nothing to send for {ctx.path!r}")
        if ctx.file is None:
            raise ResourceError(f"file {ctx.path!r} is not open")

    def run(self, conn: socket.socket, ctx: WorkContext) -> Metrics:
        self.check(ctx)

        metrics = Metrics(file_name=ctx.header.file_name)

        if send_all(conn, ctx.header.to_bytes()) < HEADER_SIZE:
            raise TransportError("short send (header)")

        for size in chunk_sizes(ctx.size):
            try:
                block = ctx.file.read(size)
            except OSError as exc:
                raise ResourceError(f"read failed on {ctx.path!r}: {exc}") from exc
            if len(block) < size:
                raise ResourceError(f"{ctx.path!r} shrank while being sent")
            if send_all(conn, block) < size:
                raise TransportError(
                    f"short send (data) after {metrics.bytes_transferred} bytes"
                )
            metrics.bytes_transferred += size
            metrics.chunks += 1

        raw = recv_all(conn, HEADER_SIZE)
        if len(raw) < HEADER_SIZE:
            raise TransportError("short receive (ack)")

        reply = TransferHeader.from_bytes(raw)
        if not reply.is_ack:
            raise ProtocolError(f"invalid ack magic {reply.magic_text!r}")

        metrics.end_ts = time.monotonic()
        logger.info("sent %s (%d bytes)", metrics.file_name, metrics.bytes_transferred)
        return metrics

    def finish(self, ctx: WorkContext) -> None:
        ctx.close()
