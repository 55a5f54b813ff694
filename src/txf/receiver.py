from __future__ import annotations

import logging
import os
import socket
import time
from dataclasses import dataclass

from .constants import HEADER_SIZE, MAX_FILE_SIZE
from .errors import ProtocolError, ResourceError, TransportError
from .header import TransferHeader
from .net import chunk_sizes, recv_all, send_all
from .paths import extract_filename, is_valid_filename
from .role import Metrics, WorkContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Receiver:
    """Accepts one file and writes it under ``directory``.

    The file name comes from the request header. A transfer that breaks off
    halfway leaves the partial file in place.
    """

    directory: str = "."

    @property
    def name(self) -> str:
        return "recv"

    def init(self, argument: str) -> WorkContext:
        return WorkContext()

    def check(self, ctx: WorkContext) -> None:
        pass

    def run(self, conn: socket.socket, ctx: WorkContext) -> Metrics:
        raw = recv_all(conn, HEADER_SIZE)
        if len(raw) < HEADER_SIZE:
            raise TransportError("short receive (header)")

        header = TransferHeader.from_bytes(raw)
        if not header.is_request:
            raise ProtocolError(f"invalid header magic {header.magic_text!r}")
        if header.file_size > MAX_FILE_SIZE:
            raise ProtocolError(f"file size {header.file_size} out of range")

        file_name = extract_filename(header.file_name)
        if not is_valid_filename(file_name):
            raise ProtocolError(f"invalid file name {header.file_name!r}")

        ctx.header = header
        ctx.size = header.file_size
        ctx.path = os.path.join(self.directory, file_name)
        logger.info("%s, %d byte", file_name, ctx.size)

        try:
            ctx.file = open(ctx.path, "wb")
        except OSError as exc:
            raise ResourceError(f"cannot create {ctx.path}: {exc}") from exc

        metrics = Metrics(file_name=file_name)
        try:
            for size in chunk_sizes(ctx.size):
                block = recv_all(conn, size)
                if len(block) < size:
                    raise TransportError(
                        f"short receive (data) after {metrics.bytes_transferred} bytes"
                    )
                try:
                    ctx.file.write(block)
                except OSError as exc:
                    raise ResourceError(f"write failed on {ctx.path}: {exc}") from exc
                metrics.bytes_transferred += size
                metrics.chunks += 1
        finally:
            ctx.close()

        if send_all(conn, header.acknowledge().to_bytes()) < HEADER_SIZE:
            raise TransportError("short send (ack)")

        metrics.end_ts = time.monotonic()
        logger.info("received %s (%d bytes)", file_name, metrics.bytes_transferred)
        return metrics

    def finish(self, ctx: WorkContext) -> None:
        ctx.close()
