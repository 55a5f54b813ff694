from __future__ import annotations

import socket
import time
from dataclasses import dataclass, field
from typing import BinaryIO, Protocol

from .header import TransferHeader


@dataclass(slots=True)
class WorkContext:
    """State of one transfer, owned by the role that created it."""

    file: BinaryIO | None = None
    size: int = 0
    header: TransferHeader | None = None
    path: str = ""

    @property
    def ready(self) -> bool:
        return self.file is not None and self.header is not None

    def close(self) -> None:
        if self.file is not None:
            self.file.close()
            self.file = None


@dataclass(slots=True)
class Metrics:
    file_name: str = ""
    bytes_transferred: int = 0
    chunks: int = 0
    start_ts: float = field(default_factory=time.monotonic)
    end_ts: float | None = None

    @property
    def duration_s(self) -> float:
        if self.end_ts is None:
            return 0.0
        return max(0.0, self.end_ts - self.start_ts)

    @property
    def throughput_mbps(self) -> float:
        if self.duration_s <= 0:
            return 0.0
        return (self.bytes_transferred * 8 / 1_000_000) / self.duration_s


class RoleStrategy(Protocol):
    @property
    def name(self) -> str: ...

    def init(self, argument: str) -> WorkContext: ...

    def check(self, ctx: WorkContext) -> None:
        """Raise before any connection is made if ``ctx`` cannot be used."""

    def run(self, conn: socket.socket, ctx: WorkContext) -> Metrics: ...

    def finish(self, ctx: WorkContext) -> None: ...
