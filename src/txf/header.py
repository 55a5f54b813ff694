from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass

from .constants import FILENAME_LEN, HEADER_FORMAT, HEADER_SIZE, MAGIC_RCVD, MAGIC_SEND


@dataclass(frozen=True, slots=True)
class TransferHeader:
    magic: int
    file_size: int
    file_name: str = ""

    @property
    def is_request(self) -> bool:
        return self.magic == MAGIC_SEND

    @property
    def is_ack(self) -> bool:
        return self.magic == MAGIC_RCVD

    @property
    def magic_text(self) -> str:
        raw = (self.magic & 0xFFFFFFFF).to_bytes(4, "big")
        return raw.decode("ascii", errors="replace")

    def to_bytes(self) -> bytes:
        if not 0 <= self.file_size <= 0xFFFFFFFF:
            raise ValueError(f"file size out of range: {self.file_size}")
        # struct pads a short name with zeros and cuts a long one at 20 bytes
        name = self.file_name.encode("ascii", errors="replace")
        return struct.pack(
            HEADER_FORMAT,
            self.magic & 0xFFFFFFFF,
            self.file_size,
            name,
            0,
        )

    @staticmethod
    def from_bytes(raw: bytes) -> "TransferHeader":
        """Decode a header without validating it.

        Never raises: short input is zero padded and trailing bytes are
        ignored. The terminator is forced to zero before the name is read,
        so the name is at most 20 characters long. Callers check ``magic``.
        """
        buf = bytearray(bytes(raw[:HEADER_SIZE]).ljust(HEADER_SIZE, b"\x00"))
        buf[8 + FILENAME_LEN] = 0
        magic, file_size, name, _term = struct.unpack(HEADER_FORMAT, bytes(buf))
        name = name.split(b"\x00", 1)[0]
        return TransferHeader(
            magic=magic,
            file_size=file_size,
            file_name=name.decode("ascii", errors="replace"),
        )

    @staticmethod
    def request(file_name: str, file_size: int) -> "TransferHeader":
        return TransferHeader(magic=MAGIC_SEND, file_size=file_size, file_name=file_name)

    def acknowledge(self) -> "TransferHeader":
        return dataclasses.replace(self, magic=MAGIC_RCVD)
