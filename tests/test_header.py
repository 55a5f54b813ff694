from __future__ import annotations

import struct

import pytest

from txf.constants import HEADER_SIZE, MAGIC_RCVD, MAGIC_SEND
from txf.header import TransferHeader


def test_roundtrip_request():
    h = TransferHeader.request("report.bin", 2500)
    raw = h.to_bytes()
    p = TransferHeader.from_bytes(raw)
    assert len(raw) == HEADER_SIZE
    assert p.magic == MAGIC_SEND
    assert p.file_size == 2500
    assert p.file_name == "report.bin"
    assert p.is_request


@pytest.mark.parametrize("size", [0, 1, 1024, 0x7FFFFFFF])
def test_roundtrip_sizes(size):
    p = TransferHeader.from_bytes(TransferHeader.request("a", size).to_bytes())
    assert p.file_size == size


def test_wire_layout():
    raw = TransferHeader.request("x.txt", 0x01020304).to_bytes()
    assert raw[:4] == b"SEND"
    assert raw[4:8] == b"\x01\x02\x03\x04"
    assert raw[8:13] == b"x.txt"
    assert raw[13:] == b"\x00" * (HEADER_SIZE - 13)


def test_ack_magic_on_wire():
    raw = TransferHeader.request("x", 5).acknowledge().to_bytes()
    assert raw[:4] == b"RCVD"


def test_acknowledge_echoes_name_and_size():
    h = TransferHeader.request("report.bin", 2500).acknowledge()
    assert h.magic == MAGIC_RCVD
    assert h.is_ack
    assert (h.file_name, h.file_size) == ("report.bin", 2500)


def test_long_name_is_cut_at_twenty_bytes():
    raw = TransferHeader.request("abcdefghijklmnopqrstuvwxyz", 1).to_bytes()
    assert TransferHeader.from_bytes(raw).file_name == "abcdefghijklmnopqrst"


def test_terminator_forced_to_zero():
    raw = struct.pack("!II20sB3s", MAGIC_SEND, 3, b"A" * 20, ord("B"), b"CCC")
    p = TransferHeader.from_bytes(raw)
    assert p.file_name == "A" * 20


def test_decode_short_input_does_not_raise():
    p = TransferHeader.from_bytes(b"SEN")
    assert p.magic == int.from_bytes(b"SEN\x00", "big")
    assert p.file_size == 0
    assert p.file_name == ""


def test_decode_garbage_leaves_validation_to_caller():
    p = TransferHeader.from_bytes(b"DEAD" + b"\xff" * 28)
    assert not p.is_request
    assert not p.is_ack
    assert p.magic_text == "DEAD"


@pytest.mark.parametrize("size", [-1, 2**32, 2**32 + 5])
def test_encode_rejects_size_that_does_not_fit(size):
    with pytest.raises(ValueError):
        TransferHeader.request("a", size).to_bytes()
