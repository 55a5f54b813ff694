from __future__ import annotations

import json
import socket
import threading

import pytest

from txf.cli import build_parser, main, make_role
from txf.net import listening
from txf.orchestrator import run_listening
from txf.receiver import Receiver
from txf.transmitter import Transmitter


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["127.0.0.1", "9100"], Transmitter),
        (["127.0.0.1", "9100", "report.bin"], Receiver),
        (["127.0.0.1", "9100", "report.bin", "--role", "send"], Transmitter),
        (["127.0.0.1", "9100", "--role", "recv"], Receiver),
    ],
)
def test_role_wiring(argv, expected):
    args = build_parser().parse_args(argv)
    assert args.mode == "listen"
    assert isinstance(make_role(args), expected)


def test_out_dir_reaches_receiver(tmp_path):
    args = build_parser().parse_args(["127.0.0.1", "9100", "--role", "recv", "--out-dir", str(tmp_path)])
    assert make_role(args).directory == str(tmp_path)


def test_bad_port_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["127.0.0.1", "notaport"])
    assert exc.value.code == 2


def test_connect_refused_exits_1(tmp_path):
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()

    f = tmp_path / "a.txt"
    f.write_text("hi")
    assert main(["127.0.0.1", str(port), str(f), "--mode", "connect", "--role", "send"]) == 1


def test_send_over_cli(tmp_path, capsys):
    src = tmp_path / "report.bin"
    src.write_bytes(b"r" * 2500)
    out = tmp_path / "out"
    out.mkdir()

    listener = listening("127.0.0.1", 0, timeout=5.0)
    port = listener.getsockname()[1]
    t = threading.Thread(
        target=run_listening,
        args=(listener, Receiver(directory=str(out))),
        kwargs={"timeout": 5.0},
        daemon=True,
    )
    t.start()
    try:
        rc = main([
            "127.0.0.1", str(port), str(src),
            "--mode", "connect", "--role", "send", "--timeout", "5", "--json",
        ])
    finally:
        t.join(timeout=10.0)
        listener.close()

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["role"] == "send"
    assert payload["file"] == "report.bin"
    assert payload["bytes"] == 2500
    assert (out / "report.bin").read_bytes() == b"r" * 2500


def test_bare_invocation_fails_without_waiting_for_a_peer():
    results: list[int] = []
    t = threading.Thread(target=lambda: results.append(main(["127.0.0.1", "0"])), daemon=True)
    t.start()
    t.join(timeout=5.0)
    assert not t.is_alive()
    assert results == [1]


@pytest.mark.parametrize("port", ["70000", "-1"])
def test_port_out_of_range_is_usage_error(port):
    with pytest.raises(SystemExit) as exc:
        main(["127.0.0.1", port])
    assert exc.value.code == 2
