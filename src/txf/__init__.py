"""txf: single-file transfer over one TCP connection.

- a fixed 32-byte header codec
- block send/receive over a stream socket
- transmitter and receiver roles that either side of the connection can play
"""

from .errors import ProtocolError, ResourceError, TransferError, TransportError, ValidationError
from .header import TransferHeader
from .orchestrator import run_connecting, run_listening, serve
from .receiver import Receiver
from .transmitter import Transmitter

__all__ = [
    "ProtocolError",
    "Receiver",
    "ResourceError",
    "TransferError",
    "TransferHeader",
    "Transmitter",
    "TransportError",
    "ValidationError",
    "run_connecting",
    "run_listening",
    "serve",
]
