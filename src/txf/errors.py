from __future__ import annotations


class TransferError(Exception):
    """Base class for anything that aborts a single transfer."""


class TransportError(TransferError):
    pass


class ProtocolError(TransferError):
    pass


class ResourceError(TransferError):
    pass


class ValidationError(TransferError):
    pass
