"""Transport interface.

This is the (small) contract that connection implementations should follow.
It lives outside :mod:`rri.protocol` so the framing and exchange logic remain
independent of how the bytes actually move.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class RriError(Exception):
    """Base class for all errors raised by this package."""


# Transport errors

class TransportError(RriError):
    """Base class for all transport-layer errors."""


class TransportWriteError(TransportError):
    """The stream failed or closed while a frame was being written."""


class TransportReadError(TransportError):
    """The stream failed or closed while a frame was being read."""


class ShortRead(TransportReadError):
    """ The stream ended before the requested number of bytes arrived.
        *obtained* is how many bytes were actually read, *expected* is how
        many were asked for.
    """

    def __init__(self, obtained: int, expected: int, message: Optional[str] = None):
        self.obtained = obtained
        self.expected = expected

        if message is None:
            message = f"expected {expected} bytes, stream closed after {obtained}"

        TransportReadError.__init__(self, message)


class TransportTimeout(TransportError):
    """A read or write did not complete within the configured timeout."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


# Framing errors

class FramingError(RriError):
    """Base class for errors in the length-prefixed framing."""


class OversizedPayloadError(FramingError):
    """The payload cannot be described by a four byte length field."""

    def __init__(self, length: int):
        self.length = length
        FramingError.__init__(self, f"payload of {length} bytes exceeds the four byte length field")


class FrameTooLargeError(FramingError):
    """An incoming frame declared a length beyond the permitted maximum."""

    def __init__(self, length: int, maximum: int):
        self.length = length
        self.maximum = maximum
        FramingError.__init__(self, f"frame declares {length} bytes, maximum allowed is {maximum}")


class FrameDecodeError(FramingError):
    """A frame payload could not be decoded as text."""


class Connection(ABC):
    """ Minimal contract for an established, bidirectional byte stream. Both
        operations block; neither is expected to be called concurrently.
    """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of *data*, or raise :class:`TransportWriteError`."""

    @abstractmethod
    def read_exactly(self, count: int) -> bytes:
        """Return exactly *count* bytes, or raise :class:`ShortRead`."""

    def frame_complete(self) -> None:
        """Called by the framer once a whole frame has been read."""

    def close(self) -> None:
        """Tear down the underlying stream."""

    @property
    def is_open(self) -> bool:
        """Whether the connection is currently usable."""
        return False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
