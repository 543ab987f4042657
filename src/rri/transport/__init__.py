"""Transport layer implementations."""

from .base import (
    Connection,
    RriError,
    TransportError,
    TransportWriteError,
    TransportReadError,
    ShortRead,
    TransportTimeout,
    TransportConnectionError,
    FramingError,
    OversizedPayloadError,
    FrameTooLargeError,
    FrameDecodeError,
)

from . import tls
from .tls import StreamConnection, connect
