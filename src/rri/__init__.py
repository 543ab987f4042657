""" Python client for the registry interface: orders are submitted one at a
    time over a TLS connection, each as a length-prefixed frame, and the
    matching answer is read back before the next order goes out.
"""

# Utility components.

from . import json

# Protocol and transport layers.

from . import transport
from . import protocol

from .transport.base import (
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

# Primary public-facing interfaces.

from . import config
from . import begin
submit = begin.submit

from .transport.tls import connect
from .protocol.batch import split_batch
from .protocol.exchange import ExchangeAborted, run_exchange

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
