""" Length-prefixed framing for registry interface messages.

    Every order and every answer travels as a single frame:

        [4-byte length (uint32, network byte order)] [payload bytes]

    There is no checksum, version, or type tag; the length field only
    delimits the payload. This module is the one place where the length is
    converted to and from network byte order.
"""

from __future__ import annotations

import logging
import struct
from typing import Optional

from ..transport.base import (
    Connection,
    FrameDecodeError,
    FrameTooLargeError,
    FramingError,
    OversizedPayloadError,
    ShortRead,
    TransportWriteError,
)


HEADER = struct.Struct('!I')
MAXIMUM_LENGTH = 2 ** 32 - 1

# The registry interface is defined as UTF-8 text; the frame layer itself
# does not care, only the text helpers below do.

encoding = 'utf-8'

log = logging.getLogger(__name__)


def encode_frame(payload: bytes) -> bytes:
    """ Return *payload* with its four byte length prefix attached. A payload
        too long for the length field raises :class:`OversizedPayloadError`.
    """

    length = len(payload)
    if length > MAXIMUM_LENGTH:
        raise OversizedPayloadError(length)

    return HEADER.pack(length) + bytes(payload)


def decode_frame(buffer: bytes) -> bytes:
    """ The inverse of :func:`encode_frame`: *buffer* must contain exactly
        one complete frame, the payload of which is returned.
    """

    size = HEADER.size

    if len(buffer) < size:
        raise ShortRead(len(buffer), size)

    (length,) = HEADER.unpack_from(buffer)
    payload = buffer[size:size + length]

    if len(payload) < length:
        raise ShortRead(len(payload), length)

    if len(buffer) > size + length:
        raise FramingError(f"{len(buffer) - size - length} unexpected bytes after a {length} byte frame")

    return bytes(payload)


def write_frame(conn: Connection, payload: bytes) -> int:
    """ Send *payload* as a single frame on *conn*; the return value is the
        number of payload bytes written, which is only of interest for
        diagnostics.
    """

    frame = encode_frame(payload)

    try:
        conn.write(frame)
    except TransportWriteError:
        raise
    except OSError as exc:
        raise TransportWriteError(str(exc)) from exc

    written = len(frame) - HEADER.size
    log.debug('number of sent bytes: %d', written)
    return written


def read_frame(conn: Connection, max_size: Optional[int] = None) -> bytes:
    """ Block until one complete frame has been read from *conn* and return
        its payload. If *max_size* is set, a frame declaring a longer payload
        raises :class:`FrameTooLargeError` before any of the payload is read.
    """

    header = conn.read_exactly(HEADER.size)
    (length,) = HEADER.unpack(header)
    log.debug('number of expected bytes: %d', length)

    if max_size is not None and length > max_size:
        raise FrameTooLargeError(length, max_size)

    if length == 0:
        payload = b''
    else:
        payload = conn.read_exactly(length)

    log.debug('number of received bytes: %d', len(payload))

    if len(payload) != length:
        raise ShortRead(len(payload), length)

    conn.frame_complete()
    return payload


def write_text(conn: Connection, text: str) -> int:
    """ Encode *text* as UTF-8 and send it via :func:`write_frame`.
    """

    return write_frame(conn, text.encode(encoding))


def read_text(conn: Connection, max_size: Optional[int] = None) -> str:
    """ Read one frame via :func:`read_frame` and decode it as UTF-8.
    """

    payload = read_frame(conn, max_size)

    try:
        return payload.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FrameDecodeError(f"frame of {len(payload)} bytes is not valid {encoding}") from exc


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
