""" TLS stream connection to a registry interface server. The server speaks
    plain length-prefixed frames inside a TLS session on a single TCP
    connection; this module only establishes that session and moves bytes,
    the framing itself lives in :mod:`rri.protocol.frame`.
"""

from __future__ import annotations

import logging
import socket
import ssl
import time
from typing import Optional

from .base import (
    Connection,
    ShortRead,
    TransportConnectionError,
    TransportReadError,
    TransportTimeout,
    TransportWriteError,
)


default_address = 'rri.test.denic.de'
default_port = 51131

log = logging.getLogger(__name__)

timeouts = (TimeoutError, socket.timeout)


class StreamConnection(Connection):
    """ Wrap a connected stream socket, which may or may not be a TLS socket,
        and provide the blocking :func:`write` and :func:`read_exactly`
        operations the exchange relies on.

        *timeout* applies to every socket operation; None blocks forever.
        If *first_frame_timeout* is set, it is a single deadline for reading
        the whole first frame on this connection, length prefix and payload
        together, which is where a server that never answers the opening
        order would otherwise hang the client. Later frames use *timeout*.
    """

    def __init__(self, sock, timeout: Optional[float] = None,
                 first_frame_timeout: Optional[float] = None):

        self.socket = sock
        self.timeout = timeout
        self.first_frame_timeout = first_frame_timeout
        self.first_frame_seen = first_frame_timeout is None
        self.deadline = None

        self.socket.settimeout(timeout)


    def __repr__(self):
        return f"<{type(self).__name__} {self.peer!r}>"


    @property
    def is_open(self) -> bool:
        return self.socket is not None and self.socket.fileno() != -1


    @property
    def peer(self):
        try:
            return self.socket.getpeername()
        except (OSError, AttributeError):
            return None


    def write(self, data: bytes) -> None:

        if not self.is_open:
            raise TransportWriteError('connection is closed')

        try:
            self.socket.sendall(data)
        except timeouts as exc:
            raise TransportTimeout(f"write of {len(data)} bytes timed out") from exc
        except OSError as exc:
            raise TransportWriteError(f"write of {len(data)} bytes failed: {exc}") from exc


    def read_exactly(self, count: int) -> bytes:

        if not self.is_open:
            raise ShortRead(0, count, 'connection is closed')

        # The first frame has one deadline covering its length prefix and its
        # payload; it stays in force until the framer reports the frame
        # complete.

        if self.first_frame_seen:
            pass
        elif self.deadline is None:
            self.deadline = time.monotonic() + self.first_frame_timeout

        buffer = bytearray()

        try:
            while len(buffer) < count:
                if self.deadline is not None:
                    remaining = self.deadline - time.monotonic()
                    if remaining <= 0:
                        raise TransportTimeout(f"first frame not complete within {self.first_frame_timeout} sec")
                    self.socket.settimeout(remaining)

                chunk = self.socket.recv(count - len(buffer))
                if not chunk:
                    raise ShortRead(len(buffer), count)
                buffer.extend(chunk)
        except timeouts as exc:
            raise TransportTimeout(f"read timed out after {len(buffer)} of {count} bytes") from exc
        except ssl.SSLError as exc:
            raise TransportReadError(f"TLS failure after {len(buffer)} of {count} bytes: {exc}") from exc
        except ConnectionError as exc:
            raise ShortRead(len(buffer), count, f"connection lost after {len(buffer)} of {count} bytes") from exc
        except OSError as exc:
            raise TransportReadError(f"read failed after {len(buffer)} of {count} bytes: {exc}") from exc

        return bytes(buffer)


    def frame_complete(self) -> None:

        if self.first_frame_seen:
            return

        self.first_frame_seen = True
        self.deadline = None

        if self.socket is not None:
            self.socket.settimeout(self.timeout)


    def close(self) -> None:

        sock = self.socket
        if sock is None:
            return

        self.socket = None

        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already disconnected by the peer.
            pass

        try:
            sock.close()
        except OSError:
            log.warning('closing socket failed', exc_info=True)


# end of class StreamConnection



def context(verify: bool = True, cafile: Optional[str] = None) -> ssl.SSLContext:
    """ Build the client-side TLS context. Certificate and host name
        verification are on unless *verify* is False; *cafile* adds a trust
        anchor for test servers with private certificates.
    """

    ctx = ssl.create_default_context(cafile=cafile)

    if verify:
        pass
    else:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    return ctx


def connect(address: str = default_address, port: int = default_port,
            timeout: Optional[float] = None,
            first_frame_timeout: Optional[float] = None,
            verify: bool = True, cafile: Optional[str] = None) -> StreamConnection:
    """ Open a TLS connection to *address*:*port* and return it as a
        :class:`StreamConnection`. The returned connection is a context
        manager; use it in a ``with`` block to guarantee it is closed.
    """

    port = int(port)
    log.info('connecting to %s:%d', address, port)

    try:
        raw = socket.create_connection((address, port), timeout=timeout)
    except OSError as exc:
        raise TransportConnectionError(f"cannot connect to {address}:{port}: {exc}") from exc

    try:
        wrapped = context(verify, cafile).wrap_socket(raw, server_hostname=address)
    except (ssl.SSLError, OSError) as exc:
        raw.close()
        raise TransportConnectionError(f"TLS handshake with {address}:{port} failed: {exc}") from exc

    log.debug('TLS session established with %s:%d using %s', address, port, wrapped.version())

    return StreamConnection(wrapped, timeout, first_frame_timeout)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
