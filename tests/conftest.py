import pytest

import rri
from rri.protocol.frame import HEADER
from rri.transport.base import Connection, ShortRead, TransportWriteError


class BufferConnection(Connection):
    """ In-memory connection: reads are served from *incoming*, writes are
        collected in *written*.
    """

    def __init__(self, incoming=b''):
        self.incoming = bytearray(incoming)
        self.written = list()
        self.closed = False

    @property
    def is_open(self):
        return not self.closed

    def write(self, data):
        if self.closed:
            raise TransportWriteError('connection is closed')
        self.written.append(bytes(data))

    def read_exactly(self, count):
        if len(self.incoming) < count:
            obtained = len(self.incoming)
            del self.incoming[:]
            raise ShortRead(obtained, count)

        data = bytes(self.incoming[:count])
        del self.incoming[:count]
        return data

    def close(self):
        self.closed = True


class PeerConnection(BufferConnection):
    """ A fake registry interface server. Every complete frame written is
        handed to *respond*, and the return value is queued as the answer
        frame. Writing a second order before the previous answer has been
        read in full is a protocol violation and raises AssertionError.

        If *fail_on_write* is set, that write (1-based) raises
        :class:`TransportWriteError` instead of reaching the peer.
    """

    def __init__(self, respond=None, fail_on_write=None):
        BufferConnection.__init__(self)

        if respond is None:
            respond = lambda payload: payload

        self.respond = respond
        self.fail_on_write = fail_on_write
        self.orders = list()
        self.events = list()
        self.writes = 0
        self._pending = bytearray()

    def write(self, data):
        self.writes += 1

        if self.incoming:
            raise AssertionError('order written before the previous answer was read')

        if self.writes == self.fail_on_write:
            raise TransportWriteError('peer reset the connection')

        BufferConnection.write(self, data)
        self.events.append('write')
        self._pending.extend(data)

        while len(self._pending) >= HEADER.size:
            (length,) = HEADER.unpack_from(self._pending)
            if len(self._pending) < HEADER.size + length:
                break

            payload = bytes(self._pending[HEADER.size:HEADER.size + length])
            del self._pending[:HEADER.size + length]
            self.orders.append(payload)

            answer = self.respond(payload)
            self.incoming.extend(rri.protocol.encode_frame(answer))

    def read_exactly(self, count):
        data = BufferConnection.read_exactly(self, count)
        self.events.append('read')
        return data


@pytest.fixture
def make_buffer():
    return BufferConnection


@pytest.fixture
def make_peer():
    return PeerConnection


@pytest.fixture
def echo_peer():
    return PeerConnection()


@pytest.fixture
def upper_peer():
    return PeerConnection(lambda payload: payload.upper())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
