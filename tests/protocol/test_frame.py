import pytest
import rri

from rri.protocol import frame


def test_encode():

    encoded = frame.encode_frame(b'hello')
    assert encoded == b'\x00\x00\x00\x05hello'

    encoded = frame.encode_frame(b'')
    assert encoded == b'\x00\x00\x00\x00'

    payload = b'x' * 258
    encoded = frame.encode_frame(payload)
    assert encoded[:4] == b'\x00\x00\x01\x02'
    assert encoded[4:] == payload


def test_round_trip():

    for payload in (b'', b'a', b'=-=\n', bytes(range(256)), b'\x00' * 70000):
        assert frame.decode_frame(frame.encode_frame(payload)) == payload


def test_oversized_payload():
    """ Allocating four gigabytes is not an option for a unit test; any
        object reporting such a length is enough, since the length check must
        happen before anything is copied or written.
    """

    class Enormous:
        def __len__(self):
            return frame.MAXIMUM_LENGTH + 1

    with pytest.raises(rri.OversizedPayloadError) as caught:
        frame.encode_frame(Enormous())

    assert caught.value.length == frame.MAXIMUM_LENGTH + 1


def test_oversized_payload_not_written(make_buffer):

    class Enormous:
        def __len__(self):
            return 2 ** 32

    conn = make_buffer()
    with pytest.raises(rri.OversizedPayloadError):
        frame.write_frame(conn, Enormous())

    assert conn.written == []


def test_decode_short():

    with pytest.raises(rri.ShortRead) as caught:
        frame.decode_frame(b'\x00\x00')
    assert caught.value.obtained == 2

    with pytest.raises(rri.ShortRead) as caught:
        frame.decode_frame(b'\x00\x00\x00\x05abc')
    assert caught.value.obtained == 3
    assert caught.value.expected == 5


def test_decode_trailing_bytes():

    with pytest.raises(rri.FramingError):
        frame.decode_frame(b'\x00\x00\x00\x01abc')


def test_write_frame(make_buffer):

    conn = make_buffer()
    written = frame.write_frame(conn, b'<order/>')

    assert written == 8
    assert conn.written == [b'\x00\x00\x00\x08<order/>']


def test_read_frame(make_buffer):

    conn = make_buffer(b'\x00\x00\x00\x03abc\x00\x00\x00\x00\x00\x00\x00\x01z')

    assert frame.read_frame(conn) == b'abc'
    assert frame.read_frame(conn) == b''
    assert frame.read_frame(conn) == b'z'


def test_short_length_prefix(make_buffer):

    conn = make_buffer(b'\x00\x00')

    with pytest.raises(rri.ShortRead) as caught:
        frame.read_frame(conn)

    assert caught.value.obtained == 2
    assert isinstance(caught.value, rri.TransportReadError)


def test_short_payload(make_buffer):

    conn = make_buffer(b'\x00\x00\x00\x0aabcd')

    with pytest.raises(rri.ShortRead) as caught:
        frame.read_frame(conn)

    assert caught.value.obtained == 4
    assert caught.value.expected == 10


def test_frame_too_large(make_buffer):

    conn = make_buffer(b'\xff\xff\xff\xff')

    with pytest.raises(rri.FrameTooLargeError) as caught:
        frame.read_frame(conn, max_size=1024)

    assert caught.value.length == 2 ** 32 - 1
    assert caught.value.maximum == 1024

    # At the limit is fine.

    conn = make_buffer(frame.encode_frame(b'y' * 1024))
    assert frame.read_frame(conn, max_size=1024) == b'y' * 1024


def test_text(make_buffer):

    conn = make_buffer()
    written = frame.write_text(conn, 'Grüße')
    assert written == len('Grüße'.encode('utf-8'))

    conn = make_buffer(conn.written[0])
    assert frame.read_text(conn) == 'Grüße'

    conn = make_buffer(frame.encode_frame(b'\xff\xfe'))
    with pytest.raises(rri.FrameDecodeError):
        frame.read_text(conn)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
