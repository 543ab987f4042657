import pytest
import rri

from rri.protocol import batch


def test_split():

    assert batch.split_batch(b'A=-=\nB=-=\nC') == [b'A', b'B', b'C']
    assert batch.split_batch(b'<order one/>') == [b'<order one/>']


def test_split_boundaries():
    """ Splitting behaves exactly like a naive string split: a trailing
        delimiter leaves an empty final order, and so does an empty file.
    """

    assert batch.split_batch(b'A=-=\n') == [b'A', b'']
    assert batch.split_batch(b'=-=\nA') == [b'', b'A']
    assert batch.split_batch(b'') == [b'']


def test_split_requires_full_delimiter():

    assert batch.split_batch(b'A=-=B') == [b'A=-=B']
    assert batch.split_batch(b'A\n=-=\nB') == [b'A\n', b'B']


def test_split_custom_delimiter():

    assert batch.split_batch(b'A;B', b';') == [b'A', b'B']

    with pytest.raises(ValueError):
        batch.split_batch(b'A', b'')


def test_join_answers():

    joined = batch.join_answers([b'ONE', b'TWO'])
    assert joined == b'ONE\n=-=\nTWO\n=-=\n'
    assert batch.join_answers([]) == b''


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
