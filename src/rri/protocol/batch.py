""" The batch container: a single buffer holding any number of orders,
    separated by a delimiter line. Answers are written back out in the same
    container format, each one followed by the delimiter on its own line.

    Nothing escapes the delimiter; an order containing ``=-=`` followed by a
    newline cannot be represented in a batch.
"""

from __future__ import annotations

from typing import Iterable, List


DELIMITER = b'=-=\n'
ANSWER_TRAILER = b'\n' + DELIMITER


def split_batch(raw: bytes, delimiter: bytes = DELIMITER) -> List[bytes]:
    """ Split *raw* on every occurrence of *delimiter*. The segments are
        returned in their original order; like any naive string split, a
        trailing delimiter produces a final empty order, and an empty buffer
        produces a single empty order.
    """

    if not delimiter:
        raise ValueError('the batch delimiter cannot be empty')

    return raw.split(delimiter)


def join_answers(answers: Iterable[bytes], trailer: bytes = ANSWER_TRAILER) -> bytes:
    """ Render *answers* the way the exchange writes them to its sink: each
        answer immediately followed by *trailer*.
    """

    return b''.join(answer + trailer for answer in answers)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
