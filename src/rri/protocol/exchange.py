""" The exchange drives a batch of orders through a single connection. Each
    order is written as one frame, and the matching answer is read back in
    full before the next order is written: the registry interface is strictly
    synchronous, there is never more than one unanswered order on the wire.

    Any transport or framing failure, or a failure to store an answer,
    aborts the remainder of the batch. Answers already handed to the sink
    stay there; nothing is retried and nothing is rolled back.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..transport.base import Connection, RriError
from .batch import join_answers
from .frame import read_frame, write_frame


log = logging.getLogger(__name__)


class ExchangeState(enum.Enum):
    IDLE = 'idle'
    SENDING = 'sending'
    AWAITING_ANSWER = 'awaiting answer'
    DELIVERED = 'delivered'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class ExchangeReport:
    """ Outcome of one batch run. *position* and *error* are only set when
        the run was aborted; *position* is 1-based, matching how the orders
        appear in the batch file.
    """

    total: int
    delivered: int = 0
    state: ExchangeState = ExchangeState.IDLE
    position: Optional[int] = None
    error: Optional[BaseException] = None

    @property
    def completed(self) -> bool:
        return self.state is ExchangeState.DONE

    def to_dict(self) -> dict:
        report = dict()
        report['total'] = self.total
        report['delivered'] = self.delivered
        report['state'] = self.state.value
        report['completed'] = self.completed

        if self.position is not None:
            report['position'] = self.position

        if self.error is not None:
            report['error'] = {
                'type': type(self.error).__name__,
                'text': str(self.error),
            }

        return report


class ExchangeAborted(RriError):
    """ The batch was abandoned at *position* because of *cause*; the
        partial :class:`ExchangeReport` is attached as *report*.
    """

    def __init__(self, position: int, cause: BaseException, report: ExchangeReport):
        self.position = position
        self.cause = cause
        self.report = report
        RriError.__init__(self, f"batch aborted at order {position}: {type(cause).__name__}: {cause}")


class Exchange:
    """ Run a batch of orders against *conn*, one at a time, writing each
        answer followed by the batch delimiter to *sink*. The sink can be any
        object with a ``write(bytes)`` method, such as a binary file.

        *max_size*, if set, bounds the length an answer frame may declare.
        *on_answer*, if set, is called as ``on_answer(position, order, answer)``
        after each answer has been delivered to the sink.

        An :class:`Exchange` runs exactly once; the :attr:`state` and
        :attr:`position` attributes describe where it is, or where it
        stopped.
    """

    def __init__(self, conn: Connection, sink, max_size: Optional[int] = None,
                 on_answer: Optional[Callable[[int, bytes, bytes], None]] = None):

        self.conn = conn
        self.sink = sink
        self.max_size = max_size
        self.on_answer = on_answer

        self.state = ExchangeState.IDLE
        self.position = 0
        self.report = None


    def _transition(self, state: ExchangeState) -> None:
        self.state = state
        if self.report is not None:
            self.report.state = state


    def run(self, batch: Sequence[bytes]) -> ExchangeReport:

        if self.state is not ExchangeState.IDLE:
            raise RuntimeError(f"exchange already ran, state is {self.state.value}")

        total = len(batch)
        report = ExchangeReport(total)
        self.report = report

        for index, order in enumerate(batch):
            position = index + 1
            self.position = position

            try:
                self._transition(ExchangeState.SENDING)
                write_frame(self.conn, order)
                log.info('order %d/%d sent, %d bytes', position, total, len(order))

                self._transition(ExchangeState.AWAITING_ANSWER)
                answer = read_frame(self.conn, self.max_size)
            except (RriError, OSError) as exc:
                self._fail(position, exc)
                raise ExchangeAborted(position, exc, report) from exc

            try:
                self.sink.write(join_answers((answer,)))
                report.delivered += 1
                self._transition(ExchangeState.DELIVERED)
                log.info('answer %d/%d received, %d bytes', position, total, len(answer))

                if self.on_answer is not None:
                    self.on_answer(position, order, answer)
            except OSError as exc:
                self._fail(position, exc)
                raise ExchangeAborted(position, exc, report) from exc
            except BaseException as exc:
                self._fail(position, exc)
                raise

        self._transition(ExchangeState.DONE)
        log.info('batch complete, %d answers delivered', report.delivered)
        return report


    def _fail(self, position: int, error: BaseException) -> None:

        phase = self.state.value
        self._transition(ExchangeState.FAILED)
        self.report.position = position
        self.report.error = error

        log.error('batch aborted at order %d/%d while %s: %s',
                  position, self.report.total, phase, error)


# end of class Exchange



def run_exchange(conn: Connection, batch: Sequence[bytes], sink,
                 max_size: Optional[int] = None,
                 on_answer: Optional[Callable[[int, bytes, bytes], None]] = None) -> ExchangeReport:
    """ Convenience wrapper: build an :class:`Exchange` and run *batch*
        through it. Raises :class:`ExchangeAborted` on any failure.
    """

    exchange = Exchange(conn, sink, max_size, on_answer)
    return exchange.run(batch)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
