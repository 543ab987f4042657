""" Submit a batch file of orders to the registry interface and write the
    answers to another file. This is the plumbing around the exchange: file
    handling, and the lifetime of the connection.
"""

import logging

from .config import Settings
from .protocol.batch import split_batch
from .protocol.exchange import Exchange
from .transport.tls import connect


log = logging.getLogger(__name__)


def read_orders(path):
    """ Return the orders contained in the batch file at *path*.
    """

    with open(path, 'rb') as orders:
        raw = orders.read()

    batch = split_batch(raw)
    log.debug('%s: %d orders, %d bytes', path, len(batch), len(raw))
    return batch


def submit(settings=None, orders=None, answers=None, on_answer=None):
    """ Read the batch file *orders*, send each order to the server described
        by *settings*, and write each answer to the file *answers*. The
        *orders* and *answers* paths default to the ones in *settings*.

        The connection is opened only once the orders have been read, and is
        closed again however the exchange ends. Returns the
        :class:`rri.protocol.exchange.ExchangeReport` for a complete batch;
        an aborted batch raises
        :class:`rri.protocol.exchange.ExchangeAborted`, with every answer
        received up to that point already in the answers file.
    """

    if settings is None:
        settings = Settings()

    if orders is None:
        orders = settings.orders

    if answers is None:
        answers = settings.answers

    batch = read_orders(orders)

    connection = connect(settings.host, settings.port,
                         timeout=settings.timeout,
                         first_frame_timeout=settings.first_frame_timeout,
                         verify=settings.verify,
                         cafile=settings.cafile)

    with connection:
        with open(answers, 'wb') as sink:
            exchange = Exchange(connection, sink, settings.max_frame_size, on_answer)
            report = exchange.run(batch)

    log.info('%d answers written to %s', report.delivered, answers)
    return report


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
