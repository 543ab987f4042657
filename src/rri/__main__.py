""" Command line interface: submit a batch file of orders and collect the
    answers. The exit status is 0 if every order was answered, 1 if the batch
    was aborted part way through, and 2 if nothing could be sent at all.
"""

import argparse
import logging
import sys

from . import begin
from . import config
from . import json
from . import log as logsetup
from .protocol.exchange import ExchangeAborted
from .transport.base import RriError


EXIT_COMPLETE = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2

logger = logging.getLogger('rri.submit')


def parse_arguments(argv=None):

    parser = argparse.ArgumentParser(
        prog='rri-submit',
        description='Send a batch file of registry interface orders, one at a time, and write out the answers.')

    parser.add_argument('-o', '--orders', default=None,
        help='Batch file of orders separated by =-= lines (default: orders.rri).')
    parser.add_argument('-a', '--answers', default=None,
        help='File to write the answers to (default: answers.rri).')
    parser.add_argument('--config', default=None,
        help='Configuration file (default: client.json in $RRI_HOME or ~/.rri).')
    parser.add_argument('--host', default=None,
        help='Registry interface server host name.')
    parser.add_argument('--port', type=int, default=None,
        help='Registry interface server port.')
    parser.add_argument('--timeout', type=float, default=None,
        help='Seconds to wait on any read or write before giving up (default: wait forever).')
    parser.add_argument('--first-frame-timeout', type=float, default=None,
        help='Seconds to wait for the first answer on a new connection.')
    parser.add_argument('--max-frame-size', type=int, default=None,
        help='Reject answers declaring more than this many bytes.')
    parser.add_argument('--insecure', action='store_true',
        help='Do not verify the server certificate.')
    parser.add_argument('--cafile', default=None,
        help='Additional CA certificate bundle to trust.')
    parser.add_argument('--report', default=None,
        help='Write a JSON summary of the run to this file.')
    parser.add_argument('--echo', action='store_true',
        help='Print each order and its answer to stdout.')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true',
        help='Log the byte counts of every frame.')
    verbosity.add_argument('-q', '--quiet', action='store_true',
        help='Only log errors.')

    return parser.parse_args(argv)


def settings_from(arguments):

    settings = config.load(arguments.config)

    if arguments.verbose:
        level = 'DEBUG'
    elif arguments.quiet:
        level = 'ERROR'
    else:
        level = None

    settings = settings.replace(
        host=arguments.host,
        port=arguments.port,
        timeout=arguments.timeout,
        first_frame_timeout=arguments.first_frame_timeout,
        max_frame_size=arguments.max_frame_size,
        cafile=arguments.cafile,
        orders=arguments.orders,
        answers=arguments.answers,
        log_level=level,
    )

    if arguments.insecure:
        settings = settings.replace(verify=False)

    return settings


def echo(position, order, answer):

    out = sys.stdout
    out.write(f"Order {position}:\n")
    out.write(order.decode('utf-8', errors='replace'))
    out.write(f"\nAnswer {position}:\n")
    out.write(answer.decode('utf-8', errors='replace'))
    out.write('\n')
    out.flush()


def write_report(path, report):
    with open(path, 'wb') as writing:
        writing.write(json.dumps(report.to_dict(), indent=True))


def main(argv=None):

    arguments = parse_arguments(argv)

    try:
        settings = settings_from(arguments)
        logsetup.configure(settings.log_level, settings.log_file)
    except (ValueError, OSError, RuntimeError) as exc:
        sys.stderr.write(f"rri-submit: configuration error: {exc}\n")
        return EXIT_USAGE

    if arguments.echo:
        on_answer = echo
    else:
        on_answer = None

    try:
        report = begin.submit(settings, on_answer=on_answer)
    except ExchangeAborted as aborted:
        logger.error('aborted at order %d of %d, %d answers written to %s',
                     aborted.position, aborted.report.total,
                     aborted.report.delivered, settings.answers)
        if arguments.report:
            write_report(arguments.report, aborted.report)
        return EXIT_ABORTED
    except (RriError, OSError) as exc:
        logger.error('nothing submitted: %s', exc)
        return EXIT_USAGE

    if arguments.report:
        write_report(arguments.report, report)

    return EXIT_COMPLETE


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
