""" Logging setup for the command line entry point. Library modules only
    ever call :func:`logging.getLogger`; :func:`configure` is invoked once,
    by whatever application is driving the client.
"""

from __future__ import annotations

import logging
import logging.config
import os
from typing import Any, Dict, Optional


format = '%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s'
datefmt = '%Y-%m-%d %H:%M:%S'


def build(level: str = 'INFO', filename: Optional[str] = None) -> Dict[str, Any]:
    """ Return a :func:`logging.config.dictConfig` dictionary logging to
        stderr, and additionally to a rotating *filename* if one is given.
    """

    level = level.upper()

    handlers: Dict[str, Any] = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': level,
            'formatter': 'standard',
            'stream': 'ext://sys.stderr',
        }
    }

    if filename:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': level,
            'formatter': 'standard',
            'filename': filename,
            'maxBytes': 5_000_000,
            'backupCount': 3,
            'encoding': 'utf-8',
        }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': format,
                'datefmt': datefmt,
            }
        },
        'handlers': handlers,
        'loggers': {
            'rri': {
                'level': level,
                'handlers': list(handlers),
                'propagate': False,
            },
        },
    }


def configure(level: str = 'INFO', filename: Optional[str] = None) -> None:

    if filename:
        directory = os.path.dirname(os.path.abspath(filename))
        os.makedirs(directory, exist_ok=True)

    logging.config.dictConfig(build(level, filename))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
