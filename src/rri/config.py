""" Client configuration. Settings are read from ``client.json`` in the
    configuration directory, then adjusted by environment variables, then by
    whatever the caller (usually the command line) overrides explicitly.
"""

import dataclasses
import os
from typing import Optional

from . import json
from .transport import tls


filename = 'client.json'

log_levels = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')

# Values arrive from JSON and from the environment as well as from code; the
# types are checked explicitly. Booleans are only accepted where listed.

number = (int, float)
nothing = type(None)

accepted_types = {
    'host': (str,),
    'port': (int,),
    'timeout': number + (nothing,),
    'first_frame_timeout': number + (nothing,),
    'max_frame_size': (int, nothing),
    'verify': (bool,),
    'cafile': (str, nothing),
    'orders': (str,),
    'answers': (str,),
    'log_level': (str,),
    'log_file': (str, nothing),
}


@dataclasses.dataclass(frozen=True)
class Settings:
    """ Everything needed to submit a batch file: where the server is, how
        long to wait for it, which files to read and write, and how loudly
        to log while doing so. A *timeout* of None blocks forever, which is
        how the registry interface has always behaved.
    """

    host: str = tls.default_address
    port: int = tls.default_port
    timeout: Optional[float] = None
    first_frame_timeout: Optional[float] = None
    max_frame_size: Optional[int] = None
    verify: bool = True
    cafile: Optional[str] = None
    orders: str = 'orders.rri'
    answers: str = 'answers.rri'
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):

        for field, accepted in accepted_types.items():
            value = getattr(self, field)
            if isinstance(value, bool) and bool not in accepted:
                valid = False
            else:
                valid = isinstance(value, accepted)

            if valid:
                pass
            else:
                raise ValueError(f"{field} cannot be {type(value).__name__} {value!r}")

        if self.log_level.upper() not in log_levels:
            raise ValueError('unknown log level: ' + repr(self.log_level))

        if self.port <= 0 or self.port > 65535:
            raise ValueError('invalid port number: ' + repr(self.port))

        for field in ('timeout', 'first_frame_timeout'):
            value = getattr(self, field)
            if value is not None and value <= 0:
                raise ValueError(f"{field} must be positive, not {value!r}")

        if self.max_frame_size is not None and self.max_frame_size < 0:
            raise ValueError('max_frame_size cannot be negative')


    def replace(self, **changes):
        """ Return a copy with *changes* applied; changes with a value of
            None are ignored, so unset command line options leave the
            configured value alone.
        """

        changes = dict((key, value) for key, value in changes.items() if value is not None)
        return dataclasses.replace(self, **changes)


# end of class Settings



def directory(default=None):
    """ Return the directory location where configuration files are loaded
        from. This defaults to ``$HOME/.rri``, but can be overridden by
        calling this method with a valid path, or by setting the ``RRI_HOME``
        environment variable.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        os.environ['RRI_HOME'] = default
        return default

    try:
        return os.environ['RRI_HOME']
    except KeyError:
        pass

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('RRI_HOME and HOME environment variables not set, cannot determine configuration directory')

    return os.path.join(home, '.rri')


def parse_address(address):
    """ Split a ``host:port`` string; the port is optional and defaults to
        the standard registry interface port.
    """

    address = address.strip()
    if address == '':
        raise ValueError('empty address')

    host, separator, port = address.rpartition(':')
    if separator == '':
        return address, tls.default_port

    if host == '':
        raise ValueError('address is missing a host name: ' + repr(address))

    return host, int(port)


def load(path=None, environ=None):
    """ Build a :class:`Settings` instance. If *path* is not specified the
        ``client.json`` file in :func:`directory` is used, if it exists; a
        missing file yields the defaults. Unknown keys in the file raise
        :class:`ValueError`.
    """

    if environ is None:
        environ = os.environ

    if path is None:
        path = os.path.join(directory(), filename)
        if os.path.exists(path):
            pass
        else:
            path = None

    values = dict()

    if path is not None:
        with open(path, 'rb') as loading:
            contents = loading.read()

        try:
            values = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise ValueError(f"cannot parse {path}: {exc}") from exc

        if not isinstance(values, dict):
            raise ValueError(f"{path} must contain a JSON object")

        known = set(field.name for field in dataclasses.fields(Settings))
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"unknown settings in {path}: " + ', '.join(sorted(unknown)))

    try:
        address = environ['RRI_ADDRESS']
    except KeyError:
        pass
    else:
        host, port = parse_address(address)
        values['host'] = host
        values['port'] = port

    try:
        timeout = environ['RRI_TIMEOUT']
    except KeyError:
        pass
    else:
        values['timeout'] = float(timeout)

    return Settings(**values)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
