''' Wrapper module around :mod:`orjson`, providing the equivalent of
    :func:`json.loads` and :func:`json.dumps`. As with orjson itself, the
    :func:`dumps` method returns bytes.
'''

import orjson


def dumps(value, indent=False):
    if indent:
        return orjson.dumps(value, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
    return orjson.dumps(value)


loads = orjson.loads
JSONDecodeError = orjson.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
