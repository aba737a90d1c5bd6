""" Conversion of mapping keys between the two naming conventions seen on
    the wire: the server speaks a mix of underscore_separated and camelCase
    field names, and everything handed to a subscriber is normalized to
    camelCase. The conversions never modify the structure passed in; a new
    structure is always returned.
"""

import re


_underscore = re.compile(r'(?<=[0-9A-Za-z])_+([0-9A-Za-z])')
_capital = re.compile(r'([A-Z])')


def camel_key(key, big=False):
    """ Return the camelCase spelling of a single *key*. Runs of underscores
        following a letter or digit are removed and the next character is
        upper-cased; leading and trailing underscores are left alone. If
        *big* is True the first character is also upper-cased. Keys that
        are not strings are returned unchanged.
    """

    if not isinstance(key, str):
        return key

    new_key = _underscore.sub(lambda match: match.group(1).upper(), key)

    if big == True:
        new_key = new_key[:1].upper() + new_key[1:]

    return new_key


def to_camel_case(thing, big=False):
    """ Return a copy of *thing* with every mapping key, at any depth,
        rewritten via :func:`camel_key`. Lists and tuples are walked
        element by element, preserving order; anything else is returned
        as-is. Applying this function to its own output is a no-op.

        If two keys of one mapping collapse to the same spelling, the one
        appearing later in the mapping wins.
    """

    if isinstance(thing, dict):
        converted = dict()
        for key, value in thing.items():
            converted[camel_key(key, big)] = to_camel_case(value, big)
        return converted

    if isinstance(thing, list):
        return [to_camel_case(item, big) for item in thing]

    if isinstance(thing, tuple):
        return tuple(to_camel_case(item, big) for item in thing)

    return thing


def underline_key(key):
    """ Return the underscore_separated spelling of a single *key*.
    """

    if not isinstance(key, str):
        return key

    def replace(match):
        if match.start() == 0:
            return match.group(1)
        return '_' + match.group(1)

    return _capital.sub(replace, key).lower()


def to_underline(thing):
    """ Return a copy of the mapping *thing* with its top-level keys
        rewritten via :func:`underline_key`. Nested values are carried over
        untouched; non-mappings are returned as-is.
    """

    if not isinstance(thing, dict):
        return thing

    converted = dict()
    for key, value in thing.items():
        converted[underline_key(key)] = value

    return converted


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
