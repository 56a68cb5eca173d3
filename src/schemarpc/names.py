""" Translation between the field names used on the wire (lower camel case,
    with the occasional run of capitals for an acronym) and the snake_case
    identifiers used on the Python side.

    The mapping is not guaranteed to be bijective: two distinct protocol
    names could collapse to the same Python identifier. Nothing here checks
    for that.
"""

import re


_acronym = re.compile(r'([A-Z]+)([A-Z][a-z])')
_boundary = re.compile(r'([a-z0-9])([A-Z])')


def to_internal(name):
    """ Convert a protocol-style *name* to its Python form; for example,
        'frameId' becomes 'frame_id', and 'getDOMCounters' becomes
        'get_dom_counters'.
    """

    name = _acronym.sub(r'\1_\2', name)
    name = _boundary.sub(r'\1_\2', name)
    name = name.replace('-', '_')
    return name.lower()



def external_names(fields):
    """ Return a dictionary mapping the internal name of each field in the
        *fields* sequence to the external name it is sent with. Each field
        is expected to have a *name* attribute holding the external name.
    """

    names = dict()

    for field in fields:
        names[to_internal(field.name)] = field.name

    return names



def rename(params, names):
    """ Return a new dictionary with the keys of *params* translated via the
        *names* dictionary, as returned by :func:`external_names`. Keys with
        no translation are passed through unchanged.
    """

    renamed = dict()

    for key, value in params.items():
        try:
            key = names[key]
        except KeyError:
            pass

        renamed[key] = value

    return renamed


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
