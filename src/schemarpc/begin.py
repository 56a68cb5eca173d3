""" Implementation of the top-level :func:`get` method. This is intended to
    be the principal entry point for users who want command bindings for
    the locally cached protocol description, sent over the default
    connection.
"""

import threading

from . import correlator
from .bindings import Bindings
from .protocol.catalog import Catalog


_cache = dict()
_cache_lock = threading.Lock()


def bindings():
    """ Return the process-wide :class:`Bindings` instance, generating it on
        first use from :func:`Catalog.load` and the default correlator.
    """

    with _cache_lock:
        try:
            return _cache['bindings']
        except KeyError:
            pass

        catalog = Catalog.load()
        instance = Bindings(catalog, correlator.default())
        _cache['bindings'] = instance

    return instance



def _clear():
    """ Clear the cached :class:`Bindings` instance, if any. The instance is
        returned, largely to allow for inspection.
    """

    with _cache_lock:
        return _cache.pop('bindings', None)



def get(name):
    """ Return the :class:`schemarpc.bindings.Domain` for a domain *name*
        ('Page'), or the :class:`schemarpc.bindings.Command` for a qualified
        command name ('Page.navigate'). Repeated calls return the same
        instances.
    """

    if name is None:
        raise ValueError('the domain or command name must be specified')

    name = str(name)
    instance = bindings()

    if '.' in name:
        return instance[name]

    return instance.domain(name)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
