""" The protocol layer: descriptors for the pieces of a schema, the catalog
    they are loaded into, the validators generated from them, and the
    request/reply structures sent over a connection.

    Nothing in this layer depends on a transport implementation.
"""

from . import descriptors
from . import catalog
from . import message
from . import validators

from .catalog import Catalog


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
