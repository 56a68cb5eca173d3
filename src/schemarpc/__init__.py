""" Python implementation of a schema-driven RPC client. Command bindings
    and type validators are generated from a declarative protocol
    description, and replies arriving on a shared connection are matched
    back to the call that sent the corresponding request.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Utility components.

from . import config
from . import errors
from . import json
from . import names

# Submodules used by multiple other components.

from . import protocol
from . import correlator
from . import transport

# Primary public-facing interfaces.

from . import begin
get = begin.get

from .bindings import Bindings, Command, Domain
from .correlator import Correlator
from .errors import RemoteCommandError, SchemaCoverageGap, ValidationError
from .protocol.catalog import Catalog

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
