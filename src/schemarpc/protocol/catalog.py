"""Schema catalog: the source of command and type descriptors.

A catalog is built from one or more protocol documents of the form::

    {"domains": [{"domain": "Page", "types": [...], "commands": [...]}]}

Documents are merged in the order given; a later domain of the same name
replaces an earlier one.
"""

from __future__ import annotations

import glob
import logging
import os
from typing import Any, Dict, Iterable, List

from .. import config
from .. import json
from ..errors import CatalogError
from .descriptors import Command, Type


log = logging.getLogger(__name__)


class Domain:
    """ The descriptors for a single domain. """

    def __init__(self, name: str, commands: Iterable[Command] = (),
                 types: Iterable[Type] = (), description=None):

        self.name = name
        self.commands = list(commands)
        self.types = list(types)
        self.description = description


    def __repr__(self):
        return '<Domain %s: %d commands, %d types>' % (self.name, len(self.commands), len(self.types))


    @classmethod
    def from_dict(cls, block: Dict[str, Any]) -> 'Domain':

        name = block['domain']
        commands = [Command.from_dict(name, command) for command in block.get('commands', ())]
        types = [Type.from_dict(name, type) for type in block.get('types', ())]

        return cls(name, commands, types, block.get('description'))


# end of class Domain



class Catalog:
    """ Ordered collection of :class:`Domain` instances. Lookups by domain
        name are exact; an unknown domain raises :class:`CatalogError`.
    """

    def __init__(self, documents: Iterable[Dict[str, Any]] = ()):

        self._domains: Dict[str, Domain] = dict()

        for document in documents:
            self.add(document)


    def __contains__(self, domain):
        return domain in self._domains


    def __iter__(self):
        return iter(self._domains.values())


    def __len__(self):
        return len(self._domains)


    def add(self, document: Dict[str, Any]) -> None:
        """ Merge the domains described by a protocol *document*, already
            decoded from JSON, into this catalog.
        """

        try:
            blocks = document['domains']
        except (KeyError, TypeError):
            raise ValueError("protocol document has no 'domains' list")

        for block in blocks:
            domain = Domain.from_dict(block)

            if domain.name in self._domains:
                log.debug('replacing domain %s', domain.name)

            self._domains[domain.name] = domain


    def domain(self, name: str) -> Domain:

        try:
            return self._domains[name]
        except KeyError:
            raise CatalogError('unknown domain: ' + str(name))


    def domains(self) -> List[str]:
        return list(self._domains.keys())


    def commands_for_domain(self, domain: str) -> List[Command]:
        return list(self.domain(domain).commands)


    def types_for_domain(self, domain: str) -> List[Type]:
        return list(self.domain(domain).types)


    @classmethod
    def loads(cls, raw) -> 'Catalog':
        """ Build a catalog from a single JSON-encoded protocol document.
        """

        if isinstance(raw, str):
            raw = raw.encode()

        return cls((json.loads(raw),))


    @classmethod
    def load(cls, *paths) -> 'Catalog':
        """ Build a catalog from the protocol documents at the given *paths*.
            If no paths are provided every ``*.json`` file in the protocol
            directory (see :func:`schemarpc.config.protocol_directory`) is
            loaded, in sorted order.
        """

        if len(paths) == 0:
            pattern = os.path.join(config.protocol_directory(), '*.json')
            paths = sorted(glob.glob(pattern))

            if len(paths) == 0:
                log.warning('no protocol documents found matching %s', pattern)

        catalog = cls()

        for path in paths:
            with open(path, 'rb') as handle:
                raw = handle.read()

            log.debug('loading protocol document %s', path)
            catalog.add(json.loads(raw))

        return catalog


# end of class Catalog


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
