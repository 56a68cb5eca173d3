"""Descriptors for the pieces of a protocol schema.

These are the only representation of schema-derived names used by the
generators; nothing downstream reaches back into the raw protocol document.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple


PRIMITIVES = frozenset(('string', 'number', 'integer', 'boolean'))

ENUM = 'enum'
OBJECT = 'object'
ARRAY = 'array'
ANY = 'any'


class Field:
    """ A single named field: a command parameter, a command return value,
        or a property of an object type. The *type* is a declared type name, or
        None when *ref* names the referenced type instead. A field declaring
        neither is kept; its validator is the always-failing marker.
    """

    def __init__(self, name: str, type: Optional[str] = None, ref: Optional[str] = None,
                 optional: bool = False, description: Optional[str] = None,
                 items: Optional['Field'] = None, enum: Optional[Sequence[str]] = None):

        self.name = name
        self.type = type
        self.ref = ref
        self.optional = bool(optional)
        self.description = description
        self.items = items
        self.enum = None if enum is None else tuple(enum)


    def __repr__(self):
        if self.ref is not None:
            kind = '$ref:' + self.ref
        else:
            kind = str(self.type)

        flag = ' optional' if self.optional else ''
        return '<Field %s %s%s>' % (self.name, kind, flag)


    @classmethod
    def from_dict(cls, block: Dict[str, Any], name: Optional[str] = None) -> 'Field':
        """ Build a :class:`Field` from a protocol document block. Array
            item blocks have no name of their own; the *name* argument
            supplies one.
        """

        if name is None:
            name = block['name']

        items = block.get('items')
        if items is not None:
            items = cls.from_dict(items, name + '[]')

        return cls(name,
                   type=block.get('type'),
                   ref=block.get('$ref'),
                   optional=block.get('optional', False),
                   description=block.get('description'),
                   items=items,
                   enum=block.get('enum'))


# end of class Field



class Type:
    """ A named type declared by a domain. The *kind* is 'enum' whenever a
        literal set is declared, regardless of the underlying type, and is
        otherwise the declared type name ('object', 'string', 'array', ...).
    """

    def __init__(self, domain: str, id: str, kind: str, enum: Sequence[str] = (),
                 properties: Sequence[Field] = (), description: Optional[str] = None):

        self.domain = domain
        self.id = id
        self.kind = kind
        self.enum = tuple(enum)
        self.properties = tuple(properties)
        self.description = description


    def __repr__(self):
        return '<Type %s %s>' % (self.qualified, self.kind)


    @property
    def qualified(self) -> str:
        return self.domain + '.' + self.id


    @classmethod
    def from_dict(cls, domain: str, block: Dict[str, Any]) -> 'Type':

        enum = block.get('enum')

        if enum is not None:
            kind = ENUM
        else:
            kind = block.get('type')
            enum = ()

        properties = [Field.from_dict(prop) for prop in block.get('properties', ())]

        return cls(domain, block['id'], kind, enum, properties,
                   block.get('description'))


# end of class Type



class Command:
    """ A single command within a domain, with its ordered parameters and
        ordered return fields.
    """

    def __init__(self, domain: str, name: str, parameters: Sequence[Field] = (),
                 returns: Sequence[Field] = (), description: Optional[str] = None):

        self.domain = domain
        self.name = name
        self.parameters = tuple(parameters)
        self.returns = tuple(returns)
        self.description = description


    def __repr__(self):
        return '<Command %s>' % (self.method)


    @property
    def method(self) -> str:
        """ The qualified name sent on the wire, '<domain>.<name>'. """
        return self.domain + '.' + self.name


    @property
    def required(self) -> Tuple[Field, ...]:
        return tuple(field for field in self.parameters if not field.optional)


    @property
    def optional(self) -> Tuple[Field, ...]:
        return tuple(field for field in self.parameters if field.optional)


    @classmethod
    def from_dict(cls, domain: str, block: Dict[str, Any]) -> 'Command':

        parameters = [Field.from_dict(param) for param in block.get('parameters', ())]
        returns = [Field.from_dict(ret) for ret in block.get('returns', ())]

        return cls(domain, block['name'], parameters, returns, block.get('description'))


# end of class Command


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
