""" Shape validators generated from the types declared in a protocol schema.

    Every validator is a callable returning True or False for a candidate
    value; :func:`Validator.check` performs the same test but raises a
    :class:`schemarpc.errors.ValidationError` describing the first problem
    found. Object validators only look at the fields the schema declares:
    any additional keys in a value are passed through without comment.

    A declared type kind with no corresponding validator produces an
    :class:`Unsupported` instance, which rejects everything. This is how
    incomplete schema coverage is surfaced.
"""

import logging
import numbers

from ..errors import Error, SchemaCoverageGap, ValidationError
from ..names import to_internal
from . import descriptors


log = logging.getLogger(__name__)


class Validator:
    """ Base class for all validators. Subclasses implement :func:`check`.
    """

    kind = None

    def __call__(self, value):

        try:
            self.check(value)
        except Error:
            return False

        return True


    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.kind)


    def check(self, value, path=None):
        raise NotImplementedError('subclasses must implement check()')


# end of class Validator



class Primitive(Validator):
    """ Type-membership check for one of the schema's primitive types. A
        boolean is never accepted as a number or an integer.
    """

    types = {
        'string': (str,),
        'number': (numbers.Real,),
        'integer': (numbers.Integral,),
        'boolean': (bool,),
    }

    def __init__(self, kind):

        if kind not in self.types:
            raise ValueError('not a primitive type: ' + repr(kind))

        self.kind = kind
        self._types = self.types[kind]


    def check(self, value, path=None):

        if isinstance(value, bool) and self.kind != 'boolean':
            raise ValidationError('expected %s, got boolean' % (self.kind), path)

        if not isinstance(value, self._types):
            got = type(value).__name__
            raise ValidationError('expected %s, got %s' % (self.kind, got), path)


# end of class Primitive



class Anything(Validator):

    kind = descriptors.ANY

    def check(self, value, path=None):
        pass


# end of class Anything



class Enum(Validator):
    """ Membership in a fixed set of literal strings. Values of the right
        primitive type that are not in the set are still rejected.
    """

    kind = descriptors.ENUM

    def __init__(self, values):
        self.declared = tuple(values)
        self.values = frozenset(self.declared)


    def check(self, value, path=None):

        try:
            found = value in self.values
        except TypeError:
            # Unhashable values cannot be members.
            found = False

        if not found:
            raise ValidationError('%s is not one of %s' % (repr(value), list(self.declared)), path)


# end of class Enum



class Object(Validator):
    """ A mapping with named fields, partitioned into *required* and
        *optional*; both are sequences of (key, validator) pairs. A required
        key that is absent fails the check, an optional key that is absent
        does not; keys not named by either are ignored.
    """

    kind = descriptors.OBJECT

    def __init__(self, required=(), optional=()):
        self.required = tuple(required)
        self.optional = tuple(optional)


    @property
    def keys(self):
        return tuple(key for key, validator in self.required + self.optional)


    def check(self, value, path=None):

        try:
            value.keys
            value.__getitem__
        except AttributeError:
            got = type(value).__name__
            raise ValidationError('expected object, got %s' % (got), path)

        for key, validator in self.required:
            if key not in value:
                raise ValidationError('missing required key %s' % (repr(key)), path)

        for key, validator in self.required + self.optional:
            try:
                field = value[key]
            except KeyError:
                continue

            validator.check(field, _join(path, key))


# end of class Object



class Array(Validator):
    """ A list whose every element satisfies the *items* validator.
    """

    kind = descriptors.ARRAY

    def __init__(self, items):
        self.items = items


    def check(self, value, path=None):

        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            got = type(value).__name__
            raise ValidationError('expected array, got %s' % (got), path)

        for index, element in enumerate(value):
            self.items.check(element, _join(path, str(index)))


# end of class Array



class Reference(Validator):
    """ Defer to the validator registered under the *qualified* type name.
        The lookup happens at check time, so the referenced type may be
        defined after the reference is created.
    """

    def __init__(self, registry, qualified):
        self.registry = registry
        self.kind = '$ref:' + qualified
        self.qualified = qualified


    def check(self, value, path=None):

        try:
            validator = self.registry[self.qualified]
        except KeyError:
            raise SchemaCoverageGap(self.kind, path)

        validator.check(value, path)


# end of class Reference



class Unsupported(Validator):
    """ Placeholder for a declared type kind that has no validator. It
        fails every check, including for None.
    """

    def __init__(self, kind):
        self.kind = kind


    def check(self, value, path=None):
        raise SchemaCoverageGap(self.kind, path)


# end of class Unsupported



class Registry:
    """ The collection of generated validators, indexed by qualified type
        name ('Page.FrameId'). Domains are added one at a time with
        :func:`define_domain`; references between types, including ones
        across domains, resolve whenever a check is performed.
    """

    def __init__(self):
        self._validators = dict()


    def __contains__(self, qualified):
        return qualified in self._validators


    def __getitem__(self, qualified):
        return self._validators[qualified]


    def __len__(self):
        return len(self._validators)


    def define_domain(self, domain, types):
        """ Generate and register one validator for each
            :class:`descriptors.Type` in the *types* sequence, all of which
            belong to the named *domain*.
        """

        for type in types:
            self._validators[type.qualified] = self.generate(type)


    def generate(self, type):
        """ Return the validator for a single :class:`descriptors.Type`.
        """

        kind = type.kind

        if kind == descriptors.ENUM:
            return Enum(type.enum)

        if kind == descriptors.OBJECT:
            return self.object(type.domain, type.properties)

        if kind in descriptors.PRIMITIVES:
            return Primitive(kind)

        log.warning('no validator for %s, declared type %s', type.qualified, repr(kind))
        return Unsupported(kind)


    def object(self, domain, fields, internal=False):
        """ Return an :class:`Object` validator for the sequence of
            :class:`descriptors.Field` instances. The keys are the external
            field names unless *internal* is True, in which case they are
            translated with :func:`schemarpc.names.to_internal`.
        """

        required = list()
        optional = list()

        for field in fields:
            if internal:
                key = to_internal(field.name)
            else:
                key = field.name

            pair = (key, self.field(domain, field))

            if field.optional:
                optional.append(pair)
            else:
                required.append(pair)

        return Object(required, optional)


    def field(self, domain, field):
        """ Return the validator for a single field declaration within
            the named *domain*.
        """

        if field.enum is not None:
            return Enum(field.enum)

        if field.ref is not None:
            return Reference(self, qualify(domain, field.ref))

        kind = field.type

        if kind in descriptors.PRIMITIVES:
            return Primitive(kind)

        if kind == descriptors.ANY:
            return Anything()

        if kind == descriptors.OBJECT:
            return Object()

        if kind == descriptors.ARRAY and field.items is not None:
            return Array(self.field(domain, field.items))

        log.warning('no validator for field %s in %s, declared type %s', field.name, domain, repr(kind))
        return Unsupported(kind)


# end of class Registry



def qualify(domain, ref):
    """ References within a domain are bare type names; references to other
        domains are already qualified.
    """

    if '.' in ref:
        return ref

    return domain + '.' + ref



def _join(path, key):

    if path:
        return path + '.' + key

    return key


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
