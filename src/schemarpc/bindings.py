""" Generation of callable command bindings from a schema catalog. The
    generation pass runs once, up front: every command descriptor becomes
    a :class:`Command` instance, indexed by its qualified name, and every
    type descriptor becomes a validator in a shared
    :class:`schemarpc.protocol.validators.Registry`.
"""

import logging

from . import names
from .errors import CatalogError
from .protocol import message
from .protocol.validators import Registry


log = logging.getLogger(__name__)


class Command:
    """ A callable binding for a single command. There are three ways to
        invoke it::

            navigate()                          # ambient connection, no parameters
            navigate({'url': url})              # ambient connection
            navigate(connection, {'url': url})

        Parameter keys are the Python form of the protocol names, for example
        'frame_id' rather than 'frameId'; keyword arguments are merged over
        the parameter dictionary, if any. Keys the schema does not declare
        are passed through unchanged. The return value is the 'result' block
        of the reply, exactly as it was received.

        Neither the *parameters_validator* nor the *returns_validator*
        is enforced on invocation; they are
        provided for contract-checking tools. The parameters validator is
        keyed by the Python names, the returns validator by the protocol
        names, matching what the caller passes and what the reply contains.

        :ivar method: The qualified name sent on the wire, 'Domain.command'.
        :ivar parameters: Python parameter names, required ones first.
    """

    def __init__(self, descriptor, correlator, registry):

        self.descriptor = descriptor
        self.correlator = correlator

        self.domain = descriptor.domain
        self.method = descriptor.method
        self.name = names.to_internal(descriptor.name)

        required = descriptor.required
        optional = descriptor.optional

        self.required = tuple(names.to_internal(field.name) for field in required)
        self.optional = tuple(names.to_internal(field.name) for field in optional)
        self.parameters = self.required + self.optional
        self.parameter_names = names.external_names(required + optional)

        self.parameters_validator = registry.object(self.domain, descriptor.parameters, internal=True)
        self.returns_validator = registry.object(self.domain, descriptor.returns)

        self.__doc__ = descriptor.description


    def __repr__(self):
        return '<Command %s(%s)>' % (self.method, ', '.join(self.parameters))


    def __call__(self, *args, **kwargs):

        if len(args) == 0:
            connection = None
            params = None
        elif len(args) == 1:
            connection = None
            params = args[0]
        elif len(args) == 2:
            connection, params = args
        else:
            raise TypeError('%s takes at most 2 positional arguments (%d given)' % (self.method, len(args)))

        if params is None:
            params = dict()

        if kwargs:
            params = dict(params)
            params.update(kwargs)

        if len(args) < 2:
            connection = self.correlator.port.get_current_connection()

        return self.invoke(connection, params)


    def invoke(self, connection, params):
        """ Send this command with the *params* dictionary over *connection*,
            block until the reply arrives, and return its result.
        """

        payload = message.request(self.method, params, self.parameter_names)
        return self.correlator.call(connection, payload)


    def validate(self, params):
        """ Raise :class:`schemarpc.errors.ValidationError` if the *params*
            dictionary does not match the declared parameters.
        """

        self.parameters_validator.check(params)


    def validate_result(self, result):
        """ Raise :class:`schemarpc.errors.ValidationError` if the *result*
            of an invocation does not match the declared return fields.
        """

        self.returns_validator.check(result)


# end of class Command



class Domain:
    """ The commands for a single domain, accessible as attributes using
        their Python names (``page.navigate``), or by item lookup using either
        the Python or the protocol name. The domain's own state is kept
        under underscore names, so that no command can be shadowed by it.
    """

    def __init__(self, name):

        self._name = name
        self._commands = dict()


    def __contains__(self, name):
        return name in self._commands


    def __getattr__(self, name):

        if name.startswith('_'):
            raise AttributeError(name)

        try:
            return self._commands[name]
        except KeyError:
            raise AttributeError('domain %s has no command %s' % (self._name, repr(name)))


    def __getitem__(self, name):

        try:
            return self._commands[name]
        except KeyError:
            pass

        try:
            return self._commands[names.to_internal(name)]
        except KeyError:
            raise CatalogError('domain %s has no command %s' % (self._name, repr(name)))


    def __iter__(self):
        return iter(self._commands.values())


    def __len__(self):
        return len(self._commands)


    def __repr__(self):
        return '<Domain %s: %d commands>' % (self._name, len(self._commands))


    def _add(self, command):
        self._commands[command.name] = command


# end of class Domain



class Bindings:
    """ The explicit generation pass over a :class:`schemarpc.protocol.Catalog`.
        Every command in the requested *domains* (default: all of them) is
        bound to the *correlator*, an instance of
        :class:`schemarpc.correlator.Correlator`.

        Commands are looked up by qualified name (``bindings['Page.navigate']``)
        and domains by attribute (``bindings.Page``) or :func:`domain`.

        :ivar validators: The :class:`Registry` of generated type validators.
    """

    def __init__(self, catalog, correlator, domains=None):

        self.catalog = catalog
        self.correlator = correlator
        self.validators = Registry()

        self._commands = dict()
        self._domains = dict()

        if domains is None:
            domains = catalog.domains()

        for domain in domains:
            self.define(domain)


    def __contains__(self, method):
        return method in self._commands


    def __getattr__(self, name):

        if name.startswith('_'):
            raise AttributeError(name)

        try:
            return self._domains[name]
        except KeyError:
            raise AttributeError('no domain named ' + repr(name))


    def __getitem__(self, method):

        try:
            return self._commands[method]
        except KeyError:
            raise CatalogError('unknown command: ' + str(method))


    def __iter__(self):
        return iter(self._commands.values())


    def __len__(self):
        return len(self._commands)


    def define(self, domain):
        """ Generate the validators and commands for the named *domain*.
            Types are registered before commands so that parameter and
            return validators refer to a populated registry, though the
            references themselves are resolved lazily.
        """

        self.validators.define_domain(domain, self.catalog.types_for_domain(domain))

        bound = Domain(domain)

        for descriptor in self.catalog.commands_for_domain(domain):
            command = Command(descriptor, self.correlator, self.validators)
            bound._add(command)
            self._commands[command.method] = command

        self._domains[domain] = bound
        log.debug('bound %d commands for domain %s', len(bound), domain)

        return bound


    def domain(self, name):

        try:
            return self._domains[name]
        except KeyError:
            raise CatalogError('unknown domain: ' + str(name))


    def domains(self):
        return list(self._domains.keys())


# end of class Bindings


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
