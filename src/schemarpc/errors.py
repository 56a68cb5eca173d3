""" Exception classes raised by schemarpc. Every exception raised on purpose
    by this package is a subclass of :class:`Error`, so that callers can
    catch everything with a single clause if they so choose.
"""


class Error(Exception):
    """ Base class for all schemarpc exceptions.
    """


class SchemaCoverageGap(Error):
    """ The schema declares a type kind that no validator is generated for.
        This is a statement about incomplete schema support, not about the
        value being checked; see :class:`schemarpc.protocol.validators.Unsupported`.
    """

    def __init__(self, kind, where=None):

        self.kind = kind
        self.where = where

        if where is None:
            text = 'no validator for declared type %s' % (repr(kind))
        else:
            text = '%s: no validator for declared type %s' % (where, repr(kind))

        Error.__init__(self, text)


class ValidationError(Error, ValueError):
    """ A value does not match the shape declared by the schema. The *path*
        identifies the offending field, using dots to separate nested keys.
    """

    def __init__(self, text, path=None):

        self.path = path

        if path:
            text = '%s: %s' % (path, text)

        Error.__init__(self, text)


class RemoteCommandError(Error):
    """ The remote side answered a command with an error. The *method* is the
        qualified command name, *error* the error block from the reply, and
        *request* the payload that was originally sent.

        :ivar message: The error message supplied by the remote side.
    """

    def __init__(self, method, error, request):

        self.method = method
        self.error = error
        self.request = request

        try:
            message = error['message']
        except (KeyError, TypeError):
            message = str(error)

        self.message = message
        Error.__init__(self, 'Error in command %s: %s' % (method, message))


class CatalogError(Error, KeyError):
    """ A domain, command, or type was requested that the schema catalog
        does not describe.
    """

    def __str__(self):
        return str(self.args[0]) if self.args else ''


class TransportError(Error):
    """ Base class for all transport-layer errors.
    """


class TransportConnectionError(TransportError):
    """ The transport could not establish, locate, or use a connection.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
