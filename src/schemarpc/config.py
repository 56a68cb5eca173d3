""" Configuration for schemarpc is drawn from the environment. The local
    directory holds cached protocol descriptions; the endpoint identifies
    the default remote side used when a command is invoked without an
    explicit connection.
"""

import os


default_address = 'localhost'

# Placeholder only: there is no standard port for a schemarpc endpoint, and
# deployments are expected to set SCHEMARPC_PORT to whatever the remote
# side's ROUTER socket is bound to.
default_port = 10079


def directory(override=None):
    """ Return the schemarpc home directory, whose ``protocol``
        subdirectory holds the JSON documents loaded by
        :func:`schemarpc.protocol.Catalog.load`. The lookup order is an
        absolute *override* path (created if missing, and remembered for
        later calls), then ``$SCHEMARPC_HOME``, then ``$HOME/.schemarpc``.
        The answer is cached after the first call.
    """

    if override is not None:
        override = os.path.expandvars(str(override))

        if not os.path.isabs(override):
            raise ValueError('directory override must be absolute: ' + repr(override))

        os.makedirs(override, mode=0o775, exist_ok=True)
        os.environ['SCHEMARPC_HOME'] = override
        directory.found = override

    if directory.found is not None:
        return directory.found

    found = os.environ.get('SCHEMARPC_HOME')

    if found is None:
        try:
            home = os.environ['HOME']
        except KeyError:
            raise RuntimeError('neither SCHEMARPC_HOME nor HOME is set')

        found = os.path.join(home, '.schemarpc')

    directory.found = found
    return found

directory.found = None



def protocol_directory():
    """ Return the subdirectory of :func:`directory` containing the JSON
        protocol descriptions loaded by default.
    """

    return os.path.join(directory(), 'protocol')



def endpoint():
    """ Return the (address, port) tuple for the default connection. The
        ``SCHEMARPC_ADDRESS`` and ``SCHEMARPC_PORT`` environment variables
        override the built-in defaults.
    """

    address = os.environ.get('SCHEMARPC_ADDRESS', default_address)
    port = os.environ.get('SCHEMARPC_PORT', default_port)

    try:
        port = int(port)
    except ValueError:
        raise ValueError('SCHEMARPC_PORT must be an integer: ' + repr(port))

    return (address, port)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
