""" The request and reply structures exchanged on the wire. A request is a
    plain dictionary with exactly three fields::

        {"id": 12, "method": "Page.navigate", "params": {"url": "http://x"}}

    A reply carries the same id, and either a 'result' or an 'error' block.
"""

from ..errors import RemoteCommandError
from .. import names


ID = 'id'
METHOD = 'method'
PARAMS = 'params'
RESULT = 'result'
ERROR = 'error'


def request(method, params, parameter_names, id=None):
    """ Construct a new request payload for the qualified *method* name.
        The keys of the *params* dictionary are renamed from their Python
        form using the *parameter_names* mapping; see
        :func:`schemarpc.names.rename`. The *id* is normally left as None
        and assigned when the request is dispatched.
    """

    payload = dict()
    payload[ID] = id
    payload[METHOD] = method
    payload[PARAMS] = names.rename(params, parameter_names)

    return payload



def with_id(payload, id):
    """ Return a copy of the request *payload* carrying the specified *id*.
    """

    payload = dict(payload)
    payload[ID] = id
    return payload



def result(reply, request):
    """ Interpret a *reply* to the original *request* payload: return the
        contents of its 'result' field, or raise
        :class:`schemarpc.errors.RemoteCommandError` if it carries an
        'error' field instead.
    """

    error = reply.get(ERROR)

    if error is not None:
        raise RemoteCommandError(request[METHOD], error, request)

    return reply.get(RESULT)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
