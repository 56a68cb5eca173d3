""" Matching asynchronous replies to the blocking call that issued the
    corresponding request. Every call is assigned a locally unique id; the
    reply carrying that id is routed back to the waiting caller, no matter
    how many other calls are outstanding or what order their replies
    arrive in.

    There is no timeout and no cancellation: if the transport never delivers
    a reply for a given id, the caller waiting on it will block forever.
    This is acceptable for a local, always-responsive remote side, and is a
    known limitation otherwise.
"""

import itertools
import logging
import threading

from .protocol import message


log = logging.getLogger(__name__)


class Pending:
    """ A single-use rendezvous slot for one outstanding call. The slot is
        completed exactly once, releasing the caller blocked in :func:`wait`.

        :ivar reply: The reply delivered for this call, or None.
    """

    def __init__(self, id):

        self.id = id
        self.reply = None
        self.event = threading.Event()


    def __repr__(self):
        state = 'complete' if self.poll() else 'pending'
        return '<Pending %d %s>' % (self.id, state)


    def _complete(self, reply):
        """ Locally store the reply and signal the caller blocking via
            :func:`wait` to proceed.
        """

        self.reply = reply
        self.event.set()


    def poll(self):
        """ Return True if the call is complete, otherwise return False.
        """

        return self.event.is_set()


    def wait(self):
        """ Block until the reply has been delivered, and return it. There
            is intentionally no timeout.
        """

        self.event.wait()
        return self.reply


# end of class Pending



class Correlator:
    """ Issue command ids, track in-flight calls, and deliver replies. All
        commands are sent through the ConnectionPort *port*, an instance of
        :class:`schemarpc.transport.base.Port`.

        The id counter and the table of pending calls are the only shared
        state; each has its own lock.
    """

    def __init__(self, port, first=1):

        self.port = port

        self._id_lock = threading.Lock()
        self._id_ticker = itertools.count(first)

        self._pending = dict()
        self._pending_lock = threading.Lock()


    @property
    def pending(self):
        """ The number of calls still awaiting a reply. """

        with self._pending_lock:
            return len(self._pending)


    def next_id(self):
        """ Return the next command id. Ids are strictly increasing and are
            never reused over the lifetime of this instance.
        """

        with self._id_lock:
            return next(self._id_ticker)


    def call(self, connection, payload):
        """ Send the request *payload* over *connection* and block until the
            matching reply arrives. The payload is copied and assigned a
            fresh id before it is sent; the value of the reply's 'result'
            field is returned, or :class:`schemarpc.errors.RemoteCommandError`
            is raised if the reply carries an 'error' field.
        """

        id = self.next_id()
        payload = message.with_id(payload, id)

        # The slot must be registered before the request goes out, the reply
        # could otherwise arrive before anyone is listening for it.

        pending = Pending(id)

        with self._pending_lock:
            self._pending[id] = pending

        def on_reply(reply):
            self.deliver(id, reply)

        log.debug('sending %s id=%d', payload[message.METHOD], id)

        try:
            self.port.send_command(connection, payload, id, on_reply)
        except BaseException:
            with self._pending_lock:
                self._pending.pop(id, None)
            raise

        reply = pending.wait()
        return message.result(reply, payload)


    def deliver(self, id, reply):
        """ Complete the pending call with the specified *id*. A delivery
            for an id that is unknown, or has already been completed, is
            logged and otherwise ignored.
        """

        with self._pending_lock:
            pending = self._pending.pop(id, None)

        if pending is None:
            log.warning('dropping reply for unknown command id %s', repr(id))
            return

        log.debug('received reply id=%d', id)
        pending._complete(reply)


# end of class Correlator



_default = None
_default_lock = threading.Lock()


def default(port=None):
    """ Return the process-wide :class:`Correlator` used by the top-level
        :func:`schemarpc.get` entry point, creating it with *port* on first
        use. Explicitly constructed correlators are independent of this one.
    """

    global _default

    with _default_lock:
        if _default is None:
            if port is None:
                from .transport import zmq
                port = zmq.port()

            _default = Correlator(port)

        return _default


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
