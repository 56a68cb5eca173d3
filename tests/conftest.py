import threading

import pytest

import schemarpc
from schemarpc.transport.base import Port


def protocol():
    """ A small protocol document covering every kind of declaration the
        generators need to handle.
    """

    page = dict()
    page['domain'] = 'Page'
    page['description'] = 'Actions and events related to the inspected page.'

    page['types'] = [
        {'id': 'FrameId', 'type': 'string'},
        {'id': 'TransitionType', 'type': 'string',
         'enum': ['link', 'typed', 'reload']},
        {'id': 'Frame', 'type': 'object', 'properties': [
            {'name': 'id', '$ref': 'FrameId'},
            {'name': 'parentId', '$ref': 'FrameId', 'optional': True},
            {'name': 'loaderId', '$ref': 'Network.LoaderId'},
            {'name': 'url', 'type': 'string'},
        ]},
        # Refers to a type declared after it.
        {'id': 'FrameTree', 'type': 'object', 'properties': [
            {'name': 'frame', '$ref': 'Frame'},
            {'name': 'childFrames', 'type': 'array', 'optional': True,
             'items': {'$ref': 'FrameTree'}},
        ]},
        {'id': 'Scale', 'type': 'number'},
        {'id': 'FrameList', 'type': 'array', 'items': {'$ref': 'Frame'}},
    ]

    page['commands'] = [
        {'name': 'enable', 'description': 'Enables page domain notifications.'},
        {'name': 'navigate',
         'description': 'Navigates current page to the given URL.',
         'parameters': [
            {'name': 'url', 'type': 'string'},
            {'name': 'referrer', 'type': 'string', 'optional': True},
            {'name': 'transitionType', '$ref': 'TransitionType', 'optional': True},
            {'name': 'frameId', '$ref': 'FrameId', 'optional': True},
         ],
         'returns': [
            {'name': 'frameId', '$ref': 'FrameId'},
            {'name': 'loaderId', '$ref': 'Network.LoaderId', 'optional': True},
            {'name': 'errorText', 'type': 'string', 'optional': True},
         ]},
        {'name': 'getFrameTree',
         'returns': [{'name': 'frameTree', '$ref': 'FrameTree'}]},
        {'name': 'setDocumentContent',
         'parameters': [
            {'name': 'html', 'type': 'string'},
            {'name': 'frameId', '$ref': 'FrameId', 'optional': True},
         ]},
    ]

    network = dict()
    network['domain'] = 'Network'
    network['types'] = [{'id': 'LoaderId', 'type': 'string'}]
    network['commands'] = [
        {'name': 'setCacheDisabled', 'parameters': [
            {'name': 'cacheDisabled', 'type': 'boolean'}]},
    ]

    return {'domains': [page, network]}



class LoopbackPort(Port):
    """ A ConnectionPort that records every command sent through it. If a
        *responder* is supplied it is called with each payload, and its
        return value, if not None, is delivered immediately as the reply.
    """

    def __init__(self, responder=None):
        Port.__init__(self)
        self.responder = responder
        self.sent = list()
        self.condition = threading.Condition()


    def send_command(self, connection, payload, id, on_reply):

        with self.condition:
            self.sent.append((connection, payload, id, on_reply))
            self.condition.notify_all()

        if self.responder is not None:
            reply = self.responder(payload)
            if reply is not None:
                on_reply(reply)


    def wait_for(self, count, timeout=5):

        with self.condition:
            arrived = self.condition.wait_for(lambda: len(self.sent) >= count, timeout)

        assert arrived, 'expected %d commands, saw %d' % (count, len(self.sent))
        return list(self.sent[:count])


def echo(payload):
    return {'id': payload['id'], 'result': {'echo': payload['params']}}



@pytest.fixture
def document():
    return protocol()


@pytest.fixture
def make_port():
    return LoopbackPort


@pytest.fixture
def catalog():
    return schemarpc.Catalog((protocol(),))


@pytest.fixture
def port():
    instance = LoopbackPort(echo)
    instance.set_current_connection('ambient')
    return instance


@pytest.fixture
def correlator(port):
    return schemarpc.Correlator(port)


@pytest.fixture
def bindings(catalog, correlator):
    return schemarpc.Bindings(catalog, correlator)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
