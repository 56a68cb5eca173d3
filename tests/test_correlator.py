""" Exercise the request/reply correlation: unique ids, one-shot delivery,
    and routing of replies to the right caller regardless of arrival order.
"""

import concurrent.futures
import random
import threading

import pytest

from schemarpc.correlator import Correlator, Pending
from schemarpc.errors import RemoteCommandError


def request(method='Page.navigate', **params):
    return {'id': None, 'method': method, 'params': params}


def test_ids_strictly_increase(correlator, port):

    ids = list()
    for count in range(5):
        correlator.call('ambient', request(url=str(count)))
        ids.append(port.sent[-1][2])

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)

    # The id handed to the port is the one embedded in the payload.
    for connection, payload, id, on_reply in port.sent:
        assert payload['id'] == id


def test_next_id_under_contention(correlator):

    def take(count):
        return [correlator.next_id() for number in range(count)]

    workers = concurrent.futures.ThreadPoolExecutor(max_workers=8)
    futures = [workers.submit(take, 250) for number in range(8)]
    ids = list()

    for future in futures:
        taken = future.result(timeout=10)
        assert taken == sorted(taken)
        ids.extend(taken)

    workers.shutdown()

    assert len(ids) == 2000
    assert len(set(ids)) == 2000


def test_independent_correlators(make_port):

    first = Correlator(make_port())
    second = Correlator(make_port())

    assert first.next_id() == 1
    assert first.next_id() == 2
    assert second.next_id() == 1


def test_reply_before_wait(correlator):

    # The loopback port delivers the reply before send_command returns,
    # which is before the caller starts to wait.

    result = correlator.call('ambient', request(url='http://x'))
    assert result == {'echo': {'url': 'http://x'}}
    assert correlator.pending == 0


def test_permuted_delivery(make_port):

    port = make_port()
    correlator = Correlator(port)
    count = 16

    def caller(sentinel):
        return correlator.call('connection', request(url=sentinel))

    workers = concurrent.futures.ThreadPoolExecutor(max_workers=count)
    futures = dict()

    for number in range(count):
        sentinel = 'http://%d' % (number)
        futures[sentinel] = workers.submit(caller, sentinel)

    sent = port.wait_for(count)
    assert correlator.pending == count

    for future in futures.values():
        assert not future.done()

    random.shuffle(sent)

    for connection, payload, id, on_reply in sent:
        reply = {'id': id, 'result': {'url': payload['params']['url']}}
        on_reply(reply)

    for sentinel, future in futures.items():
        assert future.result(timeout=5) == {'url': sentinel}

    workers.shutdown()
    assert correlator.pending == 0


def test_remote_error(make_port):

    def fail(payload):
        return {'id': payload['id'], 'error': {'code': -32000, 'message': 'bad url'}}

    port = make_port(fail)
    correlator = Correlator(port)
    original = request(url='http://x')

    with pytest.raises(RemoteCommandError) as raised:
        correlator.call('ambient', original)

    error = raised.value
    sent = port.sent[0][1]

    assert error.message == 'bad url'
    assert error.method == 'Page.navigate'
    assert error.error == {'code': -32000, 'message': 'bad url'}
    assert error.request == sent
    assert str(error) == 'Error in command Page.navigate: bad url'

    # The caller's payload is not modified.
    assert original['id'] is None


def test_send_failure_is_not_left_pending(make_port):

    def broken(payload):
        raise ConnectionResetError('gone')

    correlator = Correlator(make_port(broken))

    with pytest.raises(ConnectionResetError):
        correlator.call('ambient', request())

    assert correlator.pending == 0


def test_second_delivery_is_dropped(make_port):

    port = make_port()
    correlator = Correlator(port)
    results = list()

    thread = threading.Thread(target=lambda: results.append(correlator.call('c', request())))
    thread.start()

    connection, payload, id, on_reply = port.wait_for(1)[0]
    on_reply({'id': id, 'result': {'first': True}})
    on_reply({'id': id, 'result': {'second': True}})
    correlator.deliver(12345, {'id': 12345, 'result': {}})

    thread.join(5)
    assert results == [{'first': True}]


def test_pending_slot():

    pending = Pending(7)
    assert not pending.poll()

    pending._complete({'id': 7, 'result': {}})
    assert pending.poll()
    assert pending.wait() == {'id': 7, 'result': {}}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
