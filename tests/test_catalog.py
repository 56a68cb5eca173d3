import os
import pytest

import schemarpc
from schemarpc import config
from schemarpc.errors import CatalogError
from schemarpc.protocol.catalog import Catalog


def test_domains(catalog):

    assert catalog.domains() == ['Page', 'Network']
    assert 'Page' in catalog
    assert 'Runtime' not in catalog
    assert len(catalog) == 2

    with pytest.raises(CatalogError):
        catalog.commands_for_domain('Runtime')

    with pytest.raises(KeyError):
        catalog.types_for_domain('Runtime')


def test_commands_keep_order(catalog):

    commands = catalog.commands_for_domain('Page')
    assert [command.name for command in commands] == ['enable', 'navigate', 'getFrameTree', 'setDocumentContent']

    navigate = commands[1]
    assert navigate.method == 'Page.navigate'
    assert [field.name for field in navigate.parameters] == ['url', 'referrer', 'transitionType', 'frameId']
    assert [field.name for field in navigate.required] == ['url']
    assert [field.name for field in navigate.optional] == ['referrer', 'transitionType', 'frameId']
    assert [field.name for field in navigate.returns] == ['frameId', 'loaderId', 'errorText']

    frame_id = navigate.parameters[3]
    assert frame_id.ref == 'FrameId'
    assert frame_id.type is None
    assert frame_id.optional


def test_types(catalog):

    types = catalog.types_for_domain('Page')
    kinds = dict((type.id, type.kind) for type in types)

    assert kinds['FrameId'] == 'string'
    assert kinds['TransitionType'] == 'enum'
    assert kinds['Frame'] == 'object'
    assert kinds['FrameList'] == 'array'

    transition = types[1]
    assert transition.enum == ('link', 'typed', 'reload')
    assert transition.qualified == 'Page.TransitionType'


def test_loads(document):

    raw = schemarpc.json.dumps(document)

    catalog = Catalog.loads(raw)
    assert catalog.domains() == ['Page', 'Network']

    catalog = Catalog.loads(raw.decode())
    assert catalog.domains() == ['Page', 'Network']

    with pytest.raises(ValueError):
        Catalog.loads(b'{"commands": []}')


def test_later_document_replaces_domain(document):

    replacement = {'domains': [{'domain': 'Network', 'commands': [{'name': 'enable'}]}]}
    catalog = Catalog((document, replacement))

    commands = catalog.commands_for_domain('Network')
    assert [command.name for command in commands] == ['enable']


def test_load_from_protocol_directory(document, tmp_path, monkeypatch):

    monkeypatch.setenv('SCHEMARPC_HOME', str(tmp_path))
    monkeypatch.setattr(config.directory, 'found', None)

    protocol = tmp_path / 'protocol'
    protocol.mkdir()

    browser = {'domains': [document['domains'][0]]}
    network = {'domains': [document['domains'][1]]}

    (protocol / 'browser_protocol.json').write_bytes(schemarpc.json.dumps(browser))
    (protocol / 'network.json').write_bytes(schemarpc.json.dumps(network))
    (protocol / 'README').write_text('ignored')

    catalog = Catalog.load()
    assert sorted(catalog.domains()) == ['Network', 'Page']

    single = Catalog.load(os.path.join(str(protocol), 'network.json'))
    assert single.domains() == ['Network']



def test_field_without_a_kind(correlator):

    document = {'domains': [{'domain': 'Storage', 'commands': [
        {'name': 'putBlob', 'parameters': [
            {'name': 'key', 'type': 'string'},
            {'name': 'blob', 'optional': True},
        ]},
    ]}]}

    catalog = Catalog((document,))

    blob = catalog.commands_for_domain('Storage')[0].parameters[1]
    assert blob.type is None
    assert blob.ref is None
    assert repr(blob) == '<Field blob None optional>'

    bindings = schemarpc.Bindings(catalog, correlator)
    validator = bindings['Storage.putBlob'].parameters_validator

    assert validator({'key': 'k'})

    for value in (None, b'abc', 'abc', {}, [1]):
        assert not validator({'key': 'k', 'blob': value})


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
