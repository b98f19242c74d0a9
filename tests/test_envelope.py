import json

import pytest

from backend.errors import (
    ConnectionOpenFailure, EngineError, InvalidArguments, ToolError, UnknownOperation,
)
from server.envelope import Envelope, failure_envelope, to_text


def test_structured_payload_is_indented_json():
    text = to_text({'a': [1, 2]})
    assert text == '{\n  "a": [\n    1,\n    2\n  ]\n}'


def test_plain_messages_pass_through():
    assert to_text('done') == 'done'
    assert Envelope.success('done').text == 'done'


def test_json_text_round_trips():
    data = [{'id': 1, 'name': 'Zoë', 'score': 2.5, 'flag': None, 'tags': ['a', 'b']}]
    env = Envelope.success(data)
    assert json.loads(env.text) == data
    assert 'Zoë' in env.text


def test_non_finite_floats_become_null():
    text = to_text({'rows': [{'a': float('inf'), 'b': float('nan'), 'c': (1.5, float('-inf'))}]})
    assert json.loads(text) == {'rows': [{'a': None, 'b': None, 'c': [1.5, None]}]}


def test_to_dict_shape():
    assert Envelope.success([]).to_dict() == {'content': [{'type': 'text', 'text': '[]'}], 'isError': False}
    assert Envelope.failure('nope').to_dict() == {'content': [{'type': 'text', 'text': 'nope'}], 'isError': True}


def test_unserializable_payload_raises_type_error():
    with pytest.raises(TypeError):
        to_text({'when': object()})


@pytest.mark.parametrize('exc, expected', [
    (UnknownOperation('frob'), 'Unknown tool: frob'),
    (InvalidArguments('query', 'sql: Field required'), 'Error: Invalid arguments for query: sql: Field required'),
    (EngineError('no such table: x'), 'Error: no such table: x'),
    (ConnectionOpenFailure('/x.db', 'unable to open database file'), 'Error: unable to open /x.db: unable to open database file'),
    (ToolError('unmapped'), 'Error: unmapped'),
    (KeyError('k'), "Error: 'k'"),
])
def test_failure_mapping_is_total(exc, expected):
    env = failure_envelope('query', 'Error: ', exc)
    assert env.is_error
    assert env.text == expected


def test_failure_is_logged(capsys):
    failure_envelope('read_records', 'Error reading records: ', EngineError('disk I/O error'))
    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record['event'] == 'tool_failed'
    assert record['level'] == 'WARN'
    assert record['tool'] == 'read_records'
    assert record['kind'] == 'EngineError'


def test_log_level_threshold(monkeypatch, capsys):
    monkeypatch.setenv('LOG_LEVEL', 'ERROR')
    failure_envelope('query', 'Error: ', EngineError('quiet'))
    assert capsys.readouterr().err == ''
