"""
Tests for the persistence codec.
"""

import json

import pytest
from simple_todos.domain.models import Task
from simple_todos.infra.codec import serialize, deserialize


def test_round_trip_keeps_order_and_fields():
    tasks = [
        Task(id="1700000000002-bbbbbb", title="B", completed=True),
        Task(id="1700000000001-aaaaaa", title="A ünïcödé", completed=False),
    ]
    assert deserialize(serialize(tasks)) == tasks


def test_empty_collection_round_trip():
    assert serialize([]) == "[]"
    assert deserialize("[]") == []


def test_blob_is_plain_json_array():
    blob = serialize([Task(id="x1", title="Buy milk")])
    assert json.loads(blob) == [{"id": "x1", "title": "Buy milk", "completed": False}]


def test_reads_blob_written_by_other_clients():
    blob = '[{"id": "1760000000000-abc123", "title": "Buy milk", "completed": true, "color": "red"}]'
    assert deserialize(blob) == [Task(id="1760000000000-abc123", title="Buy milk", completed=True)]


@pytest.mark.parametrize("raw", [
    None,
    "",
    "not valid data",
    "null",
    "{}",
    '"todos"',
    '[{"id": "1", "title": "A"}, 5]',
    '[{"title": "no id", "completed": false}]',
    '[{"id": "1", "completed": false}]',
    '[{"id": 1, "title": "A", "completed": false}]',
    '[{"id": "1", "title": "A", "completed": "yes"}]',
    '[{"id": "1", "title": "   ", "completed": false}]',
    '[{"id": "1", "title": "A", "completed": false}, {"id": "1", "title": "B", "completed": true}]',
])
def test_malformed_data_yields_empty_collection(raw):
    assert deserialize(raw) == []
