import pytest
from pydantic import ValidationError

from localdb_lib.query import Query, coerce_query


def test_query_defaults_are_empty():
    q = Query()
    assert q.match == {} and q.like == {}
    assert q.is_empty


def test_query_accepts_bare_blocks():
    q = Query.model_validate({'match': {'a': 1}, 'like': {'b': 'x'}})
    assert q.match == {'a': 1}
    assert q.like == {'b': 'x'}
    assert not q.is_empty


def test_query_accepts_search_wrapper():
    q = Query.model_validate({'search': {'match': {'a': 1}}})
    assert q.match == {'a': 1}
    assert q.like == {}


def test_query_ignores_null_blocks():
    q = Query.model_validate({'match': None, 'like': {'b': 'x'}})
    assert q.match == {}


def test_query_rejects_non_mapping_blocks():
    with pytest.raises(ValidationError):
        Query.model_validate({'match': 5})
    with pytest.raises(ValidationError):
        Query.model_validate({'search': 'text'})


def test_coerce_query():
    assert coerce_query(None) is None
    q = Query(match={'a': 1})
    assert coerce_query(q) is q
    assert coerce_query({'like': {'a': 'b'}}).like == {'a': 'b'}


@pytest.mark.parametrize('raw', [
    {'match': {'a': {1, 2}}},
    {'like': {'a': object()}},
    {'match': {'a': [1, {'b': b'bytes'}]}},
])
def test_query_rejects_non_json_values(raw):
    with pytest.raises(ValidationError):
        Query.model_validate(raw)


def test_query_accepts_nested_json_values():
    q = Query.model_validate({'match': {'a': [1, None, {'b': [True, 'x', 1.5]}]}})
    assert q.match['a'][2]['b'] == [True, 'x', 1.5]
