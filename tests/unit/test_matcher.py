import pytest

from localdb_lib.query import Query, ValueKind, document_matches, kind_of, like, matches


@pytest.mark.parametrize('value,kind', [
    (None, ValueKind.NULL),
    (True, ValueKind.BOOLEAN),
    (0, ValueKind.NUMBER),
    (1.5, ValueKind.NUMBER),
    ('x', ValueKind.TEXT),
    ([1], ValueKind.SEQUENCE),
    ({'a': 1}, ValueKind.KEYED),
])
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_kind_of_rejects_non_json_values():
    with pytest.raises(TypeError):
        kind_of({1, 2})


def test_matches_primitives_are_strict():
    assert matches('Electronics', 'Electronics')
    assert not matches('Electronics', 'Books')
    assert matches(1, 1.0)
    assert not matches(1, True)
    assert not matches(0, False)
    assert not matches('1', 1)
    assert matches(None, None)
    assert not matches(0, None)


def test_matches_primitive_query_against_sequence_is_containment():
    assert matches(['a', 'b'], 'a')
    assert not matches(['a', 'b'], 'c')
    assert matches([1, None], None)
    assert not matches([1, 2], True)
    assert matches([1, True], True)


def test_matches_sequence_query_is_pairwise_and_ordered():
    assert matches([1, 2], [1, 2])
    assert not matches([2, 1], [1, 2])
    assert not matches([1, 2, 3], [1, 2])
    assert not matches('ab', ['a', 'b'])
    assert matches([{'a': 1, 'b': 2}], [{'a': 1}])


def test_matches_keyed_query_is_subset():
    doc = {'specs': {'ram': 16, 'cpu': 'x86'}, 'tags': ['a']}
    assert matches(doc, {'specs': {'ram': 16}})
    assert not matches(doc, {'specs': {'ram': 32}})
    assert not matches(doc, {'missing': 1})
    assert matches(doc, {})


def test_matches_structural_mismatch():
    assert not matches([{'a': 1}], {'a': 1})
    assert not matches('a', {'a': 1})
    assert not matches(None, [None])


def test_like_text_is_case_insensitive_substring():
    assert like('Laptop Pro', 'pro')
    assert like('Laptop Pro', 'LAPTOP')
    assert not like('Laptop Pro', 'phone')
    assert like(['Red Apple', 3], 'apple')
    assert not like([3, None], 'apple')
    assert not like(5, '5')
    assert not like({'name': 'pro'}, 'pro')


def test_like_non_text_primitives_fall_back_to_match():
    assert like(5, 5)
    assert like([5, 6], 6)
    assert not like(1, True)
    assert like(None, None)


def test_like_keyed_recurses():
    assert like({'a': 'Hello', 'b': 1}, {'a': 'ell'})
    assert not like({'a': 'Hello'}, {'a': 'xyz'})
    assert not like({'a': 'Hello'}, {'c': 'x'})


def test_like_rejects_sequences():
    assert not like(['a'], ['a'])
    assert not like([{'a': 'x'}], {'a': 'x'})


def test_document_matches_requires_all_fields():
    doc = {'category': 'Electronics', 'name': 'Laptop Pro', 'tags': ['a', 'b']}
    assert document_matches(doc, None)
    assert document_matches(doc, Query(match={'category': 'Electronics'}))
    assert not document_matches(doc, Query(match={'category': 'Books'}))
    assert document_matches(doc, Query(match={'tags': 'a'}))
    assert document_matches(doc, Query(match={'category': 'Electronics'}, like={'name': 'pro'}))
    assert not document_matches(doc, Query(match={'category': 'Electronics'}, like={'name': 'phone'}))
    assert not document_matches(doc, Query(like={'price': 'x'}))


def test_document_matches_non_keyed_documents():
    assert not document_matches(['a'], Query(match={'0': 'a'}))
    assert document_matches(['a'], Query())
