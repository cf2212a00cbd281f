"""Predicates used to filter documents during a collection scan."""
from __future__ import annotations
from typing import Any

from localdb_lib.query.values import ValueKind, contains_strict, kind_of, strict_equal


def _primitive_match(doc_value: Any, query_value: Any) -> bool:
    if kind_of(doc_value) is ValueKind.SEQUENCE:
        return contains_strict(doc_value, query_value)
    return strict_equal(doc_value, query_value)


def matches(doc_value: Any, query_value: Any) -> bool:
    """Deep equality where the query is a subset of the document.

    - primitive query: element of a sequence, or strictly equal
    - sequence query: same length, pairwise `matches`, order-sensitive
    - keyed query: every query key present in a keyed document and matching
    """
    qk = kind_of(query_value)
    dk = kind_of(doc_value)
    if qk.is_primitive:
        return _primitive_match(doc_value, query_value)
    if qk is ValueKind.SEQUENCE:
        if dk is not ValueKind.SEQUENCE or len(doc_value) != len(query_value):
            return False
        return all(matches(d, q) for d, q in zip(doc_value, query_value))
    # KEYED
    if dk is not ValueKind.KEYED:
        return False
    return all(key in doc_value and matches(doc_value[key], q) for key, q in query_value.items())


def like(doc_value: Any, query_value: Any) -> bool:
    """Case-insensitive containment.

    Text queries match as substrings of text values or of any text element in
    a sequence. Keyed queries recurse per key. Sequence queries never match.
    """
    qk = kind_of(query_value)
    dk = kind_of(doc_value)
    if qk is ValueKind.TEXT:
        needle = query_value.lower()
        if dk is ValueKind.TEXT:
            return needle in doc_value.lower()
        if dk is ValueKind.SEQUENCE:
            return any(kind_of(item) is ValueKind.TEXT and needle in item.lower() for item in doc_value)
        return False
    if qk.is_primitive:
        return _primitive_match(doc_value, query_value)
    if qk is ValueKind.SEQUENCE or dk is not ValueKind.KEYED:
        return False
    return all(key in doc_value and like(doc_value[key], q) for key, q in query_value.items())


def _fields_pass(document: Any, fields: dict[str, Any], predicate) -> bool:
    if not fields:
        return True
    if kind_of(document) is not ValueKind.KEYED:
        return False
    for key, expected in fields.items():
        if key not in document or not predicate(document[key], expected):
            return False
    return True


def document_matches(document: Any, query) -> bool:
    """True if `document` passes every `match` field and then every `like` field."""
    if query is None:
        return True
    return _fields_pass(document, query.match, matches) and _fields_pass(document, query.like, like)
