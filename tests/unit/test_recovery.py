import json
import logging
import re

import pytest

from localdb_lib.exceptions import BackupFailed, CorruptData
from localdb_lib.storage import recovery
from localdb_lib.storage.recovery import backup_document, decode_document, ensure_dir_exists


def test_decode_valid_json_logs_nothing(caplog):
    with caplog.at_level(logging.WARNING, logger='localdb_lib'):
        assert decode_document('{"a": [1, 2]}', 'doc') == {'a': [1, 2]}
    assert caplog.records == []


def test_decode_repairs_trailing_comma_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='localdb_lib'):
        value = decode_document('{"name": "Laptop", "price": 10,}', 'products/laptop.json')
    assert value == {'name': 'Laptop', 'price': 10}
    assert any('Attempting repair' in r.getMessage() and 'products/laptop.json' in r.getMessage()
               for r in caplog.records)


def test_decode_repairs_unclosed_object():
    assert decode_document('{"a": 1', 'doc') == {'a': 1}


def test_decode_unrepairable_keeps_original_error(monkeypatch, caplog):
    def broken_repair(text):
        raise ValueError('cannot repair')

    monkeypatch.setattr(recovery, 'repair_json', broken_repair)
    with caplog.at_level(logging.WARNING, logger='localdb_lib'):
        with pytest.raises(CorruptData) as exc:
            decode_document('{oops', 'doc')
    assert isinstance(exc.value.original_error, json.JSONDecodeError)
    assert exc.value.__cause__ is exc.value.original_error
    # the warning is emitted even though the repair failed
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_backup_document_writes_timestamped_file(tmp_path):
    path = backup_document(tmp_path, 'products', 'a/b?', '{"x": 1}')
    assert path.parent == tmp_path / '.backup' / 'products'
    assert re.fullmatch(r'a_b_\d+\.json\.bak', path.name)
    assert json.loads(path.read_text(encoding='utf-8')) == {'x': 1}


def test_backup_document_failure_raises(tmp_path):
    (tmp_path / '.backup').write_text('not a directory')
    with pytest.raises(BackupFailed):
        backup_document(tmp_path, 'products', 'doc', '{}')


def test_ensure_dir_exists(tmp_path):
    target = tmp_path / 'a' / 'b'
    assert ensure_dir_exists(target) == target
    assert target.is_dir()
    # idempotent
    ensure_dir_exists(target)
    blocker = tmp_path / 'file'
    blocker.write_text('x')
    with pytest.raises(OSError):
        ensure_dir_exists(blocker)


def test_decode_too_deeply_nested_is_corrupt():
    with pytest.raises(CorruptData) as exc:
        decode_document('[' * 200000, 'deep.json')
    assert isinstance(exc.value.original_error, RecursionError)


@pytest.mark.parametrize('text', ['this is not json', '{{{{'])
def test_decode_nothing_salvageable_is_corrupt(text):
    with pytest.raises(CorruptData):
        decode_document(text, 'doc')


@pytest.mark.parametrize('repaired', ['""', '[]', '{}', ''])
def test_decode_empty_repair_results_are_corrupt(monkeypatch, repaired):
    monkeypatch.setattr(recovery, 'repair_json', lambda text: repaired)
    with pytest.raises(CorruptData):
        decode_document('{"a": ', 'doc')


def test_decode_unexpected_repair_exception_is_corrupt(monkeypatch):
    def exploding_repair(text):
        raise RuntimeError('internal repair failure')

    monkeypatch.setattr(recovery, 'repair_json', exploding_repair)
    with pytest.raises(CorruptData) as exc:
        decode_document('{oops', 'doc')
    assert isinstance(exc.value.original_error, json.JSONDecodeError)
