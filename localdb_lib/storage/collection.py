"""Per-collection document engine.

A collection is a directory under the database root holding one
``<sanitized id>.json`` file per document. Writes go straight to the target
file (no temp file and rename); a failed write is preserved through
`backup_document` instead.
"""
from __future__ import annotations
import logging
import secrets
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from localdb_lib.exceptions import (
    BackupFailed,
    DocumentDeleteError,
    DocumentExists,
    DocumentNotFound,
    DocumentReadError,
    InvalidInput,
    LocalDBError,
    WriteFailed,
)
from localdb_lib.query import coerce_query, document_matches
from localdb_lib.storage.recovery import backup_document, ensure_dir_exists
from localdb_lib.storage.serializer import JSONSerializer, Serializer
from localdb_lib.util import DOC_SUFFIX, doc_filename

logger = logging.getLogger(__name__)

# Stand-in for "no value given"; None is a storable document.
_MISSING = object()


class Collection:
    def __init__(self, root_path: str | Path, name: str, serializer: Optional[Serializer] = None) -> None:
        if not root_path:
            raise LocalDBError('Collection requires a valid root path.')
        if not isinstance(name, str) or not name:
            raise LocalDBError('Collection requires a valid collection name string.')
        self.root_path = Path(root_path)
        self.name = name
        self.path = self.root_path / name
        self.serializer = serializer or JSONSerializer()
        try:
            ensure_dir_exists(self.path)
        except OSError as e:
            raise LocalDBError(f"Failed to initialize collection directory '{self.path}': {e}") from e

    def __repr__(self) -> str:
        return f"Collection(name={self.name!r}, path={str(self.path)!r})"

    def _doc_path(self, doc_id: str) -> Path:
        return self.path / doc_filename(doc_id)

    def set(self, doc_id: str, data: Any = _MISSING) -> Dict[str, Any]:
        """Write `data` as the full content of document `doc_id`.

        Returns ``{'success': True, 'id': doc_id, 'path': '<file name>'}``.
        Raises WriteFailed when the write failed but the payload was backed
        up, and BackupFailed when the backup failed too.
        """
        if data is _MISSING:
            raise InvalidInput('Data to set cannot be missing. Use None or an empty dict/list if needed.')
        text = self.serializer.dump(data)
        path = self._doc_path(doc_id)
        try:
            path.write_text(text, encoding='utf-8')
        except OSError as write_error:
            logger.error("Error setting document '%s' in collection '%s' at '%s': %s",
                         doc_id, self.name, path, write_error)
            try:
                backup = backup_document(self.root_path, self.name, doc_id, text)
            except BackupFailed as backup_error:
                raise BackupFailed(
                    f"Failed to set document '{doc_id}' and also failed to backup: {write_error}. "
                    f"Backup failure: {backup_error}"
                ) from write_error
            raise WriteFailed(
                f"Failed to set document '{doc_id}': {write_error}. Data was backed up.",
                backup_path=backup,
            ) from write_error
        return {'success': True, 'id': doc_id, 'path': path.name}

    def insert(self, data: Mapping[str, Any], doc_id: Optional[str] = None) -> Dict[str, Any]:
        """Create a new object document, never replacing an existing one.

        Without `doc_id` a random 20-character hex id is generated. Raises
        DocumentExists when the id is taken and InvalidInput when `data` is
        not an object. Returns the same result dict as `set`.
        """
        if not isinstance(data, Mapping):
            raise InvalidInput('Only objects can be inserted as new documents.')
        if doc_id is None:
            doc_id = secrets.token_hex(10)
        if self._doc_path(doc_id).exists():
            raise DocumentExists(f"Can't create new document with existing id '{doc_id}'.")
        return self.set(doc_id, dict(data))

    def update(self, doc_id: str, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """Shallow-merge `patch` into an existing object document and return the result.

        Top-level keys in `patch` replace those in the stored document; nested
        objects are not merged. Raises DocumentNotFound when nothing is stored.
        """
        if not isinstance(patch, Mapping):
            raise InvalidInput('Update data must be an object.')
        if not self.exists(doc_id):
            raise DocumentNotFound(f"Document '{doc_id}' is not found.")
        current = self.get(doc_id)
        if not isinstance(current, dict):
            raise InvalidInput(f"Document '{doc_id}' is not an object and cannot be updated.")
        current.update(patch)
        self.set(doc_id, current)
        return current

    def get(self, doc_id: str) -> Any:
        """Return the decoded document, or None if it does not exist."""
        path = self._doc_path(doc_id)
        try:
            raw = path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error getting document '%s' from collection '%s' at '%s': %s",
                         doc_id, self.name, path, e)
            raise DocumentReadError(f"Failed to get document '{doc_id}': {e}") from e
        return self.serializer.load(raw, str(path))

    def delete(self, doc_id: str) -> Dict[str, Any]:
        path = self._doc_path(doc_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return {'success': False, 'id': doc_id, 'not_found': True, 'message': 'Document not found.'}
        except OSError as e:
            logger.error("Error deleting document '%s' from collection '%s' at '%s': %s",
                         doc_id, self.name, path, e)
            raise DocumentDeleteError(f"Failed to delete document '{doc_id}': {e}") from e
        return {'success': True, 'id': doc_id}

    def exists(self, doc_id: str) -> bool:
        return self._doc_path(doc_id).is_file()

    def _document_files(self) -> Iterable[Path]:
        try:
            ensure_dir_exists(self.path)
            entries = list(self.path.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Error reading collection directory '%s' at '%s': %s", self.name, self.path, e)
            raise LocalDBError(f"Failed to read collection '{self.name}': {e}") from e
        return [p for p in entries if p.name.endswith(DOC_SUFFIX) and p.is_file()]

    def list_ids(self) -> List[str]:
        """File stems of all documents. These are sanitized ids, not the raw ids."""
        return [p.name[: -len(DOC_SUFFIX)] for p in self._document_files()]

    def _scan(self, query: Any) -> Iterator[Tuple[str, Any]]:
        try:
            q = coerce_query(query)
        except ValidationError as e:
            raise InvalidInput(f"Invalid query for collection '{self.name}': {e}") from e
        if q is not None and q.is_empty:
            q = None

        for path in self._document_files():
            try:
                doc = self.serializer.load(path.read_text(encoding='utf-8'), str(path))
            except (OSError, UnicodeDecodeError, LocalDBError) as e:
                logger.warning("Skipping unreadable/corrupted file '%s' in collection '%s' due to: %s",
                               path.name, self.name, e)
                continue
            if _is_blank(doc):
                continue
            if document_matches(doc, q):
                yield path.name[: -len(DOC_SUFFIX)], doc

    def all(self, query: Any = None) -> List[Any]:
        """Return every document, or those passing `query`.

        `query` is a `Query` or a mapping with ``match`` and/or ``like``
        blocks (optionally wrapped in ``search``). Files that cannot be read
        or decoded are logged and skipped. Documents decoding to None, False,
        0 or an empty string are treated as absent.
        """
        return [doc for _, doc in self._scan(query)]

    def items(self, query: Any = None) -> List[Dict[str, Any]]:
        """Like `all`, but each entry is ``{'_id': <file stem>, 'data': <document>}``."""
        return [{'_id': doc_id, 'data': doc} for doc_id, doc in self._scan(query)]


def _is_blank(value: Any) -> bool:
    # Empty dicts and lists are real documents; only falsy scalars count as absent.
    if isinstance(value, (dict, list)):
        return False
    return not value
