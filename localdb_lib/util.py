import re

from localdb_lib.exceptions import InvalidCollectionName, InvalidIdentifier

MAX_DOC_ID_LENGTH = 200
MAX_COLLECTION_NAME_LENGTH = 100
DOC_SUFFIX = ".json"

_SEPARATORS = re.compile(r'[/\\]')
_RESERVED = re.compile(r'[<>:"|?*]')
_CONTROL = re.compile(r'[\x00-\x1f\x7f]')


def sanitize_doc_id(doc_id) -> str:
    """Map a raw document id to the file name stem used on disk.

    Path separators become underscores and the characters ``< > : " | ? *``
    are dropped. The transform is lossy: ``a/b`` and ``a_b`` share a file.
    Raises InvalidIdentifier for non-strings, blank ids, ids containing
    ``..`` after sanitizing, ids with control characters (NUL included)
    and ids longer than MAX_DOC_ID_LENGTH.
    """
    if not isinstance(doc_id, str) or doc_id.strip() == '':
        raise InvalidIdentifier('Document ID must be a non-empty string.')
    if _CONTROL.search(doc_id):
        raise InvalidIdentifier(f'Document ID cannot contain control characters: {doc_id!r}')
    safe = _RESERVED.sub('', _SEPARATORS.sub('_', doc_id))
    if '..' in safe:
        raise InvalidIdentifier(f"Invalid document ID format. Cannot contain '..': {doc_id}")
    if len(safe) > MAX_DOC_ID_LENGTH:
        raise InvalidIdentifier(f'Document ID is too long: {doc_id}')
    return safe


def doc_filename(doc_id) -> str:
    return sanitize_doc_id(doc_id) + DOC_SUFFIX


def validate_collection_name(name) -> str:
    """Return the trimmed collection name or raise InvalidCollectionName."""
    if not isinstance(name, str) or name.strip() == '':
        raise InvalidCollectionName('Collection name must be a non-empty string.')
    if (name.startswith('.') or _SEPARATORS.search(name) or '..' in name
            or _RESERVED.search(name) or _CONTROL.search(name)):
        raise InvalidCollectionName(
            f"Invalid collection name: '{name}'. Cannot contain path traversal, "
            "reserved characters, or start with a dot."
        )
    if len(name) > MAX_COLLECTION_NAME_LENGTH:
        raise InvalidCollectionName(f'Collection name is too long: {name}')
    return name.strip()
