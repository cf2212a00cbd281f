"""LocalDB: a file-backed JSON document store."""

from .database import LocalDB
from .exceptions import (
    BackupFailed,
    CorruptData,
    DocumentDeleteError,
    DocumentExists,
    DocumentNotFound,
    DocumentReadError,
    InvalidCollectionName,
    InvalidIdentifier,
    InvalidInput,
    LocalDBError,
    WriteFailed,
)
from .query import Query
from .storage import Collection

__all__ = [
    "BackupFailed",
    "Collection",
    "CorruptData",
    "DocumentDeleteError",
    "DocumentExists",
    "DocumentNotFound",
    "DocumentReadError",
    "InvalidCollectionName",
    "InvalidIdentifier",
    "InvalidInput",
    "LocalDB",
    "LocalDBError",
    "Query",
    "WriteFailed",
]
