"""Exception hierarchy for LocalDB."""


class LocalDBError(Exception):
    """Base exception for all LocalDB errors."""


class InvalidIdentifier(LocalDBError):
    """Document id is empty, too long or would escape the collection directory."""


class InvalidCollectionName(LocalDBError):
    """Collection name cannot be mapped to a directory under the database root."""


class InvalidInput(LocalDBError):
    """Payload passed to `set` cannot be stored (missing or not JSON serializable)."""


class CorruptData(LocalDBError):
    """Stored document could not be decoded, even after a repair attempt.

    `original_error` keeps the first parse error; the repair error is only logged.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class WriteFailed(LocalDBError):
    """Primary write failed; the payload was preserved in a backup file."""

    def __init__(self, message: str, backup_path=None) -> None:
        super().__init__(message)
        self.backup_path = backup_path


class BackupFailed(LocalDBError):
    """Writing a backup copy failed. When raised from `set` the data is lost."""


class DocumentReadError(LocalDBError):
    """Reading a document failed for a reason other than the file being absent."""


class DocumentDeleteError(LocalDBError):
    """Removing a document failed for a reason other than the file being absent."""


class DocumentExists(LocalDBError):
    """`insert` was given an id that is already stored."""


class DocumentNotFound(LocalDBError):
    """`update` was given an id with no stored document."""
