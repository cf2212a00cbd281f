"""Database root management.

`LocalDB` owns the root directory and hands out `Collection` objects for its
sub-directories. It creates, lists and deletes collection directories; all
document access goes through the returned collections.
"""
from __future__ import annotations
import atexit
import logging
import shutil
from pathlib import Path
from typing import Dict, Optional, Set

from localdb_lib.exceptions import InvalidCollectionName, LocalDBError
from localdb_lib.storage.collection import Collection
from localdb_lib.storage.recovery import BACKUP_DIR, ensure_dir_exists
from localdb_lib.storage.serializer import Serializer
from localdb_lib.util import validate_collection_name

logger = logging.getLogger(__name__)


class LocalDB:
    def __init__(self, location: str | Path, serializer: Optional[Serializer] = None) -> None:
        if not location or not str(location).strip():
            raise LocalDBError('Database location must be specified as a non-empty path.')
        self.path = Path(location).resolve()
        self.serializer = serializer
        self._collections: Dict[str, Collection] = {}
        self._exit_hook_installed = False
        try:
            ensure_dir_exists(self.path)
        except OSError as e:
            raise LocalDBError(f"Failed to initialize database directory at '{self.path}': {e}") from e

    def __repr__(self) -> str:
        return f"LocalDB(path={str(self.path)!r})"

    def _collection(self, name: str) -> Collection:
        col = self._collections.get(name)
        if col is None:
            col = Collection(self.path, name, serializer=self.serializer)
            self._collections[name] = col
        return col

    def new_col(self, name: str) -> dict:
        valid = validate_collection_name(name)
        col_path = self.path / valid
        try:
            ensure_dir_exists(col_path)
        except OSError as e:
            logger.error("Error ensuring collection '%s' at '%s': %s", valid, col_path, e)
            raise LocalDBError(f"Failed to ensure collection '{valid}': {e}") from e
        self._collection(valid)
        return {'success': True, 'name': valid, 'path': str(col_path), 'message': f"Collection '{valid}' ensured."}

    def get_col(self, name: str = 'default') -> Collection:
        return self._collection(validate_collection_name(name))

    def del_col(self, name: str) -> dict:
        """Delete a collection directory together with its backup files."""
        valid = validate_collection_name(name)
        col_path = self.path / valid
        if not col_path.exists():
            return {'success': False, 'name': valid, 'message': f"Collection '{valid}' not found."}
        try:
            shutil.rmtree(col_path)
        except FileNotFoundError:
            return {'success': False, 'name': valid, 'message': f"Collection '{valid}' not found."}
        except OSError as e:
            logger.error("Error deleting collection '%s' at '%s': %s", valid, col_path, e)
            raise LocalDBError(f"Failed to delete collection '{valid}': {e}") from e

        backup_path = self.path / BACKUP_DIR / valid
        if backup_path.exists():
            try:
                shutil.rmtree(backup_path)
            except OSError as e:
                logger.warning("Could not delete backup directory for collection '%s' at '%s': %s",
                               valid, backup_path, e)
        self._collections.pop(valid, None)
        return {'success': True, 'name': valid, 'message': f"Collection '{valid}' deleted."}

    def all_col(self) -> Set[str]:
        try:
            entries = list(self.path.iterdir())
        except FileNotFoundError:
            return set()
        except OSError as e:
            logger.error("Error listing all collections from '%s': %s", self.path, e)
            raise LocalDBError(f"Failed to list collections: {e}") from e
        names = set()
        for entry in entries:
            if not entry.is_dir() or entry.name == BACKUP_DIR:
                continue
            try:
                names.add(validate_collection_name(entry.name))
            except InvalidCollectionName:
                logger.debug("Skipping directory '%s': not a valid collection name", entry.name)
        return names

    def install_exit_hook(self) -> None:
        """Log the database location when the interpreter exits.

        Nothing needs flushing at exit since every write completes before
        `Collection.set` returns; the hook is purely informational.
        """
        if self._exit_hook_installed:
            return
        atexit.register(self._on_exit)
        self._exit_hook_installed = True

    def _on_exit(self) -> None:
        logger.info("LocalDB: process exiting. Database location: %s", self.path)
