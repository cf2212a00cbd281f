"""Failure recovery for document files.

Two independent helpers live here: `decode_document` parses stored text and
falls back to `json_repair` when the text is not valid JSON, and
`backup_document` writes a payload that could not be saved to a timestamped
side file under ``<root>/.backup/<collection>/``.
"""
from __future__ import annotations
import json
import logging
import time
from pathlib import Path
from typing import Any

from json_repair import repair_json

from localdb_lib.exceptions import BackupFailed, CorruptData
from localdb_lib.util import sanitize_doc_id

logger = logging.getLogger(__name__)

BACKUP_DIR = ".backup"
BACKUP_SUFFIX = ".json.bak"


def ensure_dir_exists(dir_path: str | Path) -> Path:
    path = Path(dir_path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as e:
        raise NotADirectoryError(f"Path exists but is not a directory: {path}") from e
    return path


def decode_document(text: str, label: str = "unknown file") -> Any:
    """Parse `text` as JSON, repairing it first if plain parsing fails.

    A warning is logged whenever repair is attempted. If the repair fails,
    salvages nothing (an empty string, list or object) or still does not
    parse, CorruptData is raised chained to the original parse error.
    Nesting too deep to parse counts as a parse error.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as parse_error:
        logger.warning("Corrupted JSON content detected in %s. Attempting repair.", label)
        try:
            value = json.loads(repair_json(text))
            if value in ("", [], {}):
                raise ValueError("repair produced no content")
        except Exception as repair_error:
            logger.error(
                "Failed to repair JSON content in %s. Repair attempt error: %s. Original parse error: %s",
                label, repair_error, parse_error,
            )
            raise CorruptData(f"Corrupted JSON in {label}: {parse_error}", original_error=parse_error) from parse_error
        logger.warning("JSON content in %s successfully repaired.", label)
        return value


def backup_path_for(root: str | Path, collection_name: str, doc_id: str, timestamp_ms: int) -> Path:
    name = f"{sanitize_doc_id(doc_id)}_{timestamp_ms}{BACKUP_SUFFIX}"
    return Path(root) / BACKUP_DIR / collection_name / name


def backup_document(root: str | Path, collection_name: str, doc_id: str, text: str) -> Path:
    """Write `text` to a backup file and return its path.

    Raises BackupFailed if the directory or the file cannot be written.
    """
    try:
        path = backup_path_for(root, collection_name, doc_id, int(time.time() * 1000))
        ensure_dir_exists(path.parent)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(
            "CRITICAL: Failed to backup document '%s' from collection '%s' after a save error. "
            "Data might be lost. Backup error: %s",
            doc_id, collection_name, e,
        )
        raise BackupFailed(f"Failed to backup document '{doc_id}': {e}") from e
    logger.warning(
        "Backed up document '%s' from collection '%s' to '%s' due to original save failure.",
        doc_id, collection_name, path,
    )
    return path
