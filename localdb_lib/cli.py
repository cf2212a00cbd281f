"""Command line front end for LocalDB.

Provides argument parsing and a `main` entrypoint that maps subcommands onto
`LocalDB` and `Collection` calls. Results are printed as JSON.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

from localdb_lib.config import load_config
from localdb_lib.database import LocalDB
from localdb_lib.exceptions import InvalidInput, LocalDBError
from localdb_lib.logging_config import configure_logging


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="localdb", description="File-backed JSON document store")
    p.add_argument("--config", type=Path, default=None, help="Path to YAML config (default data/config/localdb.yml)")
    p.add_argument("--location", default=None, help="Database root directory (overrides config)")
    p.add_argument("--log-level", default=None, help="Log level (overrides config)")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("collections", help="List collections")
    for name, help_text in (("create", "Create a collection"), ("drop", "Delete a collection and its backups")):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("collection")

    for name, help_text in (("get", "Print a document"), ("delete", "Delete a document")):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("collection")
        sp.add_argument("doc_id")

    sp = sub.add_parser("set", help="Write a document from a JSON argument")
    sp.add_argument("collection")
    sp.add_argument("doc_id")
    sp.add_argument("data", help="Document as JSON text")

    sp = sub.add_parser("insert", help="Create a new object document; refuses to overwrite")
    sp.add_argument("collection")
    sp.add_argument("data", help="Document as JSON object text")
    sp.add_argument("--id", dest="doc_id", default=None, help="Document id (random hex id when omitted)")

    sp = sub.add_parser("update", help="Merge top-level fields into an existing document")
    sp.add_argument("collection")
    sp.add_argument("doc_id")
    sp.add_argument("data", help="Fields as JSON object text")

    sp = sub.add_parser("find", help="List documents, optionally filtered")
    sp.add_argument("collection")
    sp.add_argument("--match", default=None, help="JSON object of fields that must match exactly")
    sp.add_argument("--like", default=None, help="JSON object of fields that must contain the given text")
    return p


def _json_arg(text: Optional[str], what: str) -> Any:
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"{what} is not valid JSON: {e}") from e


def run(args: argparse.Namespace, db: LocalDB) -> Any:
    cmd = args.command
    if cmd == "collections":
        return sorted(db.all_col())
    if cmd == "create":
        return db.new_col(args.collection)
    if cmd == "drop":
        return db.del_col(args.collection)
    col = db.get_col(args.collection)
    if cmd == "get":
        return col.get(args.doc_id)
    if cmd == "delete":
        return col.delete(args.doc_id)
    if cmd == "set":
        return col.set(args.doc_id, _json_arg(args.data, "data"))
    if cmd == "insert":
        return col.insert(_json_arg(args.data, "data"), args.doc_id)
    if cmd == "update":
        return col.update(args.doc_id, _json_arg(args.data, "data"))
    if cmd == "find":
        query = {"match": _json_arg(args.match, "--match"), "like": _json_arg(args.like, "--like")}
        return col.all(query)
    raise InvalidInput(f"Unknown command: {cmd}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    logger = configure_logging(args.config, args.log_level)
    try:
        cfg = load_config(args.config)
        db = LocalDB(args.location or cfg.location)
        if cfg.exit_hook:
            db.install_exit_hook()
        result = run(args, db)
    except LocalDBError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0
