"""Startup configuration.

The only input is an optional database path on the command line; LOG_LEVEL
(read by backend.logging_util) only affects logging.
"""
from __future__ import annotations
import argparse, os
from dataclasses import dataclass
from typing import Optional, Sequence

from backend import PACKAGE_VERSION, SERVER_NAME

DEFAULT_DB_FILENAME = "mydatabase.db"


def resolve_db_path(path: str, cwd: Optional[str] = None) -> str:
    """Absolute path for ``path``, relative paths taken against ``cwd`` (default: process cwd)."""
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(cwd or os.getcwd(), path))


@dataclass(frozen=True)
class ServerConfig:
    db_path: str

    @classmethod
    def from_argv(cls, argv: Optional[Sequence[str]] = None, cwd: Optional[str] = None) -> "ServerConfig":
        ap = argparse.ArgumentParser(
            prog=SERVER_NAME,
            description=f"Expose a SQLite database as MCP tools over stdio (v{PACKAGE_VERSION})",
        )
        ap.add_argument("db_path", nargs="?", default=DEFAULT_DB_FILENAME,
                        help=f"SQLite database file (default: {DEFAULT_DB_FILENAME})")
        args = ap.parse_args(argv)
        return cls(db_path=resolve_db_path(args.db_path, cwd))
