"""SQLite data access layer over a single asynchronous connection.

Responsibilities:
  - Own the one aiosqlite connection for the process lifetime
  - Run read statements (rows as dicts) and mutating statements (rowid + count)
  - Introspection: user tables, table schema, table count, file info
  - Translate every engine failure into EngineError

Opening never raises: a failure is logged and remembered, and each later call
reports it as an EngineError so the server keeps answering.
"""
from __future__ import annotations
import os, sqlite3, time
from typing import Any, Optional, Dict, List, Sequence

import aiosqlite

from . import statements
from .base_backend import ConnectionLike, RunResult
from .errors import ConnectionOpenFailure, EngineError
from .logging_util import info, error, debug, warn

# aiosqlite re-raises sqlite3 errors; binding an unsupported or out-of-range
# value raises ValueError/OverflowError, a stopped connection ValueError.
ENGINE_ERRORS = (sqlite3.Error, ValueError, OverflowError)


class SQLiteBackend:
    """Data access layer bound to one database file.

    The connection is injected; use ``await SQLiteBackend.open(path)`` to open
    the real one.
    """
    def __init__(self, path: str, conn: Optional[ConnectionLike] = None, open_error: Optional[str] = None):
        self.path = path
        self._conn = conn
        self._open_error = open_error

    @classmethod
    async def open(cls, path: str) -> "SQLiteBackend":
        try:
            conn = await cls._connect(path)
        except ConnectionOpenFailure as e:
            error("db_open_failed", path=path, error=e.reason)
            return cls(path, open_error=e.reason)
        info("db_opened", path=path)
        return cls(path, conn=conn)

    @staticmethod
    async def _connect(path: str) -> aiosqlite.Connection:
        if os.path.isdir(path):
            raise ConnectionOpenFailure(path, "path points to a directory, expected file")
        try:
            # isolation_level=None: autocommit, each statement persists on its own
            conn = await aiosqlite.connect(path, isolation_level=None)
        except sqlite3.Error as e:
            raise ConnectionOpenFailure(path, str(e)) from e
        conn.row_factory = aiosqlite.Row
        return conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # --- Public API -----------------------------------------------------------------
    async def execute_query(self, sql: str, values: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Run ``sql`` with ``values`` bound positionally; return all rows as dicts."""
        conn = self._require_connection()
        try:
            async with conn.execute(sql, tuple(values or ())) as cursor:
                rows = await cursor.fetchall()
        except ENGINE_ERRORS as e:
            debug("statement_failed", sql=sql, error=str(e))
            raise EngineError(str(e)) from e
        return [dict(row) for row in rows]

    async def execute_run(self, sql: str, values: Optional[Sequence[Any]] = None) -> RunResult:
        """Run a mutating statement (INSERT/UPDATE/DELETE/DDL).

        rows_affected is clamped to 0 for statements SQLite reports as -1 (DDL).
        """
        conn = self._require_connection()
        try:
            async with conn.execute(sql, tuple(values or ())) as cursor:
                result = RunResult(last_insert_id=cursor.lastrowid, rows_affected=max(cursor.rowcount, 0))
        except ENGINE_ERRORS as e:
            debug("statement_failed", sql=sql, error=str(e))
            raise EngineError(str(e)) from e
        return result

    async def list_tables(self) -> List[Dict[str, Any]]:
        return await self.execute_query(statements.LIST_TABLES.sql)

    async def count_tables(self) -> int:
        rows = await self.execute_query(statements.COUNT_TABLES.sql)
        return rows[0]["count"]

    async def get_table_schema(self, table_name: str) -> List[Dict[str, Any]]:
        """Column descriptors from PRAGMA table_info.

        ``table_name`` is interpolated, not bound. SQLite answers an unknown
        table with no rows, so this returns [] rather than failing.
        """
        stmt = statements.table_info(table_name)
        return await self.execute_query(stmt.sql, stmt.params)

    def file_info(self) -> Dict[str, Any]:
        """Path, existence, size and mtime of the database file."""
        exists = os.path.exists(self.path)
        size = 0
        last_modified = None
        if exists:
            st = os.stat(self.path)
            size = st.st_size
            last_modified = time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(st.st_mtime))
        return {"dbPath": self.path, "exists": exists, "size": size, "lastModified": last_modified}

    async def describe(self) -> Dict[str, Any]:
        """file_info plus a live user-table count (needs a working connection)."""
        out = self.file_info()
        out["tableCount"] = await self.count_tables()
        return out

    async def close(self) -> None:
        """Close the connection (process shutdown / test teardown only)."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            await conn.close()
        except ENGINE_ERRORS as e:
            warn("db_close_failed", path=self.path, error=str(e))
            return
        self._open_error = "connection closed"
        info("db_closed", path=self.path)

    # --- Internal -------------------------------------------------------------------
    def _require_connection(self) -> ConnectionLike:
        if self._conn is None:
            raise EngineError(f"database is not open: {self._open_error or 'no connection'}")
        return self._conn


async def _describe_cli(path: str) -> Dict[str, Any]:
    backend = await SQLiteBackend.open(path)
    try:
        return {"db_info": await backend.describe(), "tables": await backend.list_tables()}
    except EngineError as e:
        return {"db_info": backend.file_info(), "error": str(e)}
    finally:
        await backend.close()


def cli_describe():  # pragma: no cover - thin CLI wrapper
    """CLI helper: print file info, table count and user tables as JSON."""
    import argparse, asyncio, json
    ap = argparse.ArgumentParser(description='Describe a SQLite database the way db_info/list_tables see it')
    ap.add_argument('db', help='Path to SQLite database')
    args = ap.parse_args()
    out = asyncio.run(_describe_cli(os.path.abspath(args.db)))
    print(json.dumps(out, indent=2))

if __name__ == '__main__':  # pragma: no cover
    cli_describe()
