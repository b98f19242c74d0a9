import sqlite3
from contextlib import closing
from pathlib import Path

import pytest
import pytest_asyncio

from backend.sqlite_backend import SQLiteBackend
from server.tools import ToolRouter

ITEMS_DDL = "CREATE TABLE t (id INTEGER PRIMARY KEY, a INTEGER, b TEXT)"


@pytest.fixture()
def empty_db(tmp_path):
    db_path = tmp_path / 'empty.db'
    sqlite3.connect(db_path).close()
    return str(db_path)


@pytest.fixture()
def temp_db(tmp_path):
    """Database with table t(id, a, b) holding three rows (a = 1, 2, 3)."""
    db_path = tmp_path / 'test.db'
    with closing(sqlite3.connect(db_path)) as conn:
        conn.execute(ITEMS_DDL)
        conn.executemany("INSERT INTO t (a, b) VALUES (?, ?)", [(1, 'x'), (2, 'y'), (3, 'z')])
        conn.commit()
    return str(db_path)


@pytest_asyncio.fixture()
async def backend(temp_db):
    be = await SQLiteBackend.open(temp_db)
    yield be
    await be.close()


@pytest_asyncio.fixture()
async def router(backend):
    return ToolRouter(backend)

