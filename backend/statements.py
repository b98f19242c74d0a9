"""SQL statement builders for the record helpers.

This is the only place caller-supplied identifiers (table and column names)
are written into SQL text. They are interpolated verbatim and never checked
against the live schema; a malformed name surfaces later as an engine error.
Values are always bound as positional ``?`` parameters, in the same order
their placeholders appear in the text.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

USER_TABLE_FILTER = "type='table' AND name NOT LIKE 'sqlite_%'"

@dataclass(frozen=True)
class Statement:
    sql: str
    params: Tuple[Any, ...] = ()

LIST_TABLES = Statement(f"SELECT name FROM sqlite_master WHERE {USER_TABLE_FILTER}")
COUNT_TABLES = Statement(f"SELECT count(*) AS count FROM sqlite_master WHERE {USER_TABLE_FILTER}")


def _equals(columns, joiner: str) -> str:
    return joiner.join(f"{column} = ?" for column in columns)


def insert(table: str, data: Mapping[str, Any]) -> Statement:
    columns = list(data.keys())
    placeholders = ", ".join("?" for _ in columns)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    return Statement(sql, tuple(data.values()))


def select(table: str, conditions: Optional[Mapping[str, Any]] = None,
           limit: Optional[int] = None, offset: Optional[int] = None) -> Statement:
    """SELECT * with optional equality filter and paging.

    LIMIT/OFFSET are interpolated, not bound; OFFSET is only emitted together
    with a LIMIT.
    """
    sql = f"SELECT * FROM {table}"
    params: Tuple[Any, ...] = ()
    if conditions:
        sql += f" WHERE {_equals(conditions.keys(), ' AND ')}"
        params = tuple(conditions.values())
    if limit is not None:
        sql += f" LIMIT {limit}"
        if offset is not None:
            sql += f" OFFSET {offset}"
    return Statement(sql, params)


def update(table: str, data: Mapping[str, Any], conditions: Mapping[str, Any]) -> Statement:
    # SET placeholders precede WHERE placeholders, so data values go first.
    sql = f"UPDATE {table} SET {_equals(data.keys(), ', ')} WHERE {_equals(conditions.keys(), ' AND ')}"
    return Statement(sql, tuple(data.values()) + tuple(conditions.values()))


def delete(table: str, conditions: Mapping[str, Any]) -> Statement:
    sql = f"DELETE FROM {table} WHERE {_equals(conditions.keys(), ' AND ')}"
    return Statement(sql, tuple(conditions.values()))


def table_info(table: str) -> Statement:
    return Statement(f"PRAGMA table_info({table})")
