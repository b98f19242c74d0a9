"""Backend abstraction layer.

Structural types for what the tool router needs from a data access layer and
what the data access layer needs from an engine connection. The production
pair is SQLiteBackend over an aiosqlite connection; tests may plug in an
in-memory connection or a hand-written fake.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Sequence, Any, Optional, Dict, List

@dataclass(frozen=True)
class RunResult:
    last_insert_id: Optional[int]
    rows_affected: int

class ConnectionLike(Protocol):  # pragma: no cover - structural typing helper
    def execute(self, sql: str, parameters: Sequence[Any] = ...): ...
    async def close(self) -> None: ...

class Backend(Protocol):  # pragma: no cover - structural typing helper
    path: str

    async def execute_query(self, sql: str, values: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Run a statement and return its rows as dicts."""
        ...

    async def execute_run(self, sql: str, values: Optional[Sequence[Any]] = None) -> RunResult:
        """Run a mutating statement and report last rowid + rows touched."""
        ...

    async def list_tables(self) -> List[Dict[str, Any]]: ...
    async def count_tables(self) -> int: ...
    async def get_table_schema(self, table_name: str) -> List[Dict[str, Any]]: ...
    def file_info(self) -> Dict[str, Any]: ...
    async def describe(self) -> Dict[str, Any]: ...
