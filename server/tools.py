"""Tool router: the fixed registry of operations exposed over MCP.

Each operation pairs a pydantic argument model with an async handler that
talks to the data access layer. ToolRouter.call() is the boundary: it never
raises, every outcome is an Envelope.

Record helpers build their SQL through backend.statements, which interpolates
table/column names verbatim (values are always bound).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError

from backend import statements
from backend.base_backend import Backend
from backend.errors import InvalidArguments, UnknownOperation
from backend.logging_util import debug

from .arguments import (
    CreateRecordArgs, DbInfoArgs, DeleteRecordsArgs, GetTableSchemaArgs,
    ListTablesArgs, QueryArgs, ReadRecordsArgs, UpdateRecordsArgs,
)
from .envelope import Envelope, failure_envelope

Handler = Callable[[Backend, Any], Awaitable[Any]]


def _validation_detail(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler
    error_prefix: str

    def input_schema(self) -> Dict[str, Any]:
        return self.arguments.model_json_schema()

    def parse(self, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArguments(self.name, "arguments must be an object")
        try:
            return self.arguments.model_validate(dict(arguments))
        except ValidationError as e:
            raise InvalidArguments(self.name, _validation_detail(e)) from e


# --- Handlers -----------------------------------------------------------------------

async def _db_info(backend: Backend, args: DbInfoArgs):
    return await backend.describe()


async def _query(backend: Backend, args: QueryArgs):
    return await backend.execute_query(args.sql, args.values)


async def _list_tables(backend: Backend, args: ListTablesArgs):
    return await backend.list_tables()


async def _get_table_schema(backend: Backend, args: GetTableSchemaArgs):
    return await backend.get_table_schema(args.tableName)


async def _create_record(backend: Backend, args: CreateRecordArgs):
    stmt = statements.insert(args.table, args.data)
    result = await backend.execute_run(stmt.sql, stmt.params)
    return {"message": "Record created successfully", "insertedId": result.last_insert_id}


async def _read_records(backend: Backend, args: ReadRecordsArgs):
    stmt = statements.select(args.table, args.conditions, args.limit, args.offset)
    return await backend.execute_query(stmt.sql, stmt.params)


async def _update_records(backend: Backend, args: UpdateRecordsArgs):
    stmt = statements.update(args.table, args.data, args.conditions)
    result = await backend.execute_run(stmt.sql, stmt.params)
    return {"message": "Records updated successfully", "rowsAffected": result.rows_affected}


async def _delete_records(backend: Backend, args: DeleteRecordsArgs):
    stmt = statements.delete(args.table, args.conditions)
    result = await backend.execute_run(stmt.sql, stmt.params)
    return {"message": "Records deleted successfully", "rowsAffected": result.rows_affected}


OPERATIONS: Sequence[Operation] = (
    Operation(
        "db_info",
        "Get information about the SQLite database including path, existence, size, and table count",
        DbInfoArgs, _db_info, "Error getting database info: ",
    ),
    Operation(
        "query",
        "Execute a raw SQL query against the database with optional parameter values",
        QueryArgs, _query, "Error: ",
    ),
    Operation(
        "list_tables",
        "List all user tables in the SQLite database (excludes system tables)",
        ListTablesArgs, _list_tables, "Error listing tables: ",
    ),
    Operation(
        "get_table_schema",
        "Get the schema information for a specific table including column details",
        GetTableSchemaArgs, _get_table_schema, "Error getting schema: ",
    ),
    Operation(
        "create_record",
        "Insert a new record into a table with specified data",
        CreateRecordArgs, _create_record, "Error creating record: ",
    ),
    Operation(
        "read_records",
        "Read records from a table with optional conditions, limit, and offset",
        ReadRecordsArgs, _read_records, "Error reading records: ",
    ),
    Operation(
        "update_records",
        "Update records in a table based on specified conditions",
        UpdateRecordsArgs, _update_records, "Error updating records: ",
    ),
    Operation(
        "delete_records",
        "Delete records from a table based on specified conditions",
        DeleteRecordsArgs, _delete_records, "Error deleting records: ",
    ),
)


class ToolRouter:
    """Dispatches tool calls by name against one backend."""

    def __init__(self, backend: Backend, operations: Sequence[Operation] = OPERATIONS):
        self.backend = backend
        self.operations: Dict[str, Operation] = {op.name: op for op in operations}

    def list_operations(self) -> List[Operation]:
        return list(self.operations.values())

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Envelope:
        op = self.operations.get(name)
        prefix = op.error_prefix if op else ""
        debug("tool_called", tool=name)
        try:
            if op is None:
                raise UnknownOperation(name)
            args = op.parse(arguments)
            payload = await op.handler(self.backend, args)
            return Envelope.success(payload)
        except Exception as exc:
            return failure_envelope(name, prefix, exc)
