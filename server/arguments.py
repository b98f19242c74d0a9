"""Argument shapes, one pydantic model per tool.

The set is closed: every registered operation names exactly one of these
models, and its JSON schema is what clients see as the tool's inputSchema.
Unknown keys are ignored.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

BindValue = Union[StrictStr, StrictInt, StrictFloat, StrictBool, None]


class DbInfoArgs(BaseModel):
    pass


class QueryArgs(BaseModel):
    sql: StrictStr = Field(description="SQL statement; use ? placeholders for values")
    values: Optional[List[BindValue]] = Field(default=None, description="Values bound to the ? placeholders, in order")


class ListTablesArgs(BaseModel):
    pass


class GetTableSchemaArgs(BaseModel):
    tableName: StrictStr = Field(description="Table to describe")


class CreateRecordArgs(BaseModel):
    table: StrictStr
    data: Dict[str, Any] = Field(description="Column name to value for the new row")


class ReadRecordsArgs(BaseModel):
    table: StrictStr
    conditions: Optional[Dict[str, Any]] = Field(default=None, description="Column equality filters, ANDed")
    # lax int: 2.0 is accepted, 2.5 and "ten" are not
    limit: Optional[int] = None
    offset: Optional[int] = Field(default=None, description="Only applied together with limit")


class UpdateRecordsArgs(BaseModel):
    table: StrictStr
    data: Dict[str, Any] = Field(description="Column name to new value")
    conditions: Dict[str, Any] = Field(description="Column equality filters, ANDed")


class DeleteRecordsArgs(BaseModel):
    table: StrictStr
    conditions: Dict[str, Any] = Field(description="Column equality filters, ANDed")
