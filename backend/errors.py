"""Failure taxonomy shared by the data access layer and the tool router.

Every failure a tool call can produce is one of these kinds; the router maps
each of them onto an error envelope.
"""
from __future__ import annotations


class ToolError(Exception):
    """Base class; ``kind`` is the name reported in logs."""
    kind = "ToolError"


class UnknownOperation(ToolError):
    kind = "UnknownOperation"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArguments(ToolError):
    kind = "InvalidArguments"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Invalid arguments for {operation}: {detail}")


class EngineError(ToolError):
    """SQLite rejected or failed a statement (syntax, constraint, missing table...)."""
    kind = "EngineError"


class ConnectionOpenFailure(ToolError):
    """The database file could not be opened at startup."""
    kind = "ConnectionOpenFailure"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unable to open {path}: {reason}")
