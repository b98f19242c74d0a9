"""Transport-agnostic tool responses.

Every tool call ends in an Envelope: one text block of JSON (or a plain
message) on success, one text block of "<prefix><message>" with is_error set
on failure. failure_envelope() is the single place exceptions become
responses.
"""
from __future__ import annotations
import base64, json, math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from backend.errors import (
    ConnectionOpenFailure, EngineError, InvalidArguments, UnknownOperation,
)
from backend.logging_util import error, warn


@dataclass(frozen=True)
class TextBlock:
    text: str
    type: str = "text"


@dataclass(frozen=True)
class Envelope:
    content: Tuple[TextBlock, ...]
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "Envelope":
        return cls((TextBlock(to_text(payload)),))

    @classmethod
    def failure(cls, message: str) -> "Envelope":
        return cls((TextBlock(message),), is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [{"type": block.type, "text": block.text} for block in self.content],
            "isError": self.is_error,
        }


def _json_default(value: Any) -> Any:
    # BLOB columns come back as bytes
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _finite(value: Any) -> Any:
    # REAL columns can hold inf/nan, which have no JSON spelling: send null
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


def to_text(payload: Any) -> str:
    """Plain strings pass through; everything else becomes 2-space indented JSON."""
    if isinstance(payload, str):
        return payload
    return json.dumps(_finite(payload), indent=2, ensure_ascii=False, allow_nan=False, default=_json_default)


def failure_envelope(tool: str, prefix: str, exc: BaseException) -> Envelope:
    """Map any exception raised while serving ``tool`` onto an error envelope."""
    if isinstance(exc, UnknownOperation):
        message = str(exc)
    elif isinstance(exc, (InvalidArguments, EngineError, ConnectionOpenFailure)):
        message = prefix + str(exc)
    else:
        # Outside the taxonomy (a ToolError subclass nobody mapped, or a bug):
        # reported to the caller as an engine failure.
        error("tool_unclassified_error", tool=tool, error_type=type(exc).__name__, error=str(exc))
        exc = EngineError(str(exc) or type(exc).__name__)
        message = prefix + str(exc)
    warn("tool_failed", tool=tool, kind=exc.kind, error=message)
    return Envelope.failure(message)
