"""Lightweight structured logging helper.

Emits JSON lines to stderr; stdout is reserved for the MCP stdio transport.
The threshold comes from LOG_LEVEL and is re-read on every call so operators
(and tests) can change it without restarting.
"""
from __future__ import annotations
import os, sys, json, time, threading

from . import SERVER_NAME

_lock = threading.Lock()
LEVEL_ORDER = ["DEBUG","INFO","WARN","ERROR"]

def _threshold() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()

def _should(level: str) -> bool:
    try:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(_threshold())
    except ValueError:
        return True

def log(level: str, event: str, **fields):
    level = level.upper()
    if not _should(level):
        return
    record = {
        "ts": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
        "level": level,
        "logger": SERVER_NAME,
        "event": event,
    }
    record.update(fields)
    line = json.dumps(record, separators=(',',':'), default=str)
    with _lock:
        sys.stderr.write(line + "\n")
        sys.stderr.flush()

def debug(event: str, **fields): log("DEBUG", event, **fields)
def info(event: str, **fields): log("INFO", event, **fields)
def warn(event: str, **fields): log("WARN", event, **fields)
def error(event: str, **fields): log("ERROR", event, **fields)
