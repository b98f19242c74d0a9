"""MCP stdio server wiring.

The mcp library owns framing and the handshake; this module only publishes the
tool registry and turns router envelopes into CallToolResult objects.
"""
from __future__ import annotations
import asyncio
from typing import Any, Dict, List, Optional, Sequence

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from backend import PACKAGE_VERSION, SERVER_NAME
from backend.logging_util import info
from backend.sqlite_backend import SQLiteBackend

from .config import ServerConfig
from .envelope import Envelope
from .tools import ToolRouter


def tool_definitions(router: ToolRouter) -> List[types.Tool]:
    return [
        types.Tool(name=op.name, description=op.description, inputSchema=op.input_schema())
        for op in router.list_operations()
    ]


def to_call_tool_result(envelope: Envelope) -> types.CallToolResult:
    return types.CallToolResult.model_validate(envelope.to_dict())


def build_server(router: ToolRouter) -> Server:
    server: Server = Server(SERVER_NAME, version=PACKAGE_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return tool_definitions(router)

    # Argument shapes are checked by the router so failures come back as
    # InvalidArguments envelopes.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        return to_call_tool_result(await router.call(name, arguments))

    return server


async def serve(config: ServerConfig) -> None:
    backend = await SQLiteBackend.open(config.db_path)
    server = build_server(ToolRouter(backend))
    info("server_starting", name=SERVER_NAME, version=PACKAGE_VERSION, db_path=config.db_path)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await backend.close()
        info("server_stopped", name=SERVER_NAME)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = ServerConfig.from_argv(argv)
    asyncio.run(serve(config))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
