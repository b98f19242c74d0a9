"""MCP-facing half of the server: tool registry, argument shapes, envelopes, transport."""
