"""MCP server exposing an editing session."""

from sitestage.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
