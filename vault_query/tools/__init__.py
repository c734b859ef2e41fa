"""MCP tool definitions for vault query operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from vault_query.tools import vault_tools
from vault_query.tools import search_tools
from vault_query.tools import note_tools
from vault_query.tools import content_tools

__all__ = [
    "vault_tools",
    "search_tools",
    "note_tools",
    "content_tools",
]
