"""FastMCP server initialization and tool registration."""

import logging
import os

from mcp.server.fastmcp import FastMCP

from vault_query.constants import LOG_LEVEL, LOG_LEVEL_ENV_VAR

# Initialize logger
logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV_VAR, LOG_LEVEL).upper())
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("vault_query")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server():
    """Start the MCP server with stdio transport."""
    logger.info("Starting Vault Query MCP Server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
