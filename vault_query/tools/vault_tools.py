"""MCP tools for vault management."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from vault_query.server import mcp
from vault_query.models import ListVaultsInput, SetActiveVaultInput
from vault_query.config import get_vault_configuration
from vault_query.session import (
    set_active_vault as set_active_vault_session,
    get_active_vault,
    get_session_key,
)

logger = logging.getLogger(__name__)


@mcp.tool(
    annotations={
        "title": "List Vaults",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List configured vaults and current session state.

    Returns metadata for all configured vaults including the default vault
    and currently active vault for this session. Primary entry point for
    vault discovery.

    Args:
        input (ListVaultsInput): Validated input (no fields required)
        ctx (Context, optional): FastMCP context for session state

    Returns:
        {
            "default": str,    # System default vault name
            "active": str,     # Currently active vault (or None)
            "vaults": [
                {
                    "name": str,
                    "description": str,
                    "source": "filesystem" | "rest",
                    "path": str, "exists": bool    # filesystem vaults
                    "url": str                     # REST vaults
                }
            ]
        }

    Error Handling:
        - Config file missing → Error with expected config path
        - Invalid config format → Error describing expected YAML structure
    """
    configuration = get_vault_configuration()
    active = None
    if ctx is not None:
        try:
            active = get_active_vault(ctx).name
        except ValueError:
            active = None

    return {
        "default": configuration.default_vault,
        "active": active,
        "vaults": [metadata.as_payload() for metadata in configuration.vaults.values()],
    }


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Set the active vault for this conversation session.

    All subsequent tool calls that omit the vault parameter will use the
    active vault. Session state persists for the conversation lifetime.

    Args:
        input (SetActiveVaultInput): Validated input containing:
            - vault (str): Friendly vault name from vaults.yaml
        ctx (Context): FastMCP context for session state

    Returns:
        {"vault": str, "source": str, "status": "active"}

    Error Handling:
        - ValidationError: Empty vault name or only whitespace
        - Unknown vault → Error listing available vaults
    """
    metadata = set_active_vault_session(ctx, input.vault)
    logger.info("Active vault for session %s set to '%s'", get_session_key(ctx), metadata.name)
    return {
        "vault": metadata.name,
        "source": metadata.source_kind,
        "status": "active",
    }
