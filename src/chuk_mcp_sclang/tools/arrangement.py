"""
Arrangement tools - MCP tools for arrangement lifecycle.

Tools for creating, managing, and querying arrangements.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_sclang.arrangement import ArrangementManager
from chuk_mcp_sclang.constants import ErrorMessages, SuccessMessages

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _not_found(name: str) -> str:
    return json.dumps(
        {"status": "error", "message": ErrorMessages.ARRANGEMENT_NOT_FOUND.format(name=name)}
    )


def register_arrangement_tools(
    mcp: ChukMCPServer,
    manager: ArrangementManager,
) -> dict[str, Any]:
    """
    Register arrangement lifecycle tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The arrangement manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_create_arrangement(name: str) -> str:
        """
        Create a new, empty arrangement.

        An arrangement is a pool of named clips plus tracks that play
        those clips in order. All tracks play together.

        Args:
            name: Unique name for the arrangement

        Returns:
            JSON string with arrangement details

        Example:
            sclang_create_arrangement(name="two-five-one")
        """
        try:
            arrangement = await manager.create(name)
            return json.dumps(
                {
                    "status": "success",
                    "arrangement": {
                        "name": arrangement.name,
                        "clips": len(arrangement.clips),
                        "tracks": len(arrangement.tracks),
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to create arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_create_arrangement"] = sclang_create_arrangement

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_get_arrangement(name: str) -> str:
        """
        Get arrangement details.

        Retrieves all clips and tracks of an arrangement in its
        canonical YAML shape.

        Args:
            name: Arrangement name

        Returns:
            JSON string with arrangement details

        Example:
            sclang_get_arrangement(name="two-five-one")
        """
        try:
            arrangement = await manager.get(name)
            if arrangement is None:
                return _not_found(name)

            return json.dumps({"status": "success", "arrangement": arrangement.to_yaml_dict()})
        except Exception as e:
            logger.exception("Failed to get arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_get_arrangement"] = sclang_get_arrangement

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_list_arrangements() -> str:
        """
        List all saved arrangements.

        Returns:
            JSON string with list of arrangement summaries

        Example:
            sclang_list_arrangements()
        """
        try:
            arrangements = await manager.list_arrangements()

            return json.dumps(
                {
                    "status": "success",
                    "arrangements": [
                        {
                            "name": arr.name,
                            "clips": arr.clip_count,
                            "tracks": arr.track_count,
                            "modified": arr.modified.isoformat(),
                        }
                        for arr in arrangements
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list arrangements")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_list_arrangements"] = sclang_list_arrangements

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_save_arrangement(name: str) -> str:
        """
        Save an arrangement to disk as YAML.

        Args:
            name: Arrangement name

        Returns:
            JSON string with save result

        Example:
            sclang_save_arrangement(name="two-five-one")
        """
        try:
            arrangement = await manager.get(name)
            if arrangement is None:
                return _not_found(name)

            path = await manager.save(arrangement)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.ARRANGEMENT_SAVED.format(path=path),
                    "path": str(path),
                }
            )
        except Exception as e:
            logger.exception("Failed to save arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_save_arrangement"] = sclang_save_arrangement

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_delete_arrangement(name: str) -> str:
        """
        Delete an arrangement from memory and disk.

        Args:
            name: Arrangement name

        Returns:
            JSON string with delete result

        Example:
            sclang_delete_arrangement(name="two-five-one")
        """
        try:
            if await manager.delete(name):
                return json.dumps(
                    {
                        "status": "success",
                        "message": SuccessMessages.ARRANGEMENT_DELETED.format(name=name),
                    }
                )
            return _not_found(name)
        except Exception as e:
            logger.exception("Failed to delete arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_delete_arrangement"] = sclang_delete_arrangement

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_duplicate_arrangement(name: str, new_name: str) -> str:
        """
        Duplicate an arrangement with a new name.

        Args:
            name: Original arrangement name
            new_name: Name for the duplicate

        Returns:
            JSON string with the new arrangement details

        Example:
            sclang_duplicate_arrangement(name="two-five-one", new_name="two-five-one-v2")
        """
        try:
            new_arrangement = await manager.duplicate(name, new_name)

            return json.dumps(
                {
                    "status": "success",
                    "message": f"Created duplicate: {new_name}",
                    "arrangement": {
                        "name": new_arrangement.name,
                        "clips": len(new_arrangement.clips),
                        "tracks": len(new_arrangement.tracks),
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to duplicate arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_duplicate_arrangement"] = sclang_duplicate_arrangement

    return tools
