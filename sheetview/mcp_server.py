"""
MCP (Model Context Protocol) server for the spreadsheet viewer.

This module exposes one ViewerSession as MCP tools so an agent can open a
workbook, filter its rows and page through the result, the same operations
the REST API offers.

MCP Tools:
    - open_workbook: Load a workbook from a local path
    - get_stats: Summary counters
    - get_page: The active page of filtered rows
    - select_sheet: Switch the active sheet
    - set_predicate: Set predicate 1 or 2
    - clear_predicates: Empty both queries
    - set_scope: Search the active sheet or all sheets
    - set_ignore_case: Set the shared case option
    - goto_page: Move to a page (clamped)

Example:
    To run the MCP server:
        python -m sheetview.mcp_server

    Or programmatically:
        from sheetview.mcp_server import run_mcp_server
        run_mcp_server()
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool,
)

from sheetview.exceptions.viewer_exceptions import NoWorkbookLoadedError, ViewerError
from sheetview.models.api_models import PageResponse
from sheetview.models.workbook_models import MatchMode, SessionState
from sheetview.services.viewer_session import ViewerSession
from sheetview.utils.logging import get_logger

logger = get_logger(__name__)

MODE_NAMES = [mode.value for mode in MatchMode]


class MCPViewerServer:
    """
    MCP server implementation for the viewer.

    Wraps a ViewerSession and exposes its transitions and queries as MCP
    tools. Every mutating tool returns the resulting page so the caller sees
    the effect immediately.

    Attributes:
        session: The underlying ViewerSession instance.
        server: The MCP Server instance.

    Example:
        mcp_server = MCPViewerServer()
        await mcp_server.run()
    """

    def __init__(self, session: ViewerSession | None = None) -> None:
        """
        Initialize the MCP viewer server.

        Args:
            session: Optional ViewerSession instance. If None, creates a new one.
        """
        self.session = session or ViewerSession()
        self.server = Server("sheetview-mcp-server")
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP request handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the list of available viewer tools."""
            return self._get_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Execute a tool and return the result."""
            result = await self._execute_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, default=str, indent=2))]

    def _get_tools(self) -> list[Tool]:
        """
        Get the list of available viewer tools.

        Returns:
            List of MCP Tool definitions.
        """
        no_args = {"type": "object", "properties": {}, "required": []}
        return [
            Tool(
                name="open_workbook",
                description=(
                    "Load a spreadsheet workbook (xlsx, xlsm, xlsb, xls, ods) from a "
                    "local path. Resets the active sheet, predicates and page."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "file_path": {
                            "type": "string",
                            "description": "Path to the workbook file",
                        },
                    },
                    "required": ["file_path"],
                },
            ),
            Tool(
                name="get_stats",
                description=(
                    "Get summary counters: total rows and columns of the active sheet, "
                    "filtered row count, sheet names, active sheet and paging."
                ),
                inputSchema=no_args,
            ),
            Tool(
                name="get_page",
                description="Get the active page of filtered rows as text.",
                inputSchema=no_args,
            ),
            Tool(
                name="select_sheet",
                description="Make a sheet active and re-run the current filter on it.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": "Name of the sheet",
                        },
                    },
                    "required": ["name"],
                },
            ),
            Tool(
                name="set_predicate",
                description=(
                    "Set predicate 1 or 2. A row is kept when any of its cells matches "
                    "each non-empty predicate. Wildcard mode treats '*' as any text."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "slot": {
                            "type": "integer",
                            "enum": [1, 2],
                            "description": "Predicate slot",
                        },
                        "mode": {
                            "type": "string",
                            "enum": MODE_NAMES,
                            "description": "Match mode (default: contains)",
                        },
                        "query": {
                            "type": "string",
                            "description": "Query text; empty clears the predicate",
                        },
                        "case_sensitive": {
                            "type": "boolean",
                            "description": "Overrides the shared case option",
                        },
                    },
                    "required": ["slot", "query"],
                },
            ),
            Tool(
                name="clear_predicates",
                description="Empty both predicate queries.",
                inputSchema=no_args,
            ),
            Tool(
                name="set_scope",
                description="Filter every sheet (true) or only the active sheet (false).",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "all_sheets": {
                            "type": "boolean",
                            "description": "Search all sheets",
                        },
                    },
                    "required": ["all_sheets"],
                },
            ),
            Tool(
                name="set_ignore_case",
                description="Compare text case-insensitively (true) or not (false).",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "ignore_case": {
                            "type": "boolean",
                            "description": "Ignore letter case",
                        },
                    },
                    "required": ["ignore_case"],
                },
            ),
            Tool(
                name="goto_page",
                description="Move to a 0-based page index; out-of-range values are clamped.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "index": {
                            "type": "integer",
                            "description": "0-based page index",
                        },
                    },
                    "required": ["index"],
                },
            ),
        ]

    def _page_data(self) -> dict[str, Any]:
        if self.session.state is SessionState.EMPTY:
            raise NoWorkbookLoadedError("show a page")
        page = PageResponse.from_page(
            self.session.active_page(),
            column_count=self.session.stats().total_columns,
        )
        return page.model_dump()

    async def _execute_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a tool by name with the given arguments.

        Args:
            name: The name of the tool to execute.
            arguments: The arguments to pass to the tool.

        Returns:
            Dictionary containing the tool execution result.
        """
        session = self.session
        logger.debug("Tool called", tool=name)
        try:
            if name == "open_workbook":
                path = Path(arguments["file_path"])
                session.load_workbook(path.read_bytes(), source_name=path.name)
                return {"success": True, "data": session.stats().model_dump()}

            elif name == "get_stats":
                return {"success": True, "data": session.stats().model_dump()}

            elif name == "get_page":
                return {"success": True, "data": self._page_data()}

            elif name == "select_sheet":
                session.select_sheet(arguments["name"])
                return {"success": True, "data": self._page_data()}

            elif name == "set_predicate":
                session.set_predicate(
                    int(arguments["slot"]),
                    arguments.get("mode", MatchMode.CONTAINS),
                    arguments.get("query", ""),
                    arguments.get("case_sensitive"),
                )
                return {"success": True, "data": self._page_data()}

            elif name == "clear_predicates":
                session.clear_filters()
                return {"success": True, "data": self._page_data()}

            elif name == "set_scope":
                session.set_scope(bool(arguments["all_sheets"]))
                return {"success": True, "data": self._page_data()}

            elif name == "set_ignore_case":
                session.set_ignore_case(bool(arguments["ignore_case"]))
                return {"success": True, "data": self._page_data()}

            elif name == "goto_page":
                session.goto_page(int(arguments["index"]))
                return {"success": True, "data": self._page_data()}

            else:
                return {
                    "success": False,
                    "error": {
                        "error_code": "UNKNOWN_TOOL",
                        "message": f"Unknown tool: {name}",
                    },
                }

        except ViewerError as e:
            return {
                "success": False,
                "error": e.to_dict(),
            }
        except OSError as e:
            return {
                "success": False,
                "error": {
                    "error_code": "READ_ERROR",
                    "message": str(e),
                },
            }
        except (KeyError, ValueError) as e:
            return {
                "success": False,
                "error": {
                    "error_code": "INVALID_ARGUMENTS",
                    "message": str(e),
                },
            }

    async def run(self) -> None:
        """
        Run the MCP server using stdio transport.

        Blocks until the client disconnects.
        """
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def run_mcp_server() -> None:
    """
    Run the MCP viewer server.

    Example:
        python -m sheetview.mcp_server
    """
    server = MCPViewerServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    run_mcp_server()
