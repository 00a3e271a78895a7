"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      MCP Tool Server (Registry, Dispatch, Stdio Transport)

"""
import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from constant.const_config import SERVER_NAME
from libs.dataclass.conceptual_objects import ToolResult
from pw_tool_ext.context import Context
from pw_tool_ext.errors import ToolError, ToolInputError
from pw_tool_ext.tools.navigation import CORE_TOOLS
from pw_tool_ext.tools.testing import TESTING_TOOLS
from pw_tool_ext.tools.tool import Tool

logger = logging.getLogger(__name__)

ALL_TOOLS: List[Tool] = CORE_TOOLS + TESTING_TOOLS


class ToolServer:
    """
    Owns the tool registry for one Context. Only tools whose capability is enabled in the
    configuration are listed or callable.
    """

    def __init__(self, context: Context, tools: Optional[List[Tool]] = None):
        self.context = context
        candidates = ALL_TOOLS if tools is None else tools
        self.tools: Dict[str, Tool] = {
            t.schema.name: t for t in candidates if t.capability in context.cfg.capabilities
        }
        logger.info(f'tools enabled: {", ".join(self.tools) or "none"}')

    def list_tools(self) -> List[types.Tool]:
        listed = []
        for tool in self.tools.values():
            schema = tool.schema
            listed.append(types.Tool(
                name=schema.name,
                description=schema.description,
                inputSchema=schema.inputSchema.model_json_schema(),
                annotations=types.ToolAnnotations(
                    title=schema.title,
                    readOnlyHint=schema.type == "readOnly",
                    destructiveHint=schema.type == "destructive",
                    openWorldHint=True,
                ),
            ))
        return listed

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        tool = self.tools.get(name)
        if tool is None:
            raise ToolInputError(f'Tool "{name}" not found')

        try:
            params = tool.schema.inputSchema.model_validate(arguments or {})
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
            raise ToolInputError(f'Invalid arguments for "{name}": {fields}') from e

        try:
            return await tool.handle(self.context, params)
        except ToolError as e:
            logger.error(f'tool {name} failed: {type(e).__name__}: {e}')
            raise

    async def render(self, result: ToolResult) -> str:
        sections = []
        if result.text:
            sections.append(result.text)
        if result.code:
            sections.append("### Ran Playwright code\n```js\n" + "\n".join(result.code) + "\n```")

        tab = self.context.current_tab()
        if tab is not None and result.waitForNetwork:
            await tab.wait_for_network(self.context.cfg.waits.networkIdleTimeoutMs)
        if result.captureSnapshot:
            tab = self.context.current_tab_or_die()
            snapshot = await tab.capture_snapshot()
            sections.append("### Page state\n" + snapshot.to_text())
        return "\n\n".join(sections)

    async def run_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> str:
        logger.info(f'calling tool {name}')
        result = await self.call_tool(name, arguments)
        return await self.render(result)

    def build_mcp_server(self) -> Server:
        server = Server(SERVER_NAME)

        @server.list_tools()
        async def _list_tools() -> List[types.Tool]:
            return self.list_tools()

        # exceptions raised here reach the client as isError results
        @server.call_tool()
        async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
            text = await self.run_tool(name, arguments)
            return [types.TextContent(type="text", text=text)]

        return server

    async def serve_stdio(self):
        server = self.build_mcp_server()
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
        finally:
            await self.context.close()
