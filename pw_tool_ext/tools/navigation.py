"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Page Navigation And Snapshot Tools
"""
import json

from libs.dataclass.conceptual_objects import ToolResult
from libs.dataclass.tool_schemas import NavigateParams, SnapshotParams
from pw_tool_ext.context import Context
from pw_tool_ext.tools.tool import Tool, ToolSchema


async def _handle_navigate(context: Context, params: NavigateParams) -> ToolResult:
    tab = await context.ensure_tab()
    wait = context.cfg.waits.navigate
    await tab.navigate(params.url, wait_type=wait["type"], timeout_ms=wait["timeoutMs"])
    return ToolResult(
        text=f"Navigated to {params.url}",
        code=[f"await page.goto({json.dumps(params.url)});"],
        captureSnapshot=True,
        waitForNetwork=True,
    )


async def _handle_snapshot(context: Context, params: SnapshotParams) -> ToolResult:
    context.current_tab_or_die()
    return ToolResult(text="", captureSnapshot=True, waitForNetwork=False)


navigate = Tool(
    capability="core",
    schema=ToolSchema(
        name="browser_navigate",
        title="Navigate to a URL",
        description="Navigate to a URL",
        inputSchema=NavigateParams,
        type="destructive",
    ),
    handle=_handle_navigate,
)

snapshot = Tool(
    capability="core",
    schema=ToolSchema(
        name="browser_snapshot",
        title="Page snapshot",
        description="Capture a snapshot of the current page, listing element references usable by other tools",
        inputSchema=SnapshotParams,
        type="readOnly",
    ),
    handle=_handle_snapshot,
)

CORE_TOOLS = [
    navigate,
    snapshot,
]
