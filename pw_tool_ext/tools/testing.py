"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Test Authoring Tools (Generate Test, Validate Locator)
"""
import logging

from libs.dataclass.conceptual_objects import TestScenario, ToolResult
from libs.dataclass.tool_schemas import GenerateTestParams, ValidateLocatorParams
from prompts.prompts_template import get_playwright_test_generator_instructions
from pw_tool_ext.context import Context
from pw_tool_ext.locator import LocatorValidator
from pw_tool_ext.tools.tool import Tool, ToolSchema

logger = logging.getLogger(__name__)


async def _handle_generate_test(context: Context, params: GenerateTestParams) -> ToolResult:
    scenario = TestScenario(name=params.name, description=params.description, steps=list(params.steps))
    logger.info(f'composing test instructions for "{scenario.name}" with {len(scenario.steps)} step(s)')
    return ToolResult(
        text=get_playwright_test_generator_instructions(scenario),
        code=[],
        captureSnapshot=False,
        waitForNetwork=False,
    )


async def _handle_validate_locator(context: Context, params: ValidateLocatorParams) -> ToolResult:
    tab = context.current_tab_or_die()
    tab.snapshot_or_die()

    validator = LocatorValidator(
        matcher=tab.element_matcher(),
        resolver=tab.reference_resolver(),
        default_test_id_attribute=context.cfg.testing.testIdAttributeName,
    )
    result = await validator.validate(params.locator, params.ref, params.testIdAttributeName)
    return ToolResult(
        text=result.message,
        code=[],
        captureSnapshot=False,
        waitForNetwork=False,
    )


generate_test = Tool(
    capability="testing",
    schema=ToolSchema(
        name="browser_generate_playwright_test",
        title="Generate a Playwright test",
        description="Generate a Playwright test for given scenario",
        inputSchema=GenerateTestParams,
        type="readOnly",
    ),
    handle=_handle_generate_test,
)

validate_locator = Tool(
    capability="testing",
    schema=ToolSchema(
        name="browser_validate_locator",
        title="Validate locator",
        description="Checks if the locator evaluates into the specified ref.",
        inputSchema=ValidateLocatorParams,
        type="readOnly",
    ),
    handle=_handle_validate_locator,
)

TESTING_TOOLS = [
    generate_test,
    validate_locator,
]
