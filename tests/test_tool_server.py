import pytest

from fakes import FakeMatcher
from libs.dataclass.conceptual_objects import ElementRef
from libs.dataclass.tool_schemas import GenerateTestParams, ValidateLocatorParams
from pw_tool_ext.context import Context
from pw_tool_ext.errors import PreconditionError, ResolutionError, ToolInputError
from pw_tool_ext.server import ToolServer
from pw_tool_ext.tools.testing import generate_test, validate_locator

LOGIN = {"name": "Login", "description": "User logs in", "steps": ["Open page", "Click Sign in"]}


def _validate_args(locator="getByRole('button', { name: 'Sign in' })", ref="e2", **extra):
    return {"locator": locator, "element": "Sign in button", "ref": ref, **extra}


class TestRegistry:
    def test_lists_all_tools_by_default(self, context):
        names = [t.name for t in ToolServer(context).list_tools()]
        assert names == ["browser_navigate", "browser_snapshot",
                         "browser_generate_playwright_test", "browser_validate_locator"]

    def test_capability_filter(self, cfg):
        cfg.capabilities = ["testing"]
        server = ToolServer(Context(cfg))
        assert [t.name for t in server.list_tools()] == ["browser_generate_playwright_test",
                                                          "browser_validate_locator"]

    async def test_disabled_tool_cannot_be_called(self, cfg):
        cfg.capabilities = ["core"]
        with pytest.raises(ToolInputError, match="not found"):
            await ToolServer(Context(cfg)).call_tool("browser_generate_playwright_test", LOGIN)

    def test_testing_tools_are_read_only(self, context):
        tools = {t.name: t for t in ToolServer(context).list_tools()}
        for name in ("browser_generate_playwright_test", "browser_validate_locator"):
            assert tools[name].annotations.readOnlyHint is True
            assert tools[name].annotations.destructiveHint is False
        assert tools["browser_navigate"].annotations.destructiveHint is True

    def test_input_schema_comes_from_model(self, context):
        tools = {t.name: t for t in ToolServer(context).list_tools()}
        schema = tools["browser_validate_locator"].inputSchema
        assert set(schema["required"]) == {"locator", "element", "ref"}
        assert "testIdAttributeName" in schema["properties"]


class TestGenerateTest:
    async def test_returns_only_instructions(self, context):
        text = await ToolServer(context).run_tool("browser_generate_playwright_test", LOGIN)
        assert text.startswith("## Instructions\n")
        assert "Test name: Login" in text
        assert "Description: User logs in" in text
        assert text.endswith("- 1. Open page\n- 2. Click Sign in")

    async def test_does_not_need_a_page(self, context):
        result = await ToolServer(context).call_tool("browser_generate_playwright_test", LOGIN)
        assert context.current_tab() is None
        assert result.captureSnapshot is False
        assert result.waitForNetwork is False
        assert result.code == []

    async def test_empty_steps(self, context):
        text = await ToolServer(context).run_tool("browser_generate_playwright_test",
                                                  {"name": "Smoke", "description": "", "steps": []})
        assert text.endswith("Steps:")

    @pytest.mark.parametrize("arguments", [
        {"name": "Login", "description": "x"},
        {"name": "Login", "description": "x", "steps": "Open page"},
        {"name": "", "description": "x", "steps": []},
        {"name": "Login", "description": "x", "steps": [1, 2]},
    ])
    async def test_schema_violations(self, context, arguments):
        with pytest.raises(ToolInputError):
            await ToolServer(context).call_tool("browser_generate_playwright_test", arguments)

    async def test_handler_directly(self, context):
        result = await generate_test.handle(context, GenerateTestParams(**LOGIN))
        assert "- 2. Click Sign in" in result.text


class TestValidateLocator:
    async def test_valid_locator(self, context_with_tab, fake_tab):
        text = await ToolServer(context_with_tab).run_tool("browser_validate_locator", _validate_args())
        assert text == "Locator is valid"
        assert fake_tab.captures == 0
        assert fake_tab.network_waits == []

    async def test_ambiguous_locator(self, context_with_tab, fake_tab, sign_in):
        fake_tab.matcher.matched = [ElementRef("doc:1"), sign_in]
        text = await ToolServer(context_with_tab).run_tool("browser_validate_locator", _validate_args())
        assert text == "Locator is ambiguous, it matches the reference element but also other elements"

    async def test_unknown_ref(self, context_with_tab):
        text = await ToolServer(context_with_tab).run_tool("browser_validate_locator", _validate_args(ref="e77"))
        assert text == "No reference element found"

    async def test_uses_configured_test_id_attribute(self, context_with_tab, fake_tab):
        context_with_tab.cfg.testing.testIdAttributeName = "data-qa"
        await ToolServer(context_with_tab).call_tool("browser_validate_locator",
                                                     _validate_args(locator="getByTestId('login')"))
        assert fake_tab.matcher.calls == ['internal:testid=[data-qa="login"s]']

    async def test_argument_overrides_test_id_attribute(self, context_with_tab, fake_tab):
        await ToolServer(context_with_tab).call_tool(
            "browser_validate_locator", _validate_args(locator="getByTestId('login')", testIdAttributeName="data-pw"))
        assert fake_tab.matcher.calls == ['internal:testid=[data-pw="login"s]']

    async def test_no_page_is_a_precondition_error(self, context):
        with pytest.raises(PreconditionError, match="No open pages"):
            await ToolServer(context).call_tool("browser_validate_locator", _validate_args())

    async def test_no_snapshot_fails_before_resolution(self, context_with_tab, fake_tab):
        fake_tab._snapshot = None
        with pytest.raises(PreconditionError, match="No snapshot available"):
            await ToolServer(context_with_tab).call_tool("browser_validate_locator", _validate_args())
        assert fake_tab.matcher.calls == []
        assert fake_tab.resolver.calls == []

    async def test_engine_failure_is_an_error_not_a_diagnostic(self, context_with_tab, fake_tab):
        fake_tab.matcher = FakeMatcher(error=ResolutionError("document detached"))
        with pytest.raises(ResolutionError):
            await ToolServer(context_with_tab).call_tool("browser_validate_locator", _validate_args())

    async def test_missing_ref_argument(self, context_with_tab):
        with pytest.raises(ToolInputError, match="ref"):
            await ToolServer(context_with_tab).call_tool("browser_validate_locator",
                                                         {"locator": "getByText('x')", "element": "x"})

    async def test_result_flags(self, context_with_tab):
        result = await validate_locator.handle(context_with_tab, ValidateLocatorParams(**_validate_args()))
        assert result.captureSnapshot is False
        assert result.waitForNetwork is False


class TestSnapshotTool:
    async def test_snapshot_renders_page_state(self, context_with_tab, fake_tab):
        text = await ToolServer(context_with_tab).run_tool("browser_snapshot", {})
        assert fake_tab.captures == 1
        assert text.startswith("### Page state\n- Page URL: https://example.test/login")
        assert '- button "Sign in" [ref=e2]' in text

    async def test_snapshot_without_page(self, context):
        with pytest.raises(PreconditionError):
            await ToolServer(context).run_tool("browser_snapshot", {})


class _FakeSession:
    def __init__(self):
        self.pages = 0
        self.started = False

    async def new_page(self):
        self.pages += 1
        self.started = True
        return object()

    async def close(self):
        self.started = False


class TestContext:
    async def test_ensure_tab_reuses_the_current_tab(self, cfg):
        session = _FakeSession()
        context = Context(cfg, session=session)
        first = await context.ensure_tab()
        assert await context.ensure_tab() is first
        assert context.current_tab_or_die() is first
        assert session.pages == 1

    async def test_close_forgets_the_tab(self, cfg):
        session = _FakeSession()
        context = Context(cfg, session=session)
        await context.ensure_tab()
        await context.close()
        assert context.current_tab() is None
        assert session.started is False
