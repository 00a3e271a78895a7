import pytest

from fakes import FakeMatcher, FakeResolver, FakeTab, make_snapshot
from libs.dataclass.conceptual_objects import ElementRef
from pw_tool_ext.config import AppConfig
from pw_tool_ext.context import Context


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig()


@pytest.fixture
def sign_in() -> ElementRef:
    return ElementRef("doc:2")


@pytest.fixture
def fake_tab(sign_in) -> FakeTab:
    return FakeTab(FakeMatcher([sign_in]), FakeResolver({"e2": sign_in}), make_snapshot())


@pytest.fixture
def context(cfg) -> Context:
    return Context(cfg)


@pytest.fixture
def context_with_tab(context, fake_tab) -> Context:
    context._current = fake_tab
    return context
