import pytest

from pw_tool_ext.errors import ParseError
from pw_tool_ext.locator_parser import locator_or_selector_as_selector


@pytest.mark.parametrize("locator, expected", [
    ("getByRole('button', { name: 'Sign in' })", 'internal:role=button[name="Sign in"i]'),
    ("getByRole('button', { name: 'Sign in', exact: true })", 'internal:role=button[name="Sign in"s]'),
    ('getByRole("button", {name: "Sign in",})', 'internal:role=button[name="Sign in"i]'),
    ("getByRole('heading', { level: 2 })", "internal:role=heading[level=2]"),
    ("getByRole('checkbox', { name: 'Agree', checked: true })",
     'internal:role=checkbox[checked=true][name="Agree"i]'),
    ("getByRole('button', { includeHidden: true })", "internal:role=button[include-hidden=true]"),
    ("getByRole('link', { name: /sign ?in/i })", "internal:role=link[name=/sign ?in/i]"),
    ("getByText('Hello')", 'internal:text="Hello"i'),
    ("getByText('Hello', { exact: true })", 'internal:text="Hello"s'),
    ("getByText(/hel+o/i)", "internal:text=/hel+o/i"),
    ("getByLabel('Email')", 'internal:label="Email"i'),
    ("getByPlaceholder('Search')", 'internal:attr=[placeholder="Search"i]'),
    ("getByAltText('Logo', { exact: true })", 'internal:attr=[alt="Logo"s]'),
    ("getByTitle('Close')", 'internal:attr=[title="Close"i]'),
    ("getByTestId('submit')", 'internal:testid=[data-testid="submit"s]'),
    ("getByText(`Welcome back`)", 'internal:text="Welcome back"i'),
])
def test_single_locator(locator, expected):
    assert locator_or_selector_as_selector(locator) == expected


@pytest.mark.parametrize("locator, expected", [
    ("locator('#main').getByRole('link').first()", "#main >> internal:role=link >> nth=0"),
    ("getByRole('listitem').last()", "internal:role=listitem >> nth=-1"),
    ("getByRole('listitem').nth(2)", "internal:role=listitem >> nth=2"),
    ("getByRole('listitem').filter({ hasText: 'Item 2' })",
     'internal:role=listitem >> internal:has-text="Item 2"i'),
    ("getByRole('listitem').filter({ hasNotText: 'Sold out' })",
     'internal:role=listitem >> internal:has-not-text="Sold out"i'),
    ("getByRole('listitem').filter({ has: getByRole('button') })",
     'internal:role=listitem >> internal:has="internal:role=button"'),
    ("locator('li', { hasText: 'Milk' })", 'li >> internal:has-text="Milk"i'),
    ("getByRole('button').and(getByTitle('Subscribe'))",
     'internal:role=button >> internal:and="internal:attr=[title=\\"Subscribe\\"i]"'),
    ("frameLocator('#checkout').getByText('Pay')",
     '#checkout >> internal:control=enter-frame >> internal:text="Pay"i'),
    ("locator('iframe').contentFrame().getByRole('button')",
     "iframe >> internal:control=enter-frame >> internal:role=button"),
    ("getByRole('dialog')\n  .getByRole('button', { name: 'OK' })",
     'internal:role=dialog >> internal:role=button[name="OK"i]'),
])
def test_chained_locator(locator, expected):
    assert locator_or_selector_as_selector(locator) == expected


class TestTestIdAttribute:
    def test_override(self):
        assert locator_or_selector_as_selector("getByTestId('submit')", "data-qa") == \
               'internal:testid=[data-qa="submit"s]'

    def test_none_falls_back_to_default(self):
        assert locator_or_selector_as_selector("getByTestId('submit')", None) == \
               'internal:testid=[data-testid="submit"s]'

    def test_does_not_touch_other_locators(self):
        assert locator_or_selector_as_selector("getByText('submit')", "data-qa") == 'internal:text="submit"i'


class TestQuoting:
    def test_quotes_in_role_name(self):
        assert locator_or_selector_as_selector("getByRole('button', { name: 'Say \"hi\"' })") == \
               'internal:role=button[name="Say \\"hi\\""i]'

    def test_quotes_in_text(self):
        assert locator_or_selector_as_selector("getByText('Say \"hi\"')") == 'internal:text="Say \\"hi\\""i'

    def test_escaped_single_quote(self):
        assert locator_or_selector_as_selector("getByText('Don\\'t stop')") == 'internal:text="Don\'t stop"i'

    def test_unicode(self):
        assert locator_or_selector_as_selector("getByText('Café')") == 'internal:text="Café"i'


class TestRegexArguments:
    def test_chain_separator_is_escaped(self):
        assert locator_or_selector_as_selector("getByText(/a>>b/)") == r"internal:text=/a\>\>b/"

    def test_quote_is_escaped(self):
        assert locator_or_selector_as_selector("getByText(/it's/)") == r"internal:text=/it\'s/"

    def test_already_escaped_quote_is_kept(self):
        assert locator_or_selector_as_selector(r"getByText(/say \"hi/i)") == r"internal:text=/say \"hi/i"

    def test_role_name_and_test_id(self):
        assert locator_or_selector_as_selector("getByRole('link', { name: /next >> page/ })") == \
               r"internal:role=link[name=/next \>\> page/]"
        assert locator_or_selector_as_selector("getByTestId(/row-\\d+/)") == r"internal:testid=[data-testid=/row-\d+/]"

    @pytest.mark.parametrize("flags", ["u", "v", "iu"])
    def test_unicode_patterns_are_left_alone(self, flags):
        assert locator_or_selector_as_selector(f"getByText(/a>>b/{flags})") == f"internal:text=/a>>b/{flags}"


class TestPassThrough:
    def test_page_prefix_is_tolerated(self):
        assert locator_or_selector_as_selector("page.getByText('Hello')") == 'internal:text="Hello"i'

    @pytest.mark.parametrize("selector", ["#login > button", "xpath=//button[@type='submit']", "text=Sign in",
                                          "button:has-text('Sign in')"])
    def test_raw_selectors(self, selector):
        assert locator_or_selector_as_selector(selector) == selector

    def test_deterministic(self):
        locator = "getByRole('button', { name: 'Sign in' }).first()"
        assert locator_or_selector_as_selector(locator) == locator_or_selector_as_selector(locator)


@pytest.mark.parametrize("locator", [
    "",
    "   ",
    "getByRole(",
    "getByRole('button', { name: 'x' }",
    "getByFoo('x')",
    "getByRole('button').click()",
    "getByText(`${name}`)",
    "getByRole('listitem').nth('a')",
    "getByRole('button', { nmae: 'x' })",
    "getByTestId()",
    "getByText('x') trailing",
    "getByText('unterminated)",
    "getByRole('listitem').filter({ has: 'button' })",
    "first(1)",
    "filter()",
    "filter({})",
])
def test_invalid_locators_raise(locator):
    with pytest.raises(ParseError):
        locator_or_selector_as_selector(locator)
