"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Locator Expression To Native Selector

Converts a human-authored locator chain, e.g. getByRole('button', { name: 'Sign in' }),
into the selector string page.locator() understands, e.g. internal:role=button[name="Sign in"i].
Anything that does not start with a method call is treated as a raw engine selector (css, xpath=, text=).
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from constant.const_config import DEFAULT_TEST_ID_ATTRIBUTE
from pw_tool_ext.errors import ParseError

_CALL_START = re.compile(r"^\s*(?:page\s*\.\s*)?[A-Za-z_$][\w$]*\s*\(")
_IDENT = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
# a quote preceded by an even number of backslashes
_UNESCAPED_QUOTE = re.compile(r"""(^|[^\\])((?:\\\\)*)(['"`])""")

# getByRole options in the order the engine expects them
_ROLE_OPTIONS = [
    ("checked", "checked"),
    ("disabled", "disabled"),
    ("selected", "selected"),
    ("expanded", "expanded"),
    ("includeHidden", "include-hidden"),
    ("level", "level"),
    ("name", "name"),
    ("pressed", "pressed"),
]


@dataclass(frozen=True)
class RegexLiteral:
    source: str
    flags: str = ""

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"

    def for_selector(self) -> str:
        # unicode mode rejects identity escapes, so u/v patterns go out as written
        if "u" in self.flags or "v" in self.flags:
            return str(self)
        quoted = _UNESCAPED_QUOTE.sub(r"\1\2\\\3", str(self))
        return quoted.replace(">>", r"\>\>")


@dataclass(frozen=True)
class NestedLocator:
    selector: str


Value = Union[str, int, float, bool, RegexLiteral, NestedLocator, Dict[str, Any]]


# ---------- escaping ----------

def escape_for_attribute_selector(value: Union[str, RegexLiteral], exact: bool) -> str:
    if isinstance(value, RegexLiteral):
        return value.for_selector()
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"{"s" if exact else "i"}'


def escape_for_text_selector(value: Union[str, RegexLiteral], exact: bool) -> str:
    if isinstance(value, RegexLiteral):
        return value.for_selector()
    return json.dumps(value, ensure_ascii=False) + ("s" if exact else "i")


def _js_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------- parser ----------

class _LocatorParser:
    """Recursive descent over the JavaScript flavoured locator chain."""

    def __init__(self, text: str, test_id_attribute_name: str):
        self.text = text
        self.pos = 0
        self.test_id_attribute_name = test_id_attribute_name
        self.methods: Dict[str, Callable[[List[Value]], List[str]]] = {
            "getByRole": self._get_by_role,
            "getByText": lambda args: [f"internal:text={self._text_arg(args, 'getByText')}"],
            "getByLabel": lambda args: [f"internal:label={self._text_arg(args, 'getByLabel')}"],
            "getByPlaceholder": lambda args: [f"internal:attr=[placeholder={self._attr_arg(args, 'getByPlaceholder')}]"],
            "getByAltText": lambda args: [f"internal:attr=[alt={self._attr_arg(args, 'getByAltText')}]"],
            "getByTitle": lambda args: [f"internal:attr=[title={self._attr_arg(args, 'getByTitle')}]"],
            "getByTestId": self._get_by_test_id,
            "locator": self._locator,
            "filter": self._filter,
            "first": lambda args: self._no_args(args, "first", "nth=0"),
            "last": lambda args: self._no_args(args, "last", "nth=-1"),
            "nth": self._nth,
            "and": lambda args: [f"internal:and={_js_string(self._locator_arg(args, 'and'))}"],
            "or": lambda args: [f"internal:or={_js_string(self._locator_arg(args, 'or'))}"],
            "frameLocator": self._frame_locator,
            "contentFrame": lambda args: self._no_args(args, "contentFrame", "internal:control=enter-frame"),
        }

    # ----- entry -----

    def parse(self) -> str:
        selector = self._chain()
        self._skip_ws()
        if self.pos != len(self.text):
            self._fail(f"unexpected '{self.text[self.pos:self.pos + 10]}'")
        if not selector:
            self._fail("locator resolves to an empty selector")
        return selector

    # ----- grammar -----

    def _chain(self) -> str:
        parts: List[str] = []
        self._skip_ws()
        if self.text.startswith("page", self.pos):
            save = self.pos
            self.pos += 4
            self._skip_ws()
            if not self._peek("."):
                self.pos = save
            else:
                self.pos += 1
        while True:
            name = self._ident()
            if name not in self.methods:
                self._fail(f"unknown locator method '{name}'")
            self._expect("(")
            args = self._args()
            self._expect(")")
            parts.extend(self.methods[name](args))
            self._skip_ws()
            if not self._peek("."):
                break
            self.pos += 1
        return " >> ".join(parts)

    def _args(self) -> List[Value]:
        args: List[Value] = []
        self._skip_ws()
        while not self._peek(")"):
            args.append(self._value())
            self._skip_ws()
            if self._peek(","):
                self.pos += 1
                self._skip_ws()
            elif not self._peek(")"):
                self._fail("expected ',' or ')'")
        return args

    def _value(self) -> Value:
        self._skip_ws()
        ch = self._char()
        if ch in ("'", '"', "`"):
            return self._string()
        if ch == "/":
            return self._regex()
        if ch == "{":
            return self._object()
        m = _NUMBER.match(self.text, self.pos)
        if m:
            self.pos = m.end()
            raw = m.group(0)
            return float(raw) if "." in raw else int(raw)
        m = _IDENT.match(self.text, self.pos)
        if m and m.group(0) in ("true", "false"):
            self.pos = m.end()
            return m.group(0) == "true"
        if m:
            return NestedLocator(self._chain())
        self._fail("expected a value")

    def _string(self) -> str:
        quote = self._char()
        self.pos += 1
        out: List[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(out)
            if ch == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    break
                esc = self.text[self.pos]
                if esc == "u" and re.match(r"[0-9a-fA-F]{4}", self.text[self.pos + 1:self.pos + 5]):
                    out.append(chr(int(self.text[self.pos + 1:self.pos + 5], 16)))
                    self.pos += 5
                    continue
                out.append(_ESCAPES.get(esc, esc))
                self.pos += 1
                continue
            if quote == "`" and self.text.startswith("${", self.pos):
                self._fail("template expressions are not supported")
            out.append(ch)
            self.pos += 1
        self._fail("unterminated string")

    def _regex(self) -> RegexLiteral:
        self.pos += 1
        start = self.pos
        in_class = False
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                source = self.text[start:self.pos]
                self.pos += 1
                m = re.compile(r"[dgimsuyv]*").match(self.text, self.pos)
                self.pos = m.end()
                if not source:
                    self._fail("empty regular expression")
                return RegexLiteral(source, m.group(0))
            self.pos += 1
        self._fail("unterminated regular expression")

    def _object(self) -> Dict[str, Any]:
        self._expect("{")
        obj: Dict[str, Any] = {}
        self._skip_ws()
        while not self._peek("}"):
            if self._char() in ("'", '"'):
                key = self._string()
            else:
                key = self._ident()
            self._expect(":")
            obj[key] = self._value()
            self._skip_ws()
            if self._peek(","):
                self.pos += 1
                self._skip_ws()
            elif not self._peek("}"):
                self._fail("expected ',' or '}'")
        self._expect("}")
        return obj

    # ----- methods -----

    def _get_by_role(self, args: List[Value]) -> List[str]:
        if not args or len(args) > 2 or not isinstance(args[0], str):
            self._fail("getByRole expects a role string and optional options")
        options = self._options(args, 1, "getByRole")
        exact = bool(options.get("exact", False))
        props: List[str] = []
        for key, prop in _ROLE_OPTIONS:
            if key not in options:
                continue
            value = options[key]
            if key == "name":
                if not isinstance(value, (str, RegexLiteral)):
                    self._fail("getByRole name must be a string or regular expression")
                props.append(f"[{prop}={escape_for_attribute_selector(value, exact)}]")
            else:
                props.append(f"[{prop}={_render(value)}]")
        unknown = set(options) - {k for k, _ in _ROLE_OPTIONS} - {"exact"}
        if unknown:
            self._fail(f"getByRole does not support option(s) {', '.join(sorted(unknown))}")
        return [f"internal:role={args[0]}{''.join(props)}"]

    def _get_by_test_id(self, args: List[Value]) -> List[str]:
        if len(args) != 1 or not isinstance(args[0], (str, RegexLiteral)):
            self._fail("getByTestId expects a single string or regular expression")
        value = escape_for_attribute_selector(args[0], True)
        return [f"internal:testid=[{self.test_id_attribute_name}={value}]"]

    def _locator(self, args: List[Value]) -> List[str]:
        if not args or len(args) > 2:
            self._fail("locator expects a selector and optional options")
        first = args[0]
        if isinstance(first, NestedLocator):
            parts = [f"internal:chain={_js_string(first.selector)}"]
        elif isinstance(first, str):
            if not first.strip():
                self._fail("locator selector must not be empty")
            parts = [first]
        else:
            self._fail("locator expects a selector string or a locator")
        return parts + self._filter_parts(self._options(args, 1, "locator"), "locator")

    def _filter(self, args: List[Value]) -> List[str]:
        if len(args) > 1:
            self._fail("filter expects a single options object")
        parts = self._filter_parts(self._options(args, 0, "filter"), "filter", allow_visible=True)
        return parts

    def _filter_parts(self, options: Dict[str, Any], method: str, allow_visible: bool = False) -> List[str]:
        parts: List[str] = []
        for key, value in options.items():
            if key in ("hasText", "hasNotText"):
                if not isinstance(value, (str, RegexLiteral)):
                    self._fail(f"{method} {key} must be a string or regular expression")
                engine = "internal:has-text" if key == "hasText" else "internal:has-not-text"
                parts.append(f"{engine}={escape_for_text_selector(value, False)}")
            elif key in ("has", "hasNot"):
                if not isinstance(value, NestedLocator):
                    self._fail(f"{method} {key} must be a locator")
                engine = "internal:has" if key == "has" else "internal:has-not"
                parts.append(f"{engine}={_js_string(value.selector)}")
            elif key == "visible" and allow_visible:
                if not isinstance(value, bool):
                    self._fail(f"{method} visible must be a boolean")
                parts.append(f"visible={_render(value)}")
            else:
                self._fail(f"{method} does not support option '{key}'")
        return parts

    def _nth(self, args: List[Value]) -> List[str]:
        if len(args) != 1 or isinstance(args[0], bool) or not isinstance(args[0], int):
            self._fail("nth expects a single integer")
        return [f"nth={args[0]}"]

    def _frame_locator(self, args: List[Value]) -> List[str]:
        if len(args) != 1 or not isinstance(args[0], str) or not args[0].strip():
            self._fail("frameLocator expects a selector string")
        return [args[0], "internal:control=enter-frame"]

    def _text_arg(self, args: List[Value], method: str) -> str:
        value, exact = self._text_and_exact(args, method)
        return escape_for_text_selector(value, exact)

    def _attr_arg(self, args: List[Value], method: str) -> str:
        value, exact = self._text_and_exact(args, method)
        return escape_for_attribute_selector(value, exact)

    def _text_and_exact(self, args: List[Value], method: str):
        if not args or len(args) > 2 or not isinstance(args[0], (str, RegexLiteral)):
            self._fail(f"{method} expects a string or regular expression and optional options")
        options = self._options(args, 1, method)
        if set(options) - {"exact"}:
            self._fail(f"{method} only supports the 'exact' option")
        return args[0], bool(options.get("exact", False))

    def _locator_arg(self, args: List[Value], method: str) -> str:
        if len(args) != 1 or not isinstance(args[0], NestedLocator):
            self._fail(f"{method} expects a single locator")
        return args[0].selector

    def _options(self, args: List[Value], index: int, method: str) -> Dict[str, Any]:
        if len(args) <= index:
            return {}
        if not isinstance(args[index], dict):
            self._fail(f"{method} options must be an object")
        return args[index]

    def _no_args(self, args: List[Value], method: str, selector: str) -> List[str]:
        if args:
            self._fail(f"{method} does not take arguments")
        return [selector]

    # ----- scanning helpers -----

    def _skip_ws(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _char(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _peek(self, s: str) -> bool:
        return self.text.startswith(s, self.pos)

    def _expect(self, s: str):
        self._skip_ws()
        if not self._peek(s):
            self._fail(f"expected '{s}'")
        self.pos += len(s)
        self._skip_ws()

    def _ident(self) -> str:
        self._skip_ws()
        m = _IDENT.match(self.text, self.pos)
        if not m:
            self._fail("expected an identifier")
        self.pos = m.end()
        return m.group(0)

    def _fail(self, reason: str):
        raise ParseError(f'Invalid locator "{self.text}": {reason} at position {self.pos}')


def locator_or_selector_as_selector(locator: str, test_id_attribute_name: Optional[str] = None) -> str:
    """
    Resolve a locator expression (or a raw selector) into the selector the automation engine evaluates.
    Same input always produces the same selector. Raises ParseError for malformed locator chains.
    """
    if locator is None or not locator.strip():
        raise ParseError("Locator must not be empty")
    attr = test_id_attribute_name or DEFAULT_TEST_ID_ATTRIBUTE
    if not _CALL_START.match(locator):
        return locator.strip()
    return _LocatorParser(locator.strip(), attr).parse()
