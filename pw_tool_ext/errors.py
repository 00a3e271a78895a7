"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Tool Error Taxonomy
"""


class ToolError(Exception):
    """Base for failures that stop a tool invocation. Surfaced to the caller, never retried."""


class ParseError(ToolError):
    """Locator string is not valid in the accepted locator grammar."""


class PreconditionError(ToolError):
    """Required prior state (open page, captured snapshot) is missing."""


class ResolutionError(ToolError):
    """The automation engine could not evaluate a selector or a snapshot reference."""


class ToolInputError(ToolError):
    """Tool arguments do not match the tool input schema."""
