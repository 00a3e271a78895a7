"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Tool Definition Structures
"""
from dataclasses import dataclass
from typing import Awaitable, Callable, Literal, Type

from pydantic import BaseModel

from libs.dataclass.conceptual_objects import ToolResult

ToolType = Literal["readOnly", "destructive"]


@dataclass
class ToolSchema:
    name: str
    title: str
    description: str
    inputSchema: Type[BaseModel]
    type: ToolType = "readOnly"


@dataclass
class Tool:
    capability: str
    schema: ToolSchema
    handle: Callable[..., Awaitable[ToolResult]]  # (context, params) -> ToolResult
