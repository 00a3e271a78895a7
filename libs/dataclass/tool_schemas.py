"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Tool Input Schemas
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class GenerateTestParams(BaseModel):
    name: str = Field(min_length=1, description="The name of the test")
    description: str = Field(description="The description of the test")
    steps: List[str] = Field(description="The steps of the test")


class ValidateLocatorParams(BaseModel):
    locator: str = Field(description="Locator to validate. ARIA locators are prefered, "
                                     "e.g. \"getByRole('button', { name: 'Sign in' })\". "
                                     "Do not include the \"page.\" prefix.")
    element: str = Field(description="Human-readable element description used to obtain permission "
                                     "to interact with the element")
    ref: str = Field(description="Exact target element reference from the page snapshot that will be used "
                                 "to validate the locator")
    testIdAttributeName: Optional[str] = Field(default=None,
                                               description="Optional test ID attribute name to use for locator "
                                                           "generation (by default, \"data-testid\" is used)")


class NavigateParams(BaseModel):
    url: str = Field(min_length=1, description="The URL to navigate to")


class SnapshotParams(BaseModel):
    pass
