from __future__ import annotations

from typing import Literal, List
from pydantic import BaseModel, Field

ExpectType = Literal["json", "raw"]

class SmokeCheck(BaseModel):
    id: str = Field(..., min_length=1)
    path: str = Field(..., pattern=r"^/")
    expect: ExpectType = "json"
    show_items: int = Field(default=1, ge=0)
    label: str | None = None

class SmokeSuite(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    checks: List[SmokeCheck] = Field(..., min_length=1)

class Registry(BaseModel):
    suites: List[SmokeSuite]
