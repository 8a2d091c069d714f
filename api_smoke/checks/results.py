from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CheckResult:
    ok: bool
    latency_ms: int
    error: str | None = None


@dataclass
class EndpointCheckResult:
    path: str
    status_code: int | None
    body: Any = None
    parsed: bool = False  # body holds decoded JSON rather than raw text
    latency_ms: int = 0
    error: str | None = None


@dataclass
class DatabaseCheckResult(CheckResult):
    tables: list[str] = field(default_factory=list)
