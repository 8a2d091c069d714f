from __future__ import annotations

from pathlib import Path
import yaml
from api_smoke.config import settings
from api_smoke.models import Registry, SmokeSuite

def load_registry(path: Path | None = None) -> Registry:
    path = Path(path or settings.SMOKE_CHECKS_PATH)
    if not path.exists():
        raise FileNotFoundError(f"Missing smoke checks file at {path}")

    data = yaml.safe_load(path.read_text()) or {}
    reg = Registry.model_validate(data)

    # Ensure unique names / ids
    seen_suites = set()
    for s in reg.suites:
        if s.name in seen_suites:
            raise ValueError(f"Duplicate suite name: {s.name}")
        seen_suites.add(s.name)

        seen_checks = set()
        for c in s.checks:
            if c.id in seen_checks:
                raise ValueError(f"Duplicate check id in suite {s.name}: {c.id}")
            seen_checks.add(c.id)

    return reg

def get_suite(reg: Registry, name: str) -> SmokeSuite:
    for s in reg.suites:
        if s.name == name:
            return s
    raise KeyError(name)
