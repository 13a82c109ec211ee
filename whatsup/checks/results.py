from __future__ import annotations

from dataclasses import dataclass


class ProbeFailure(RuntimeError):
    """An endpoint did not pass its liveness probe."""


@dataclass(frozen=True)
class CheckResult:
    endpoint: str
    up: bool
    cause: str | None = None


@dataclass(frozen=True)
class CheckSummary:
    all_up: bool
    message: str
