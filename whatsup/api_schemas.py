from __future__ import annotations

from pydantic import BaseModel, Field

from whatsup.checks.probes import ProbeKind


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    config_path: str
    endpoints: int = Field(ge=0, description="Number of configured endpoints")
    tries: int = Field(ge=0)
    probe: ProbeKind
    timeout_s: float = Field(gt=0)
    max_workers: int | None = Field(
        default=None, description="Worker pool bound, null for one worker per endpoint"
    )
    notifications: bool = Field(description="Whether both Teams webhooks are set")


class CheckResultResponse(BaseModel):
    endpoint: str
    up: bool
    cause: str | None = None


class CheckRunResponse(BaseModel):
    all_up: bool
    message: str
    probe: ProbeKind
    results: list[CheckResultResponse]
    notified: bool
