from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from whatsup.checks.probes import ProbeKind


class WhatsupConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    teams_webhook_url_success: Optional[str] = Field(
        default=None, alias="teamsWebhookUrlSuccess"
    )
    teams_webhook_url_failure: Optional[str] = Field(
        default=None, alias="teamsWebhookUrlFailure"
    )
    endpoints: List[str] = Field(default_factory=list)
    tries: int = Field(default=1, ge=0)
    https: Optional[bool] = None
    os_ping: Optional[bool] = Field(default=None, alias="osPing")
    timeout_s: Optional[float] = Field(default=None, gt=0, alias="timeoutSeconds")
    max_workers: Optional[int] = Field(default=None, ge=1, alias="maxWorkers")
    sort_down: bool = Field(default=False, alias="sortDownEndpoints")

    @field_validator("endpoints")
    @classmethod
    def _strip_endpoints(cls, v: List[str]) -> List[str]:
        out = [e.strip() for e in v]
        if any(not e for e in out):
            raise ValueError("endpoints must not contain empty entries")

        # Each endpoint must produce exactly one result per run
        seen = set()
        for e in out:
            if e in seen:
                raise ValueError(f"Duplicate endpoint: {e}")
            seen.add(e)
        return out

    @property
    def probe_kind(self) -> ProbeKind:
        if self.os_ping is not None:
            return "ping" if self.os_ping else "https"
        return "https" if self.https else "ping"
