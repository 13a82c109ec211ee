from __future__ import annotations

from typing import Literal, Protocol

from whatsup.checks.http_check import HttpsProbe
from whatsup.checks.ping_check import PingProbe, detect_host_os

ProbeKind = Literal["ping", "https"]

PROBE_METHODS: dict[str, str] = {
    "ping": "ping",
    "https": "HTTPS GET",
}


class Probe(Protocol):
    kind: str

    def probe(self, endpoint: str, tries: int) -> None:
        """Raise ProbeFailure unless every one of `tries` attempts succeeds."""
        ...


def build_probe(kind: ProbeKind, timeout_s: float, host_os: str | None = None) -> Probe:
    """
    Select the liveness strategy for a run.

    Building a ping probe resolves the host OS first, so an unsupported
    platform fails here, before anything has been dispatched.
    """
    if kind == "https":
        return HttpsProbe(timeout_s=timeout_s)
    if kind == "ping":
        return PingProbe(host_os=host_os or detect_host_os(), timeout_s=timeout_s)
    raise ValueError(f"Unknown probe kind: {kind}")
