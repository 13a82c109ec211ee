from __future__ import annotations

import logging
import math
import os
import platform
import subprocess

from whatsup.checks.results import ProbeFailure

logger = logging.getLogger(__name__)

SUPPORTED_HOST_OS = ("darwin", "linux", "windows")

SUCCESS_MARKERS = {
    "linux": "{tries} packets transmitted, {tries} received",
    "darwin": "{tries} packets transmitted, {tries} packets received",
    "windows": "    Packets: Sent = {tries}, Received = {tries}",
}


class UnsupportedPlatformError(RuntimeError):
    pass


def detect_host_os(system: str | None = None) -> str:
    host_os = (system if system is not None else platform.system()).lower()
    if host_os not in SUPPORTED_HOST_OS:
        raise UnsupportedPlatformError(f"untested OS: {host_os}")
    return host_os


def success_marker(host_os: str, tries: int) -> str:
    return SUCCESS_MARKERS[host_os].format(tries=tries)


def build_ping_command(host_os: str, endpoint: str, tries: int, timeout_s: float) -> list[str]:
    if host_os == "windows":
        return ["ping", "-n", str(tries), "-w", str(int(timeout_s * 1000)), endpoint]
    if host_os == "darwin":
        return ["ping", "-c", str(tries), "-W", str(int(timeout_s * 1000)), endpoint]
    # iputils only takes whole seconds for -W on older releases
    return ["ping", "-c", str(tries), "-W", str(max(1, math.ceil(timeout_s))), endpoint]


class PingProbe:
    kind = "ping"

    def __init__(self, host_os: str, timeout_s: float) -> None:
        self.host_os = detect_host_os(host_os)
        self.timeout_s = timeout_s

    def deadline_s(self, tries: int) -> float:
        # ping waits ~1s between echo requests on every supported OS
        return tries * (self.timeout_s + 1) + self.timeout_s

    def probe(self, endpoint: str, tries: int) -> None:
        if tries == 0:
            return

        cmd = build_ping_command(self.host_os, endpoint, tries, self.timeout_s)
        env = None
        if self.host_os != "windows":
            # the success markers are the untranslated messages
            env = {**os.environ, "LC_ALL": "C"}
        try:
            # localized or OEM codepage output must not fail decoding
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                env=env,
                timeout=self.deadline_s(tries),
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeFailure(f"{endpoint} ping timed out after {e.timeout:g}s") from e
        except OSError as e:
            raise ProbeFailure(f"could not run ping for {endpoint}: {e}") from e

        logger.debug("%s exited %s", " ".join(cmd), proc.returncode)

        if proc.returncode != 0:
            # ping exits non-zero on packet loss as well as on unknown hosts
            detail = (proc.stderr or "").strip()
            cause = f"{endpoint} ping exited with status {proc.returncode}"
            if detail:
                cause = f"{cause}: {detail}"
            raise ProbeFailure(cause)

        if success_marker(self.host_os, tries) not in (proc.stdout or ""):
            raise ProbeFailure(f"{endpoint} failed to return all packets")
