from __future__ import annotations

from typing import Iterable

from whatsup.checks.probes import PROBE_METHODS
from whatsup.checks.results import CheckResult, CheckSummary


def summarize(
    results: Iterable[CheckResult],
    probe_kind: str | None = None,
    sort_down: bool = False,
) -> CheckSummary:
    """
    Reduce one run's results to a verdict and a report message.

    Down endpoints are listed in the order they were received unless
    `sort_down` is set, in which case they are sorted by endpoint.
    """
    results = list(results)
    down = [r for r in results if not r.up]

    if not down:
        msg = f"All {len(results)} endpoints are up."
        if probe_kind is not None:
            msg += f" Checked using {PROBE_METHODS.get(probe_kind, probe_kind)}."
        return CheckSummary(all_up=True, message=msg)

    if sort_down:
        down.sort(key=lambda r: r.endpoint)

    # Teams renders markdown and needs blank lines to break paragraphs
    lines = [f"**{len(down)} endpoints are down!**\n\n\n\n"]
    for r in down:
        lines.append(f"Endpoint: {r.endpoint} | Error: {r.cause} \n\n")
    return CheckSummary(all_up=False, message="".join(lines))
