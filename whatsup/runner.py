from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from whatsup.checks.probes import Probe, ProbeKind, build_probe
from whatsup.checks.results import CheckResult, CheckSummary, ProbeFailure
from whatsup.config import settings
from whatsup.formatting import summarize
from whatsup.models import WhatsupConfig
from whatsup.notifier import TeamsConfig, TeamsNotifier

logger = logging.getLogger(__name__)


def check_endpoint(endpoint: str, tries: int, probe: Probe) -> CheckResult:
    try:
        probe.probe(endpoint, tries)
    except ProbeFailure as e:
        return CheckResult(endpoint=endpoint, up=False, cause=str(e))
    except Exception as e:
        logger.exception("Probe for %s crashed", endpoint)
        return CheckResult(
            endpoint=endpoint, up=False, cause=f"{e.__class__.__name__}: {e}"
        )
    return CheckResult(endpoint=endpoint, up=True)


def check_all(
    endpoints: Sequence[str],
    tries: int,
    probe: Probe,
    max_workers: int | None = None,
) -> list[CheckResult]:
    """
    Probe every endpoint concurrently and wait for all of them.

    Runs one worker per endpoint unless `max_workers` caps the pool. Results
    come back in completion order, exactly one per endpoint.
    """
    if len(set(endpoints)) != len(endpoints):
        raise ValueError("endpoints must be unique")
    if max_workers is not None and max_workers < 0:
        raise ValueError(f"max workers must be 0 or more, got {max_workers}")
    if not endpoints:
        return []

    workers = len(endpoints)
    if max_workers:
        workers = min(workers, max_workers)

    results: list[CheckResult] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="whatsup-check") as pool:
        futures = {
            pool.submit(check_endpoint, endpoint, tries, probe): endpoint
            for endpoint in endpoints
        }
        for fut in as_completed(futures):
            endpoint = futures[fut]
            try:
                results.append(fut.result())
            except Exception as e:
                logger.exception("Check task for %s failed", endpoint)
                results.append(CheckResult(endpoint=endpoint, up=False, cause=str(e)))

    return results


def check_and_summarize(
    endpoints: Sequence[str],
    tries: int,
    probe_kind: ProbeKind,
    *,
    timeout_s: float | None = None,
    max_workers: int | None = None,
    sort_down: bool = False,
    host_os: str | None = None,
) -> tuple[list[CheckResult], CheckSummary]:
    if timeout_s is None:
        timeout_s = settings.WHATSUP_TIMEOUT_SECONDS
    if timeout_s <= 0:
        raise ValueError(f"probe timeout must be positive, got {timeout_s}")

    probe = build_probe(probe_kind, timeout_s=timeout_s, host_os=host_os)
    results = check_all(endpoints, tries, probe, max_workers=max_workers)
    summary = summarize(results, probe_kind=probe_kind, sort_down=sort_down)
    logger.info(
        "Checked %d endpoints with %s: %d down",
        len(results),
        probe_kind,
        sum(1 for r in results if not r.up),
    )
    return results, summary


def build_notifier(cfg: WhatsupConfig) -> TeamsNotifier | None:
    if settings.WHATSUP_WEBHOOK_TIMEOUT_SECONDS <= 0:
        raise ValueError(
            "webhook timeout must be positive, "
            f"got {settings.WHATSUP_WEBHOOK_TIMEOUT_SECONDS}"
        )
    if not cfg.teams_webhook_url_success or not cfg.teams_webhook_url_failure:
        logger.warning("Teams webhook URLs are not configured; skipping notification")
        return None
    return TeamsNotifier(
        TeamsConfig(
            webhook_url_success=cfg.teams_webhook_url_success,
            webhook_url_failure=cfg.teams_webhook_url_failure,
            timeout_s=settings.WHATSUP_WEBHOOK_TIMEOUT_SECONDS,
        )
    )


def run_once(
    cfg: WhatsupConfig,
    notifier: TeamsNotifier | None = None,
    echo: Callable[[str], None] | None = None,
    host_os: str | None = None,
) -> CheckSummary:
    """
    Check every configured endpoint once and report the summary.

    The summary is echoed before delivery so it stays visible when the
    webhook call fails. NotificationDeliveryError propagates to the caller.
    """
    _, summary = check_and_summarize(
        cfg.endpoints,
        cfg.tries,
        cfg.probe_kind,
        timeout_s=cfg.timeout_s,
        max_workers=cfg.max_workers or settings.WHATSUP_MAX_WORKERS,
        sort_down=cfg.sort_down,
        host_os=host_os,
    )
    if echo is not None:
        echo(summary.message)

    if notifier is not None:
        notifier.send(summary)
    return summary
