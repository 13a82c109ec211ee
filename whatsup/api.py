import logging
from dataclasses import asdict

import yaml
from fastapi import FastAPI, HTTPException, Query

from whatsup.api_schemas import CheckRunResponse, ConfigResponse, HealthResponse
from whatsup.checks.ping_check import UnsupportedPlatformError
from whatsup.config import settings
from whatsup.notifier import NotificationDeliveryError
from whatsup.registry import load_config
from whatsup.runner import build_notifier, check_and_summarize

logger = logging.getLogger(__name__)

app = FastAPI(
    title="whatsup",
    version="1.0.0",
    description=(
        "Endpoint liveness checker that loads endpoints from a config file, "
        "pings or GETs them in parallel, and posts an up/down summary to Teams."
    ),
)


def _load_config_or_400():
    try:
        return load_config()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret config values. Webhook URLs are never exposed.",
)
def config():
    cfg = _load_config_or_400()
    return {
        "config_path": settings.WHATSUP_CONFIG_PATH,
        "endpoints": len(cfg.endpoints),
        "tries": cfg.tries,
        "probe": cfg.probe_kind,
        "timeout_s": cfg.timeout_s or settings.WHATSUP_TIMEOUT_SECONDS,
        "max_workers": cfg.max_workers or settings.WHATSUP_MAX_WORKERS or None,
        "notifications": bool(
            cfg.teams_webhook_url_success and cfg.teams_webhook_url_failure
        ),
    }


@app.post(
    "/api/checks/run",
    response_model=CheckRunResponse,
    tags=["checks"],
    summary="Run Checks",
    description=(
        "Checks every configured endpoint once and returns the summary. "
        "With notify=true the summary is also posted to Teams."
    ),
)
def run_checks(
    notify: bool = Query(False, description="Post the summary to the Teams webhook"),
):
    cfg = _load_config_or_400()

    try:
        results, summary = check_and_summarize(
            cfg.endpoints,
            cfg.tries,
            cfg.probe_kind,
            timeout_s=cfg.timeout_s,
            max_workers=cfg.max_workers or settings.WHATSUP_MAX_WORKERS,
            sort_down=cfg.sort_down,
        )
        notifier = build_notifier(cfg) if notify else None
    except (UnsupportedPlatformError, ValueError) as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    notified = False
    if notifier is not None:
        try:
            notifier.send(summary)
        except NotificationDeliveryError as exc:
            logger.error("Summary delivery failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        notified = True

    return {
        "all_up": summary.all_up,
        "message": summary.message,
        "probe": cfg.probe_kind,
        "results": [asdict(r) for r in results],
        "notified": notified,
    }
