from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from whatsup.checks.results import CheckSummary

logger = logging.getLogger(__name__)

CARD_STYLES = {
    True: ("#0ac404", "👍 Endpoints Up"),
    False: ("#e81515", "🔥 ENDPOINTS DOWN"),
}


class NotificationDeliveryError(RuntimeError):
    pass


@dataclass
class TeamsConfig:
    webhook_url_success: str
    webhook_url_failure: str
    timeout_s: float = 10


class TeamsNotifier:
    def __init__(self, cfg: TeamsConfig) -> None:
        self.cfg = cfg

    def build_card(self, summary: CheckSummary) -> dict[str, Any]:
        color, title = CARD_STYLES[summary.all_up]
        return {
            "@type": "MessageCard",
            "@context": "http://schema.org/extensions",
            "summary": title,
            "themeColor": color,
            "title": title,
            "text": summary.message,
        }

    def webhook_url(self, summary: CheckSummary) -> str:
        if summary.all_up:
            return self.cfg.webhook_url_success
        return self.cfg.webhook_url_failure

    def send(self, summary: CheckSummary) -> None:
        url = self.webhook_url(summary)
        try:
            resp = requests.post(
                url, json=self.build_card(summary), timeout=self.cfg.timeout_s
            )
        except requests.RequestException as exc:
            raise NotificationDeliveryError(
                f"Failed to reach Teams webhook: {exc.__class__.__name__}: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise NotificationDeliveryError(
                f"failed to send message with status code: {resp.status_code}"
            )
        logger.info("Summary delivered to Teams (all_up=%s)", summary.all_up)
