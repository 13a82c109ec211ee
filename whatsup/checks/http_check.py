from __future__ import annotations

import logging

import requests

from whatsup.checks.results import ProbeFailure

logger = logging.getLogger(__name__)

# 403 still means the server is up and answering.
OK_STATUS_CODES = frozenset({200, 403})


def attempt_https(
    endpoint: str, timeout_s: float, connect_timeout_s: float | None = None
) -> bool:
    url = f"https://{endpoint}"
    connect_timeout = timeout_s if connect_timeout_s is None else connect_timeout_s
    try:
        r = requests.get(url, timeout=(connect_timeout, timeout_s))
    except requests.RequestException as e:
        logger.debug("GET %s failed: %s", url, e)
        return False
    if r.status_code not in OK_STATUS_CODES:
        logger.debug("GET %s returned HTTP %s", url, r.status_code)
        return False
    return True


class HttpsProbe:
    kind = "https"

    def __init__(self, timeout_s: float, connect_timeout_s: float | None = None) -> None:
        self.timeout_s = timeout_s
        self.connect_timeout_s = connect_timeout_s

    def probe(self, endpoint: str, tries: int) -> None:
        successes = 0
        for attempt in range(1, tries + 1):
            if attempt_https(endpoint, self.timeout_s, self.connect_timeout_s):
                successes += 1
            logger.debug("%s attempt %d/%d: %d ok so far", endpoint, attempt, tries, successes)

        if successes != tries:
            raise ProbeFailure(
                f"{endpoint} was not up for all {tries} attempts "
                f"({successes}/{tries} succeeded)"
            )
