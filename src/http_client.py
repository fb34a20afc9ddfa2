import logging
import time
from typing import Any

import requests

from config import HTTP_BACKOFF_S, HTTP_RETRIES, HTTP_TIMEOUT_S

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


def _is_retryable(exc: Exception) -> bool:
    if isinstance(exc, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    if isinstance(exc, requests.exceptions.HTTPError) and exc.response is not None:
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return False


def get_json(
    session: Any,
    url: str,
    *,
    timeout: float = HTTP_TIMEOUT_S,
    retries: int = HTTP_RETRIES,
    backoff_seconds: float = HTTP_BACKOFF_S,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Timeouts, connection errors and retryable status codes are retried up to
    ``retries`` times with exponential backoff. Anything else, and the last
    failed attempt, is raised to the caller.
    """
    attempts = max(0, int(retries)) + 1

    for attempt in range(attempts):
        try:
            response = session.get(url, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            if not _is_retryable(e) or attempt >= attempts - 1:
                raise
            delay = max(0.0, backoff_seconds) * (2 ** attempt)
            logger.warning("GET %s failed (%s), retry %d/%d in %.2fs", url, e, attempt + 1, attempts - 1, delay)
            if delay > 0:
                time.sleep(delay)
