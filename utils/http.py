"""HTTP helper for fetching JSON from APIs."""

from typing import Any

import requests

from utils.config import Config
from utils.logging import get_logger

logger = get_logger("utils.http")


class HttpError(Exception):
    """Raised when a request fails, returns a non-200 status, or yields invalid JSON."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def fetch_json(
    url: str,
    method: str = "get",
    timeout: float | None = None,
    **kwargs: Any,
) -> Any:
    """Fetch JSON from a URL.

    Returns the parsed JSON body. Raises HttpError on any failure.
    """
    if timeout is None:
        timeout = Config.get_request_timeout()
    try:
        resp = requests.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        logger.error("Request failed for %s: %s", url, e)
        raise HttpError(f"Request failed for {url}: {e}") from e

    if resp.status_code != 200:
        logger.error("HTTP %s for %s: %s", resp.status_code, url, resp.text[:200])
        raise HttpError(f"HTTP {resp.status_code} for {url}", status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        logger.error("Invalid JSON from %s: %s", url, e)
        raise HttpError(f"Invalid JSON from {url}", status_code=resp.status_code) from e
