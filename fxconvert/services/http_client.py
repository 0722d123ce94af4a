from __future__ import annotations

"""Minimal JSON-over-HTTP GET built on stdlib urllib.

One attempt per call: callers decide what a failure means. Transport problems
and HTTP error statuses raise ``HttpError``; a response that arrives but is
not JSON raises ``InvalidJsonError`` so the two can be told apart.
"""
import json
import logging
import urllib.error
import urllib.request
from typing import Any

logger = logging.getLogger("fxconvert.http")

USER_AGENT = "fxconvert/0.1"


class HttpError(Exception):
    pass


class InvalidJsonError(HttpError):
    pass


def get_json(url: str, *, timeout: float = 5.0) -> Any:
    request = urllib.request.Request(
        url, headers={"Accept": "application/json", "User-Agent": USER_AGENT}
    )
    logger.debug("GET %s", url)
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
            if resp.status >= 400:
                raise HttpError(f"HTTP {resp.status} for {url}")
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise HttpError(f"HTTP {e.code} for {url}") from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise HttpError(f"Failed to fetch {url}: {e}") from e
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidJsonError(f"Invalid JSON from {url}: {e}") from e
