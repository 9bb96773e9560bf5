from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

import requests

from .exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)

_HEADERS = {"Accept": "application/json"}


def _redact(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k == "apiKey" else v) for k, v in params.items()}


def get_json(url: str, params: Mapping[str, Any], *, timeout: float, check_status: bool = True) -> Any:
    """
    GET `url` with query `params` and return the decoded JSON body.

    Raises FetchError on transport failures and, when `check_status` is set, on
    non-success HTTP statuses (message carries code and reason). Raises ParseError
    when the body is not JSON.
    """
    logger.info("GET %s params=%s", url, _redact(params))
    try:
        resp = requests.get(url, params=dict(params), headers=_HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch news: {e}") from e

    logger.debug("Response status: %s %s", resp.status_code, resp.reason)
    if check_status and not resp.ok:
        logger.warning("API error response from %s: %s", url, resp.text)
        raise FetchError(
            f"Failed to fetch news: {resp.status_code} {resp.reason}",
            status_code=resp.status_code,
            reason=resp.reason,
        )

    try:
        return resp.json()
    except ValueError as e:
        raise ParseError(f"Response from {url} is not valid JSON ({e})") from e
