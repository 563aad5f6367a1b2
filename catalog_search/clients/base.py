"""Shared HTTP client utilities with error handling."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from catalog_search.exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": "catalog-search",
    "Accept": "application/json, text/plain, */*",
}

_shared_session: Optional[requests.Session] = None

_BODY_EXCERPT_LIMIT = 200


def _get_shared_session() -> requests.Session:
    """Return a shared :class:`requests.Session` with default headers."""

    global _shared_session
    if _shared_session is None:
        _shared_session = requests.Session()
        _shared_session.headers.update(DEFAULT_HEADERS)
    else:
        for key, value in DEFAULT_HEADERS.items():
            _shared_session.headers.setdefault(key, value)
    return _shared_session


def _sanitize_excerpt(text: str, max_length: int) -> str:
    cleaned = " ".join(text.split())
    return cleaned[:max_length]


def _get_body_excerpt(response: requests.Response) -> Optional[str]:
    try:
        body_text = response.text
    except Exception:
        return None

    if not body_text:
        return None

    return _sanitize_excerpt(body_text, _BODY_EXCERPT_LIMIT)


class BaseHttpClient:
    """Base class providing shared HTTP behavior for catalog clients.

    Requests are sent exactly once; transport failures and non-success
    statuses surface as :class:`NetworkError` so callers can fall back.
    """

    BASE_URL = ""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
    ) -> None:
        self.session = session or _get_shared_session()
        for key, value in DEFAULT_HEADERS.items():
            self.session.headers.setdefault(key, value)
        self.user_agent = user_agent
        self.base_url = base_url if base_url is not None else self.BASE_URL
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}{path}"
        if self.user_agent:
            # Applied per request; the session may be shared with other clients.
            headers = {"User-Agent": self.user_agent, **(headers or {})}
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self.session.request(
                method, url, params=params, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Request failed: {exc}") from exc

        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> requests.Response:
        status = response.status_code
        if 200 <= status < 300:
            return response

        excerpt = _get_body_excerpt(response)
        message = f"HTTP error status {status}"
        if excerpt:
            message = f"{message}: {excerpt}"
        raise NetworkError(message, status=status)
