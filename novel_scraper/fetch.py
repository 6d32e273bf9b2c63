"""HTTP fetching: one GET per page with a fixed browser User-Agent."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import Settings, get_settings
from .models import Page

logger = logging.getLogger(__name__)

RETRY_STATUS = frozenset({408, 429, 500, 502, 503, 504})


class RetryableStatusError(httpx.HTTPStatusError):
    """Raised for statuses worth another attempt."""


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.status_code in RETRY_STATUS:
        raise RetryableStatusError(
            f"Retryable HTTP {resp.status_code} for {resp.request.url}",
            request=resp.request,
            response=resp,
        )
    if resp.status_code >= 400:
        raise httpx.HTTPStatusError(
            f"HTTP {resp.status_code} for {resp.request.url}",
            request=resp.request,
            response=resp,
        )


def _client(settings: Settings) -> httpx.Client:
    return httpx.Client(
        timeout=settings.timeout_total,
        headers={"user-agent": settings.user_agent},
    )


def _retry_decorator(settings: Settings):
    return retry(
        stop=stop_after_attempt(max(1, settings.max_attempts)),
        wait=wait_exponential(
            multiplier=settings.backoff_multiplier,
            min=settings.backoff_min,
            max=settings.backoff_max,
        ),
        retry=retry_if_exception_type((httpx.TransportError, RetryableStatusError)),
        reraise=True,
    )


def fetch_page(
    url: str,
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> Page:
    """Fetch a URL and return its full body.

    Args:
        url: The URL to fetch.
        settings: Scraper settings. Uses defaults if not provided.
        client: An open client to reuse; a short-lived one is created
            per attempt otherwise.

    Returns:
        Page with the decoded response text.

    Raises:
        httpx.HTTPStatusError: On HTTP status >= 400.
        httpx.TransportError: On network failure once attempts are exhausted.
    """
    s = settings or get_settings()

    @_retry_decorator(s)
    def _do_request() -> httpx.Response:
        if client is not None:
            resp = client.get(url, headers={"user-agent": s.user_agent})
        else:
            with _client(s) as c:
                resp = c.get(url)
        _raise_for_status(resp)
        return resp

    logger.debug("GET %s", url)
    resp = _do_request()
    logger.debug("Fetched %s (HTTP %d, %d bytes)", url, resp.status_code, len(resp.content))
    return Page(url=url, html=resp.text, status=resp.status_code)
