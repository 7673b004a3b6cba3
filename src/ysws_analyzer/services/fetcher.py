"""
Network checks for submitted URLs.

* ``check_url``      – reachability check, never raises
* ``fetch_content``  – capped text snapshot of a page, ``None`` on failure

Both take a shared ``httpx.AsyncClient`` so one request's checks reuse the
same connection pool; ``build_client`` creates one with the configured
headers.
"""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

import httpx

from ..core.config import settings
from ..core.logging import get_logger

logger = get_logger(__name__)

TRUNCATION_MARKER = "\n... [content truncated]"


def build_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the async client used for URL checks and fetches."""
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        transport=transport,
    )


def is_media_url(url: str, extensions: tuple[str, ...] | None = None) -> bool:
    """Return True when the URL path ends in a known media extension."""
    extensions = extensions if extensions is not None else settings.media_extensions
    path = urlsplit(url).path.lower()
    return any(path.endswith(f".{ext}") for ext in extensions)


def media_placeholder(url: str) -> str:
    return f"[Media file: {url}]"


def truncate_content(text: str, limit: int | None = None) -> str:
    """
    Cap ``text`` at ``limit`` characters, preferring a line boundary.

    The cut is moved back to the last newline inside the first ``limit``
    characters when there is one; the marker is appended after the cut.
    """
    limit = limit if limit is not None else settings.max_content_chars
    if len(text) <= limit:
        return text

    truncated = text[:limit]
    last_newline = truncated.rfind("\n")
    if last_newline > 0:
        truncated = truncated[:last_newline]
    return truncated + TRUNCATION_MARKER


async def check_url(url: str, client: httpx.AsyncClient) -> bool:
    """
    Request ``url`` once and report whether it answered with a 2xx status.

    Redirects are followed; the body is not downloaded. The whole check,
    redirects included, is cut off after ``url_check_timeout_seconds``.
    """
    timeout = settings.url_check_timeout_seconds
    try:
        status = await asyncio.wait_for(_response_status(url, client, timeout), timeout=timeout)
    except asyncio.TimeoutError:
        logger.debug("url_check_timed_out", url=url, timeout=timeout)
        return False
    except Exception as e:  # DNS, TLS, malformed URLs
        logger.debug("url_check_failed", url=url, error=str(e))
        return False

    reachable = 200 <= status < 300
    if not reachable:
        logger.debug("url_check_rejected", url=url, status=status)
    return reachable


async def _response_status(url: str, client: httpx.AsyncClient, timeout: float) -> int:
    async with client.stream("GET", url, timeout=timeout) as response:
        return response.status_code


async def fetch_content(url: str, client: httpx.AsyncClient) -> str | None:
    """
    Fetch a text snapshot of ``url`` for the classification prompt.

    Returns:
        The (possibly truncated) body text, a media placeholder for media
        URLs, or ``None`` when the page could not be retrieved.
    """
    if is_media_url(url):
        return media_placeholder(url)

    timeout = settings.fetch_timeout_seconds
    try:
        response = await asyncio.wait_for(
            client.get(url, timeout=timeout),
            timeout=timeout,
        )
        if not response.is_success:
            logger.info("fetch_rejected", url=url, status=response.status_code)
            return None
        text = response.text
    except asyncio.TimeoutError:
        logger.warning("fetch_timed_out", url=url, timeout=timeout)
        return None
    except Exception as e:
        logger.warning("fetch_failed", url=url, error=str(e))
        return None

    return truncate_content(text)
