"""HTTP fetching for tender pages.

Each fetch gets its own client and a hard wall-clock bound, so a slow page
only ever cancels itself. No retries: a failed fetch just yields no title.
"""

import asyncio
import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urljoin

import httpx
from .page import Page, as_page
from ..config import get_settings
from ..log import get_logger

settings = get_settings()
logger = get_logger("fetch")

DEFAULT_REFERER = "https://web.pcc.gov.tw/tps/"

REFRESH_EQUIV_REGEX = re.compile(r"^\s*refresh\s*$", re.IGNORECASE)
# "5; url=/tps/x", "0;URL='/tps/x'"
REFRESH_CONTENT_REGEX = re.compile(r"^\s*\d+\s*;\s*url\s*=\s*(.+?)\s*$", re.IGNORECASE)


class FetchError(Exception):
    """Transport failure or timeout while fetching a page."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


@dataclass
class FetchResult:
    url: str
    ok: bool
    status_code: Optional[int] = None
    html: Optional[str] = None


def build_headers(referer: str) -> dict:
    return {
        "User-Agent": settings.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "zh-TW,zh;q=0.9,en;q=0.8",
        "Referer": referer,
    }


async def _get(url: str, referer: str) -> FetchResult:
    async with httpx.AsyncClient(follow_redirects=True, headers=build_headers(referer)) as client:
        resp = await client.get(url)
        if not resp.is_success:
            logger.info(f"Non-success status {resp.status_code} for {url}")
            return FetchResult(url=url, ok=False, status_code=resp.status_code)
        return FetchResult(url=url, ok=True, status_code=resp.status_code, html=resp.text)


async def fetch_page(url: str, referer: str = DEFAULT_REFERER, timeout: Optional[float] = None) -> FetchResult:
    """
    GETs a page within `timeout` seconds (FETCH_TIMEOUT_SECONDS by default).
    Non-2xx responses come back as FetchResult(ok=False).
    Raises FetchError on transport errors and timeouts.
    """
    if timeout is None:
        timeout = settings.FETCH_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(_get(url, referer), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise FetchError(url, f"timed out after {timeout}s") from e
    except httpx.HTTPError as e:
        raise FetchError(url, f"{type(e).__name__}: {e}") from e


def find_meta_refresh(page: Union[str, Page], base_url: str) -> Optional[str]:
    """
    Returns the absolute target of a <meta http-equiv="refresh"> redirect, or None.
    """
    tag = as_page(page).soup.find("meta", attrs={"http-equiv": REFRESH_EQUIV_REGEX})
    if tag is None:
        return None
    m = REFRESH_CONTENT_REGEX.match(tag.get("content") or "")
    if not m:
        return None
    target = m.group(1).strip("'\" ")
    if not target:
        return None
    try:
        return urljoin(base_url, target)
    except ValueError:
        return None
