"""Title resolution for tender portal links.

Fetches the page, follows an HTML meta-refresh hop if the page has one,
then runs an ordered list of title strategies over the authoritative body.
"""

from typing import Callable, List, Optional, Union

from .extract import extract_labeled_field
from .fetch import FetchError, fetch_page, find_meta_refresh
from .page import Page, as_page
from ..log import get_logger

logger = get_logger("title")

AGENCY_LABELS = ["機關名稱", "機關名稱(機關)"]
SUBJECT_LABELS = ["標案名稱", "標案案名"]


def _first_field(html: str, labels: List[str]) -> Optional[str]:
    for label in labels:
        value = extract_labeled_field(html, label)
        if value:
            return value
    return None


def parse_tender_title(page: Union[str, Page]) -> Optional[str]:
    """'<agency>：<subject>' when both tender fields are present."""
    html = as_page(page).html
    agency = _first_field(html, AGENCY_LABELS)
    subject = _first_field(html, SUBJECT_LABELS)
    if agency and subject:
        return f"{agency}：{subject}"
    return None


def parse_og_title(page: Union[str, Page]) -> Optional[str]:
    tag = as_page(page).soup.find("meta", attrs={"property": "og:title"})
    if tag is None:
        return None
    return (tag.get("content") or "").strip() or None


def parse_document_title(page: Union[str, Page]) -> Optional[str]:
    """Text of <title>, only when it fits on one line."""
    tag = as_page(page).soup.title
    if tag is None or tag.string is None:
        return None
    title = tag.string.strip()
    if "\n" in title or "\r" in title:
        return None
    return title or None


# Most specific first; the generic <title> on tender pages is usually useless
TITLE_STRATEGIES: List[Callable[[Page], Optional[str]]] = [
    parse_tender_title,
    parse_og_title,
    parse_document_title,
]


def parse_title(page: Union[str, Page]) -> Optional[str]:
    page = as_page(page)
    if not page.html:
        return None
    for strategy in TITLE_STRATEGIES:
        title = strategy(page)
        if title:
            return title
    return None


async def resolve_title(url: str) -> Optional[str]:
    """
    Resolves a tender link to a display title.

    Returns None when the page answers with a non-2xx status or no strategy
    finds a title. Raises FetchError when the first fetch fails at the
    transport level or times out. A failing meta-refresh hop falls back to
    the first page's body.
    """
    first = await fetch_page(url)
    if not first.ok:
        return None

    page = Page(first.html)
    redirect = find_meta_refresh(page, url)
    if redirect:
        logger.debug(f"Following meta refresh {url} -> {redirect}")
        try:
            second = await fetch_page(redirect, referer=url)
        except FetchError as e:
            logger.warning(f"Meta refresh target failed, using original page: {e}")
        else:
            if second.ok:
                return parse_title(second.html or "")
            logger.warning(f"Meta refresh target returned {second.status_code}, using original page")

    return parse_title(page)
