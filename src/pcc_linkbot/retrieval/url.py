import re
from typing import List
from urllib.parse import urlsplit
from ..config import get_settings

settings = get_settings()

# Candidate links to the tender portal, e.g. https://web.pcc.gov.tw/tps/QueryTender/...
PCC_URL_REGEX = re.compile(
    r"(https?://)(?:www\.)?" + re.escape(settings.PCC_HOST) + re.escape(settings.PCC_PATH_PREFIX) + r"[^\s<>)]*",
    re.IGNORECASE,
)

# Sentence punctuation that sticks to the end of a pasted link
TRAILING_PUNCT_REGEX = re.compile(r"[)>\],.;:!?]+$")


def is_allowed_link(url: str) -> bool:
    """
    True when the URL points at the allow-listed host and path prefix.
    Malformed URLs are never allowed.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return False
    if parts.scheme.lower() not in ("http", "https") or not hostname:
        return False
    return (
        hostname.lower() == settings.PCC_HOST.lower()
        and parts.path.lower().startswith(settings.PCC_PATH_PREFIX.lower())
    )


def extract_pcc_links(text: str) -> List[str]:
    """
    Extracts tender portal links from free-form text.
    Strips trailing punctuation, drops anything outside the allow-list,
    deduplicates in first-seen order and caps the result.
    """
    if not text:
        return []

    links = []
    seen = set()

    for match in PCC_URL_REGEX.finditer(text):
        url = TRAILING_PUNCT_REGEX.sub("", match.group(0))

        if not is_allowed_link(url):
            continue
        if url in seen:
            continue

        links.append(url)
        seen.add(url)

        if len(links) >= settings.MAX_LINKS_PER_MESSAGE:
            break

    return links
