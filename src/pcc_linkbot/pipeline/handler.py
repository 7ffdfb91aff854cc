import asyncio
import logging
from typing import List, Optional

from ..config import get_settings
from ..retrieval.url import extract_pcc_links
from ..retrieval.title import resolve_title
from ..schemas.reply import Embed, Reply

logger = logging.getLogger("handler")
settings = get_settings()

ELLIPSIS = "…"


def truncate_title(title: str, max_length: Optional[int] = None) -> str:
    if max_length is None:
        max_length = settings.TITLE_MAX_LENGTH
    if len(title) > max_length:
        return title[: max_length - 1] + ELLIPSIS
    return title


async def build_display_unit(url: str) -> Optional[Embed]:
    """
    Resolves one link into an Embed. Any failure is logged and turns into
    None so sibling links are unaffected.
    """
    try:
        title = await resolve_title(url)
        return Embed(title=truncate_title(title or url), url=url)
    except Exception as e:
        logger.error(f"Failed to fetch title for {url}: {e}")
        return None


async def handle(text: str, author_is_bot: bool) -> Optional[Reply]:
    """
    Builds the reply for one incoming message, or None when there is
    nothing to say. Never raises.
    """
    if author_is_bot:
        return None

    try:
        links = extract_pcc_links(text)
        if not links:
            return None

        logger.info(f"Resolving {len(links)} tender link(s)")
        results = await asyncio.gather(*(build_display_unit(url) for url in links))
        embeds: List[Embed] = [e for e in results if e is not None]

        if not embeds:
            logger.info("No titles resolved, not replying")
            return None
        return Reply(embeds=embeds)
    except Exception:
        logger.exception("Error handling message")
        return None
