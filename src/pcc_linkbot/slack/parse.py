import re
from typing import Dict, Any, Optional
from ..config import get_settings
from ..schemas.reply import IncomingMessage

settings = get_settings()

# <https://example.com|label> or <https://example.com>
SLACK_LINK_REGEX = re.compile(r"<(https?://[^|>\s]+)(?:\|[^>]*)?>")

IGNORED_SUBTYPES = ["message_changed", "message_deleted", "channel_join", "channel_leave"]

def parse_event(event: Dict[str, Any]) -> Optional[IncomingMessage]:
    """
    Parse a Slack message event.
    Returns an IncomingMessage if relevant, else None.
    Bot authorship is reported on the message, not filtered here.
    """
    # 1. Filter by Channel (only when one is configured)
    channel = event.get("channel")
    if settings.WATCH_CHANNEL_ID and channel != settings.WATCH_CHANNEL_ID:
        return None

    # 2. Ignore edits/deletions and membership notices
    if event.get("subtype") in IGNORED_SUBTYPES:
        return None

    # 3. Filter empty text (e.g. file-only posts)
    text = event.get("text", "")
    if not text or not channel or not event.get("ts"):
        return None

    text = unwrap_slack_links(text)
    author_is_bot = event.get("subtype") == "bot_message" or bool(event.get("bot_id"))

    return IncomingMessage(
        channel=channel,
        ts=event["ts"],
        thread_ts=event.get("thread_ts"),
        user=event.get("user"),
        text=text,
        author_is_bot=author_is_bot,
    )

def unwrap_slack_links(text: str) -> str:
    """
    Turns Slack's link markup back into plain text: <url|label> becomes url,
    and the &amp; / &lt; / &gt; escapes Slack applies to message text are undone.
    """
    text = SLACK_LINK_REGEX.sub(r"\1", text)
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")
