"""Slack message payload builders.

Provides functions to build chat.postMessage payloads for tender replies.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pcc_linkbot.rendering.slack_format import format_link, render_reply_to_slack
from pcc_linkbot.schemas.reply import Embed, Reply


def build_embed_blocks(embeds: List[Embed]) -> List[Dict[str, Any]]:
    """
    One section block per embed, rendering the title as a bold link.
    """
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"*{format_link(e)}*"},
        }
        for e in embeds
    ]


def build_reply_payload(
    channel: str,
    reply: Reply,
    thread_ts: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Payload for chat.postMessage.
    When blocks are present Slack only uses `text` for notifications,
    so it carries the same links as plain mrkdwn.
    """
    payload: Dict[str, Any] = {
        "channel": channel,
        "text": render_reply_to_slack(reply),
        "mrkdwn": True,
        "unfurl_links": False,
        "unfurl_media": False,
    }
    if reply.embeds:
        payload["blocks"] = build_embed_blocks(reply.embeds)
    if thread_ts:
        payload["thread_ts"] = thread_ts
    return payload
