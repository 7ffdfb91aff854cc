"""Slack mrkdwn formatting for tender replies.

Renders a Reply as mrkdwn text: one "<url|title>" link per embed.
"""

from __future__ import annotations

from typing import List

from pcc_linkbot.schemas.reply import Embed, Reply


def escape_mrkdwn(text: str) -> str:
    """
    Escape the three characters Slack treats as control characters.
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_link(embed: Embed) -> str:
    # '|' would end the url part, titles may contain it
    title = escape_mrkdwn(embed.title).replace("|", "¦")
    return f"<{embed.url}|{title}>"


def _bullet_list(lines: List[str]) -> str:
    return "\n".join(f"• {s}" for s in lines if s)


def render_reply_to_slack(reply: Reply) -> str:
    """
    Plain content first (if any), then one bullet per embed.
    """
    parts: List[str] = []
    if reply.content:
        parts.append(escape_mrkdwn(reply.content))
    if reply.embeds:
        parts.append(_bullet_list([format_link(e) for e in reply.embeds]))
    return "\n\n".join(parts)
