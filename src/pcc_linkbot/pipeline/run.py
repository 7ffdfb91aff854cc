import asyncio
import logging
from typing import Any, Dict

from .handler import handle
from ..slack.client import slack_client
from ..slack.parse import parse_event
from ..slack.post_blocks import build_reply_payload

logger = logging.getLogger("pipeline")


async def process_event(event: Dict[str, Any]) -> bool:
    """
    Handles one Slack message event end to end and posts the reply in the
    message's thread. Returns True when a reply was posted.
    Errors are logged, never raised to the event loop that called us.
    """
    try:
        message = parse_event(event)
        if message is None:
            logger.debug(f"Ignoring event {event.get('ts')}")
            return False

        reply = await handle(message.text, message.author_is_bot)
        if reply is None:
            return False

        payload = build_reply_payload(
            channel=message.channel,
            reply=reply,
            thread_ts=message.thread_ts or message.ts,
        )
        await asyncio.to_thread(slack_client.post_payload, payload)
        logger.info(f"Replied to {message.channel}/{message.ts} with {len(reply.embeds)} link(s)")
        return True
    except Exception:
        logger.exception("Error processing message event")
        return False


def process_event_sync(event: Dict[str, Any]) -> bool:
    """Entry point for sync listeners (Bolt runs them in worker threads)."""
    return asyncio.run(process_event(event))
