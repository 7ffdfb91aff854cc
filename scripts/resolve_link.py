#!/usr/bin/env python3
"""
Utility: resolve tender links without Slack.

Usage:
  python scripts/resolve_link.py "text containing https://web.pcc.gov.tw/tps/... links"
  python scripts/resolve_link.py --raw https://web.pcc.gov.tw/tps/...

Prints the links the bot would pick up from the text and the title each one
resolves to, then the reply the bot would post.
"""
from __future__ import annotations
import argparse
import asyncio
import json

from pcc_linkbot.log import setup_logging
from pcc_linkbot.retrieval.url import extract_pcc_links
from pcc_linkbot.retrieval.fetch import FetchError
from pcc_linkbot.retrieval.title import resolve_title
from pcc_linkbot.pipeline.handler import handle
from pcc_linkbot.slack.post_blocks import build_reply_payload


async def run(text: str, raw: bool):
    links = [text] if raw else extract_pcc_links(text)
    if not links:
        print("No tender links found.")
        return

    for url in links:
        try:
            title = await resolve_title(url)
        except FetchError as e:
            print(f"✗ {url}\n    fetch failed: {e}")
            continue
        print(f"✓ {url}\n    {title or '(no title, URL would be shown)'}")

    if not raw:
        reply = await handle(text, author_is_bot=False)
        if reply is None:
            print("\nThe bot would not reply.")
        else:
            payload = build_reply_payload(channel="C_PREVIEW", reply=reply)
            print("\nchat.postMessage payload:")
            print(json.dumps(payload, ensure_ascii=False, indent=2))


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("text", help="Message text or a single URL")
    parser.add_argument("--raw", action="store_true", help="Resolve the argument as-is, skipping the allow-list")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(run(args.text, args.raw))


if __name__ == "__main__":
    main()
