import asyncio
import httpx
import json
import time

# Sends a signed synthetic message event to a running Events API server
# (python -m pcc_linkbot.main_ingest). Uses SLACK_SIGNING_SECRET from .env.

from pcc_linkbot.config import get_settings
from pcc_linkbot.slack.verify import compute_signature

settings = get_settings()
URL = f"http://localhost:{settings.PORT}/slack/events"

def generate_headers(body: bytes, timestamp: str):
    return {
        "Content-Type": "application/json",
        "X-Slack-Request-Timestamp": timestamp,
        "X-Slack-Signature": compute_signature(settings.SLACK_SIGNING_SECRET, timestamp, body),
    }

async def send_event(text_with_link: str, channel: str):
    timestamp = str(int(time.time()))
    payload = {
        "type": "event_callback",
        "event": {
            "type": "message",
            "channel": channel,
            "user": "U12345",
            "text": text_with_link,
            "ts": f"{timestamp}.000100",
            "event_ts": f"{timestamp}.000100"
        }
    }

    body = json.dumps(payload).encode('utf-8')
    headers = generate_headers(body, timestamp)

    async with httpx.AsyncClient() as client:
        print(f"Sending event to {URL}...")
        resp = await client.post(URL, content=body, headers=headers)
        print(f"Status: {resp.status_code}")
        print(f"Response: {resp.text}")

if __name__ == "__main__":
    default = "https://web.pcc.gov.tw/tps/QueryTender/query/searchTenderDetail?pkPmsMain=abc"
    link = input(f"Enter link to test (default: {default}): ") or default
    channel = settings.WATCH_CHANNEL_ID or input("Channel ID to post in: ")
    asyncio.run(send_event(f"看這個標案 {link}", channel))
