import uvicorn
from fastapi import FastAPI, Request, BackgroundTasks
from .config import get_settings
from .log import setup_logging, get_logger
from .slack.verify import verify_slack_signature
from .slack.parse import parse_event
from .retrieval.url import extract_pcc_links
from .pipeline.run import process_event

settings = get_settings()
setup_logging()
logger = get_logger("ingest")

app = FastAPI()

@app.post("/slack/events")
async def slack_events(request: Request, background_tasks: BackgroundTasks):
    # 1. Verify Signature
    await verify_slack_signature(request)

    # 2. Parse Body
    try:
        payload = await request.json()
    except ValueError:
        return {"status": "error", "message": "Invalid JSON"}

    # 3. Handle URL Verification (Handshake)
    if payload.get("type") == "url_verification":
        return {"challenge": payload.get("challenge")}

    # 4. Slack redelivers when we are slow to ack; nothing is stored to dedupe against
    retry_num = request.headers.get("X-Slack-Retry-Num")
    if retry_num:
        logger.info(f"Ignoring Slack retry #{retry_num} ({request.headers.get('X-Slack-Retry-Reason')})")
        return {"status": "ignored"}

    # 5. Handle Event Callback
    if payload.get("type") == "event_callback":
        event = payload.get("event", {})
        message = parse_event(event)
        if not message:
            return {"status": "ignored"}

        # Check for links immediately to decide if we even care
        if message.author_is_bot or not extract_pcc_links(message.text):
            logger.debug(f"No tender links in message {message.ts}, ignoring.")
            return {"status": "ignored"}

        background_tasks.add_task(process_event, event)
        logger.info(f"Scheduled reply for message {message.ts}")
        return {"status": "ok"}

    return {"status": "ignored"}

def main():
    if not settings.SLACK_BOT_TOKEN or not settings.SLACK_SIGNING_SECRET:
        logger.error("Missing Slack configuration. Please set SLACK_BOT_TOKEN and SLACK_SIGNING_SECRET.")
        return
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

if __name__ == "__main__":
    main()
