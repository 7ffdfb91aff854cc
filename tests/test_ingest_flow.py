import time
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient
from pcc_linkbot.main_ingest import app
from tender_pages import TENDER_URL

client = TestClient(app)

def _event(text: str, **extra) -> dict:
    event = {
        "type": "message",
        "channel": "C_TEST",
        "user": "U_USER",
        "text": text,
        "ts": f"{time.time()}",
    }
    event.update(extra)
    return {"type": "event_callback", "event": event}

def test_ingest_url_verification(settings, mock_slack_verification):
    """
    WHY: Slack requires a handshake (url_verification) to confirm we own the endpoint before sending events.
    HOW: Post a JSON payload with `type="url_verification"` and a challenge string.
    EXPECTED: Return HTTP 200 and the exact challenge string in the JSON body.
    """
    response = client.post("/slack/events", json={
        "type": "url_verification",
        "challenge": "my-challenge-string"
    })
    assert response.status_code == 200
    assert response.json() == {"challenge": "my-challenge-string"}

def test_ingest_event_with_tender_link(settings, mock_slack_verification):
    """
    WHY: Messages with tender links must be handed to the reply pipeline.
    HOW: Post a valid `event_callback` with a /tps link; the pipeline is mocked.
    EXPECTED: HTTP 200 "ok" and process_event scheduled with the raw event.
    """
    payload = _event(f"請看 <{TENDER_URL}>")
    with patch("pcc_linkbot.main_ingest.process_event", new=AsyncMock(return_value=True)) as mock_process:
        response = client.post("/slack/events", json=payload)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    mock_process.assert_awaited_once_with(payload["event"])

def test_ingest_event_ignored_no_link(settings, mock_slack_verification):
    """
    WHY: Most chat has no tender links; don't schedule work for it.
    HOW: Post an event whose text only has an unrelated link.
    EXPECTED: HTTP 200, "ignored", pipeline not called.
    """
    with patch("pcc_linkbot.main_ingest.process_event", new=AsyncMock()) as mock_process:
        response = client.post("/slack/events", json=_event("see https://example.com"))

    assert response.json() == {"status": "ignored"}
    mock_process.assert_not_called()

def test_ingest_event_ignored_bot(settings, mock_slack_verification):
    with patch("pcc_linkbot.main_ingest.process_event", new=AsyncMock()) as mock_process:
        response = client.post("/slack/events", json=_event(TENDER_URL, bot_id="B1", subtype="bot_message"))

    assert response.json() == {"status": "ignored"}
    mock_process.assert_not_called()

def test_ingest_event_wrong_channel(settings, mock_slack_verification):
    """
    WHY: When a watch channel is configured, other channels are left alone.
    HOW: Configure "C_REAL" but receive an event from "C_TEST".
    EXPECTED: "ignored".
    """
    settings.WATCH_CHANNEL_ID = "C_REAL"
    with patch("pcc_linkbot.main_ingest.process_event", new=AsyncMock()) as mock_process:
        response = client.post("/slack/events", json=_event(TENDER_URL))

    assert response.json() == {"status": "ignored"}
    mock_process.assert_not_called()

def test_ingest_ignores_slack_retries(settings, mock_slack_verification):
    """
    WHY: Nothing is stored between events, so a redelivery would produce a duplicate reply.
    HOW: Post a linked event with the X-Slack-Retry-Num header set.
    EXPECTED: "ignored", pipeline not called.
    """
    with patch("pcc_linkbot.main_ingest.process_event", new=AsyncMock()) as mock_process:
        response = client.post(
            "/slack/events",
            json=_event(TENDER_URL),
            headers={"X-Slack-Retry-Num": "1", "X-Slack-Retry-Reason": "http_timeout"},
        )

    assert response.json() == {"status": "ignored"}
    mock_process.assert_not_called()

def test_ingest_rejects_unsigned_requests(settings):
    response = client.post("/slack/events", json=_event(TENDER_URL))
    assert response.status_code == 400
