from pcc_linkbot.slack.parse import parse_event, unwrap_slack_links

URL = "https://web.pcc.gov.tw/tps/QueryTender/query/searchTenderDetail?pkPmsMain=abc&amp;x=1"


def _event(**extra):
    event = {"type": "message", "channel": "C1", "user": "U1", "text": "hi", "ts": "1.1"}
    event.update(extra)
    return event


def test_unwrap_slack_links():
    """
    WHY: Slack delivers links as <url> or <url|label> with &, <, > escaped.
    HOW: Unwrap a labeled link whose query string contains an escaped '&'.
    EXPECTED: The plain URL with a real '&'.
    """
    text = f"看 <{URL}|web.pcc.gov.tw/tps/...> 和 <https://example.com>"
    assert unwrap_slack_links(text) == (
        "看 https://web.pcc.gov.tw/tps/QueryTender/query/searchTenderDetail?pkPmsMain=abc&x=1"
        " 和 https://example.com"
    )


def test_parse_event_basic(settings):
    message = parse_event(_event(text=f"<{URL}>", thread_ts="0.9"))
    assert message.channel == "C1"
    assert message.ts == "1.1"
    assert message.thread_ts == "0.9"
    assert message.author_is_bot is False
    assert message.text.endswith("pkPmsMain=abc&x=1")


def test_parse_event_flags_bots(settings):
    assert parse_event(_event(bot_id="B1")).author_is_bot is True
    assert parse_event(_event(subtype="bot_message")).author_is_bot is True


def test_parse_event_ignores_edits_and_empty(settings):
    assert parse_event(_event(subtype="message_changed")) is None
    assert parse_event(_event(subtype="message_deleted")) is None
    assert parse_event(_event(text="")) is None


def test_parse_event_watch_channel(settings):
    settings.WATCH_CHANNEL_ID = "C_WATCHED"
    assert parse_event(_event(channel="C1")) is None
    assert parse_event(_event(channel="C_WATCHED")) is not None
