import pytest
import os
from unittest.mock import patch
from dotenv import load_dotenv
from tender_pages import TENDER_HTML

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture
def settings():
    """
    The cached Settings singleton, with the fields tests touch restored afterwards.
    Modules read `settings` at import time, so the object is patched in place.
    """
    from pcc_linkbot.config import get_settings
    s = get_settings()
    saved = {
        "WATCH_CHANNEL_ID": s.WATCH_CHANNEL_ID,
        "SLACK_SIGNING_SECRET": s.SLACK_SIGNING_SECRET,
        "FETCH_TIMEOUT_SECONDS": s.FETCH_TIMEOUT_SECONDS,
    }
    s.WATCH_CHANNEL_ID = None
    s.SLACK_SIGNING_SECRET = "test-signing-secret"
    yield s
    for k, v in saved.items():
        setattr(s, k, v)

@pytest.fixture
def mock_slack_verification():
    """
    Bypasses Slack signature verification for ingest tests.
    """
    with patch("pcc_linkbot.main_ingest.verify_slack_signature") as mock:
        mock.return_value = None
        yield mock

@pytest.fixture
def tender_html() -> str:
    return TENDER_HTML
