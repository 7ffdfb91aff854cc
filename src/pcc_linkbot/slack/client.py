from typing import Optional
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception
from ..config import get_settings
from ..log import get_logger

logger = get_logger("slack_client")
settings = get_settings()

def _is_rate_limited(e: BaseException) -> bool:
    return isinstance(e, SlackApiError) and e.response.get("error") == "ratelimited"

class SlackClientWrapper:
    def __init__(self, token: Optional[str] = None):
        self.client = WebClient(token=token or settings.SLACK_BOT_TOKEN)

    @retry(
        retry=retry_if_exception(_is_rate_limited),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True
    )
    def post_payload(self, payload: dict):
        """
        Post a prepared payload (dict) directly to Slack using chat_postMessage.
        Rate limits are retried; any other API error is logged and raised.
        """
        try:
            return self.client.chat_postMessage(**payload)
        except SlackApiError as e:
            if e.response.get("error") == "ratelimited":
                logger.warning("Slack rate limited, retrying...")
                raise
            logger.error(f"Slack API error: {e.response.get('error')}")
            raise

slack_client = SlackClientWrapper()
