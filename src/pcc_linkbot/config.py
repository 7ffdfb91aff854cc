from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    SLACK_BOT_TOKEN: str = Field("", description="Slack Bot User OAuth Token")
    SLACK_APP_TOKEN: str = Field("", description="Slack App-Level Token (for Socket Mode)")
    SLACK_SIGNING_SECRET: str = Field("", description="Signing secret for the Events API endpoint")
    WATCH_CHANNEL_ID: Optional[str] = Field(None, description="Only handle this channel when set")
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Link allow-list
    PCC_HOST: str = "web.pcc.gov.tw"
    PCC_PATH_PREFIX: str = "/tps"
    MAX_LINKS_PER_MESSAGE: int = 5

    # Title resolution
    FETCH_TIMEOUT_SECONDS: float = 5.0
    TITLE_MAX_LENGTH: int = 256
    USER_AGENT: str = "Mozilla/5.0 (compatible; PccLinkBot/1.0; +https://slack.com)"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
