"""Pydantic schemas for inbound messages and outbound replies.

Defines IncomingMessage, Embed (one display unit) and Reply.
"""

from pydantic import BaseModel, ConfigDict
from typing import List, Optional

class IncomingMessage(BaseModel):
    channel: str
    ts: str
    thread_ts: Optional[str] = None
    user: Optional[str] = None
    text: str
    author_is_bot: bool = False

class Embed(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str

class Reply(BaseModel):
    content: Optional[str] = None
    embeds: List[Embed] = []
