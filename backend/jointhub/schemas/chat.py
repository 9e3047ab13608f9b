"""
Pydantic schemas for chat history endpoints.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

Sender = Literal["user", "assistant", "system"]

class ChatMessage(BaseModel):
    """
    One entry of a chat log.
    ``text`` is plain text, or a data URI when ``isImage`` is set.
    """
    sender: Sender
    text: str
    isImage: bool = False
    timestamp: Optional[str] = None  # ISO-8601 UTC, assigned by the store when missing

class SaveMessageIn(BaseModel):
    message: ChatMessage

class SuccessOut(BaseModel):
    success: bool = True
