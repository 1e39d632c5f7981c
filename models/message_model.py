from pydantic import BaseModel, field_validator
from typing import Dict, Optional, List
from datetime import datetime

from models.profiles_model import ProfileSummary
from utils.time import ensure_utc

class MessageCreate(BaseModel):
    """Payload the client posts to send a message; the sender is the caller"""
    receiver_id: str
    content: str
    conversation_id: Optional[str] = None
    related_opportunity_id: Optional[str] = None

class MessageResponse(BaseModel):
    """A persisted message"""
    id: str
    sender_id: str
    receiver_id: str
    conversation_id: str
    content: str
    created_at: datetime
    is_read: bool = False
    read_at: Optional[datetime] = None
    related_opportunity_id: Optional[str] = None
    # Resolved for display only, e.g. "Applied to: <title>"
    related_opportunity_title: Optional[str] = None

    @field_validator("created_at", "read_at")
    @classmethod
    def normalize_timezone(cls, v):
        if isinstance(v, datetime):
            return ensure_utc(v)
        return v

class Conversation(BaseModel):
    """Derived view of all messages between the viewer and one counterpart"""
    id: str
    counterpart: ProfileSummary
    last_message: MessageResponse
    unread_count: int = 0

class InboxView(BaseModel):
    """Conversation summaries plus each conversation's thread, oldest first"""
    conversations: List[Conversation] = []
    messages_by_conversation: Dict[str, List[MessageResponse]] = {}

class MarkReadResult(BaseModel):
    conversation_id: str
    marked_count: int

# Separates the two participant ids in a derived conversation id
CONVERSATION_ID_SEPARATOR = ":"

def conversation_id_for(first_user_id: str, second_user_id: str) -> str:
    """Canonical conversation id for a pair of users, whoever writes first"""
    return CONVERSATION_ID_SEPARATOR.join(sorted([first_user_id, second_user_id]))
