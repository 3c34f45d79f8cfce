"""Chat message model for relayed conversations."""

from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from app.database import Base


AI_USER = "ai"


class ChatMessage(Base):
    """One turn of a conversation between a user and the AI."""

    __tablename__ = "chat_messages"

    id = Column(String(36), primary_key=True)  # UUID assigned by the caller
    user = Column(String(255), nullable=False, index=True)  # "ai" or a user id
    message = Column(Text, nullable=False)

    # Weak link from an AI reply to the user message that produced it
    parent_message_id = Column(String(36), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        preview = self.message[:50] + "..." if len(self.message) > 50 else self.message
        return f"<ChatMessage {self.user}: {preview}>"

    @property
    def is_ai_message(self):
        return self.user == AI_USER
