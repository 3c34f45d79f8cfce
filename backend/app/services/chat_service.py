"""Chat relay: persist the user's message, ask the model, persist the reply."""

import logging

from sqlalchemy.orm import Session

from app.exceptions import ValidationError
from app.models import AI_USER
from app.services.llm_service import LLMService
from app.services.record_store import ChatMessageStore

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, db: Session, llm_service: LLMService):
        self.store = ChatMessageStore(db)
        self.llm_service = llm_service

    async def send(self, user: str, message: str) -> str:
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message is required")

        user_row = self.store.append(user, text)
        reply = await self.llm_service.chat_reply(text)
        self.store.append(AI_USER, reply, parent_message_id=user_row.id)

        logger.info("Chat turn stored for %s (message %s)", user, user_row.id)
        return reply
