"""Chat relay API router."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import Optional

from app.config import get_settings
from app.database import get_db
from app.dependencies import get_llm_service
from app.schemas import ChatHistory, ChatRequest
from app.services.chat_service import ChatService
from app.services.llm_service import LLMService
from app.services.record_store import ChatMessageStore

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_class=PlainTextResponse)
async def send_message(
    chat: ChatRequest,
    db: Session = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service),
):
    """Relay a message to the model and return its reply as plain text."""
    user = chat.user or get_settings().default_chat_user
    reply = await ChatService(db, llm_service).send(user, chat.message)
    return PlainTextResponse(reply)


@router.get("/history", response_model=ChatHistory)
def chat_history(
    user: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """A user's recent messages, each followed by the AI reply to it."""
    user = user or get_settings().default_chat_user
    return {"user": user, "messages": ChatMessageStore(db).history(user, limit=limit)}
