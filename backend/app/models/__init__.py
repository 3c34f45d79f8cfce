"""Database models package."""

from app.models.record import Record
from app.models.chat_message import ChatMessage, AI_USER
from app.models.analysis_proposal import AnalysisProposal

__all__ = [
    "Record",
    "ChatMessage",
    "AnalysisProposal",
    "AI_USER",
]
