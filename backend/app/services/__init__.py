"""Services package."""

from app.services.llm_service import LLMService, GeminiProvider
from app.services.record_store import RecordStore, ChatMessageStore
from app.services.analysis_service import AnalysisService
from app.services.chat_service import ChatService
from app.services.proposal_gate import InMemoryProposalGate, DatabaseProposalGate
from app.services.weekly_checker import WeeklyCompletionChecker, evaluate_weekly_proposal

__all__ = [
    "LLMService",
    "GeminiProvider",
    "RecordStore",
    "ChatMessageStore",
    "AnalysisService",
    "ChatService",
    "InMemoryProposalGate",
    "DatabaseProposalGate",
    "WeeklyCompletionChecker",
    "evaluate_weekly_proposal",
]
