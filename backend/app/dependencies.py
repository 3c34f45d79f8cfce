"""Shared FastAPI dependencies."""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.services.llm_service import LLMService
from app.services.proposal_gate import DatabaseProposalGate


@lru_cache()
def get_llm_service() -> LLMService:
    """One LLM service (and SDK client) per process."""
    return LLMService()


def get_proposal_gate(request: Request, db: Session = Depends(get_db)):
    """Gate selected by ``Settings.proposal_store``."""
    if get_settings().proposal_store == "memory":
        return request.app.state.proposal_gate
    return DatabaseProposalGate(db)
