"""Analysis and weekly status API router."""

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session
from typing import Optional

from app.config import get_settings
from app.database import get_db
from app.dependencies import get_llm_service, get_proposal_gate
from app.exceptions import ValidationError, schema_error_details
from app.schemas import AnalyzeRequest, AnalyzeResponse, WeeklyStatusResponse, WeekRange
from app.services.analysis_service import AnalysisService
from app.services.llm_service import LLMService
from app.services.record_store import RecordStore
from app.services.weekly_checker import WeeklyCompletionChecker, evaluate_weekly_proposal

router = APIRouter(tags=["analysis"])


@router.get("/analyze", response_model=AnalyzeResponse)
async def analyze_query(
    range: Optional[str] = None,
    from_date: Optional[str] = Query(None, alias="from"),
    to_date: Optional[str] = Query(None, alias="to"),
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service),
):
    """Analyze records for a period given as query parameters."""
    try:
        request = AnalyzeRequest.model_validate(
            {"range": range, "from": from_date, "to": to_date, "user_id": user_id}
        )
    except SchemaError as e:
        raise ValidationError("Invalid request", details=schema_error_details(e.errors()))

    result = await AnalysisService(db, llm_service).analyze(request)
    return {"result": result}


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_body(
    request: AnalyzeRequest,
    db: Session = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service),
):
    """Analyze records for a period given in the JSON body."""
    result = await AnalysisService(db, llm_service).analyze(request)
    return {"result": result}


@router.get("/weekly-status", response_model=WeeklyStatusResponse)
def weekly_status(
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
    gate=Depends(get_proposal_gate),
):
    """
    Report this ISO week's recording progress.

    ``proposeAnalysis`` is true at most once per user and week: on the first
    call after all 7 days are recorded.
    """
    user_id = user_id or get_settings().default_chat_user
    checker = WeeklyCompletionChecker(RecordStore(db))
    status, propose = evaluate_weekly_proposal(checker, gate, user_id)

    return WeeklyStatusResponse(
        is_complete=status.is_complete,
        week_range=WeekRange(from_=status.week_range.from_date, to=status.week_range.to_date),
        recorded_days=status.recorded_days,
        total_days=status.total_days,
        error=status.error,
        propose_analysis=propose,
    )
