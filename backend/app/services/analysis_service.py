"""Date-range analysis relayed to the LLM."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.prompts import NO_DATA_MESSAGE
from app.schemas import AnalyzeRequest
from app.services.date_range import resolve_date_range
from app.services.llm_service import LLMService
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class AnalysisService:
    """Resolve the period, fetch its records and ask the model about them."""

    def __init__(self, db: Session, llm_service: LLMService):
        self.store = RecordStore(db)
        self.llm_service = llm_service

    async def analyze(self, request: AnalyzeRequest, today=None) -> str:
        period = resolve_date_range(
            request.range, request.from_, request.to, today=today
        )
        records = self.store.list_range(
            period.from_date, period.to_date, user_id=request.user_id
        )

        if not records:
            logger.info("No records between %s and %s", period.from_date, period.to_date)
            return NO_DATA_MESSAGE

        logger.info(
            "Analyzing %d records between %s and %s",
            len(records), period.from_date, period.to_date,
        )
        return await self.llm_service.analyze_records(records)
