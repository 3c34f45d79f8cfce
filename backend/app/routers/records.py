"""Daily records API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from datetime import date

from app.config import get_settings
from app.database import get_db
from app.exceptions import NotFound, ValidationError
from app.schemas import RecordCreate, RecordResponse, RecordSaved
from app.services.record_store import RecordStore

router = APIRouter(tags=["records"])


def validate_fatigue(fatigue: int) -> None:
    settings = get_settings()
    if not settings.fatigue_min <= fatigue <= settings.fatigue_max:
        raise ValidationError(
            f"Fatigue must be between {settings.fatigue_min}-{settings.fatigue_max}"
        )


@router.post("/record", response_model=RecordSaved)
def save_record(
    record_data: RecordCreate,
    db: Session = Depends(get_db),
):
    """Create or overwrite the record for (user_id, date)."""
    validate_fatigue(record_data.fatigue)

    record = RecordStore(db).upsert(
        user_id=record_data.user_id,
        record_date=record_data.date,
        fatigue=record_data.fatigue,
        notes=record_data.notes,
    )
    return {"success": True, "data": record}


@router.get("/records", response_model=List[RecordResponse])
def list_records(
    user_id: str,
    from_date: date = Query(..., alias="from"),
    to_date: date = Query(..., alias="to"),
    db: Session = Depends(get_db),
):
    """List a user's records between two dates, oldest first."""
    return RecordStore(db).list_range(from_date, to_date, user_id=user_id)


@router.get("/records/{user_id}/{record_date}", response_model=RecordResponse)
def get_record(
    user_id: str,
    record_date: date,
    db: Session = Depends(get_db),
):
    """Get one user's record for one day."""
    record = RecordStore(db).get(user_id, record_date)
    if not record:
        raise NotFound("No record for this date")
    return record
