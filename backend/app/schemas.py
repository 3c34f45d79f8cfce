"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field, StrictInt, field_validator
from typing import Optional, List
from datetime import datetime, date


def _require_user_id(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("user_id must not be blank")
    return value


# ============== Record Schemas ==============

class RecordCreate(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    date: date
    fatigue: StrictInt
    notes: Optional[str] = None

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, value):
        return _require_user_id(value)

    class Config:
        extra = "forbid"


class RecordResponse(BaseModel):
    id: int
    user_id: str
    date: date
    fatigue: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecordSaved(BaseModel):
    success: bool = True
    data: RecordResponse


# ============== Analysis Schemas ==============

class AnalyzeRequest(BaseModel):
    """Either a range keyword or an explicit from/to pair."""

    range: Optional[str] = None
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    user_id: Optional[str] = None

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, value):
        return _require_user_id(value)

    class Config:
        extra = "forbid"


class AnalyzeResponse(BaseModel):
    result: str


# ============== Weekly Status Schemas ==============

class WeekRange(BaseModel):
    from_: date = Field(..., alias="from")
    to: date

    class Config:
        populate_by_name = True


class WeeklyStatusResponse(BaseModel):
    is_complete: bool = Field(..., alias="isComplete")
    week_range: WeekRange = Field(..., alias="weekRange")
    recorded_days: int = Field(..., alias="recordedDays")
    total_days: int = Field(7, alias="totalDays")
    error: Optional[str] = None
    propose_analysis: bool = Field(False, alias="proposeAnalysis")

    class Config:
        populate_by_name = True


# ============== Chat Schemas ==============

class ChatRequest(BaseModel):
    message: Optional[str] = None
    user: Optional[str] = None

    class Config:
        extra = "forbid"


class ChatMessageResponse(BaseModel):
    id: str
    user: str
    message: str
    parent_message_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChatHistory(BaseModel):
    user: str
    messages: List[ChatMessageResponse]
