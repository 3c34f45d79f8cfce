"""Routers package."""

from app.routers.records import router as records_router
from app.routers.analysis import router as analysis_router
from app.routers.chat import router as chat_router

__all__ = [
    "records_router",
    "analysis_router",
    "chat_router",
]
