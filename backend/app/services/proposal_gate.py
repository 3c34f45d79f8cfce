"""At-most-once-per-week gate for offering a weekly analysis.

Keys are ``(user_id, week_key)`` where ``week_key`` is the ISO date of the
week's Monday. Once a key is set it stays set; there is no reset.
"""

import logging
import threading
from typing import Set, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import AnalysisProposal
from app.services.record_store import store_call

logger = logging.getLogger(__name__)


class InMemoryProposalGate:
    """Thread-safe gate living for the lifetime of the process."""

    backend = "memory"

    def __init__(self):
        self._proposed: Set[Tuple[str, str]] = set()
        self._lock = threading.Lock()

    def get_status(self, week_key: str, user_id: str) -> bool:
        with self._lock:
            return (user_id, week_key) in self._proposed

    def set_status(self, week_key: str, user_id: str) -> None:
        with self._lock:
            self._proposed.add((user_id, week_key))

    def claim(self, week_key: str, user_id: str) -> bool:
        """Mark the week proposed; True only for the caller that set it."""
        key = (user_id, week_key)
        with self._lock:
            if key in self._proposed:
                return False
            self._proposed.add(key)
            return True


class DatabaseProposalGate:
    """Gate backed by the ``analysis_proposals`` table; survives restarts."""

    backend = "database"

    def __init__(self, db: Session):
        self.db = db

    def get_status(self, week_key: str, user_id: str) -> bool:
        with store_call(self.db, "proposal lookup"):
            return (
                self.db.query(AnalysisProposal.id)
                .filter(
                    AnalysisProposal.user_id == user_id,
                    AnalysisProposal.week_key == week_key,
                )
                .first()
                is not None
            )

    def set_status(self, week_key: str, user_id: str) -> None:
        self.claim(week_key, user_id)

    def claim(self, week_key: str, user_id: str) -> bool:
        """Insert the flag row; the unique constraint decides the winner."""
        with store_call(self.db, "proposal insert"):
            try:
                self.db.add(AnalysisProposal(user_id=user_id, week_key=week_key))
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                return False
        logger.info("Recorded weekly analysis proposal for %s, week of %s", user_id, week_key)
        return True
