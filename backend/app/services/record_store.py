"""Record and chat message persistence.

Thin accessors over the ``records`` and ``chat_messages`` tables. Database
failures are logged and re-raised as ``UpstreamStoreError`` (or
``UpstreamTimeoutError`` when the statement/pool timeout fires) so routes
never see raw driver exceptions.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.exceptions import UpstreamStoreError, UpstreamTimeoutError
from app.models import AI_USER, ChatMessage, Record

logger = logging.getLogger(__name__)

# PostgreSQL "query_canceled", raised when statement_timeout fires
_QUERY_CANCELED = "57014"

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _is_timeout(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, PoolTimeoutError):
        return True
    return getattr(getattr(exc, "orig", None), "pgcode", None) == _QUERY_CANCELED


@contextmanager
def store_call(db: Session, operation: str):
    """Convert database failures raised inside the block."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        if _is_timeout(e):
            logger.warning("Database timeout during %s: %s", operation, e)
            raise UpstreamTimeoutError("database", str(e)) from e
        logger.error("Database error during %s: %s", operation, e)
        raise UpstreamStoreError(str(e)) from e


class RecordStore:
    """Upsert and range queries over daily records."""

    def __init__(self, db: Session):
        self.db = db

    def upsert(
        self,
        user_id: str,
        record_date: date,
        fatigue: int,
        notes: Optional[str] = None,
    ) -> Record:
        """Insert or overwrite the record for (user_id, record_date); last write wins."""
        with store_call(self.db, "record upsert"):
            dialect = self.db.get_bind().dialect.name
            insert = _UPSERT_DIALECTS.get(dialect)

            if insert is not None:
                now = datetime.utcnow()
                stmt = insert(Record).values(
                    user_id=user_id,
                    date=record_date,
                    fatigue=fatigue,
                    notes=notes,
                    created_at=now,
                    updated_at=now,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[Record.user_id, Record.date],
                    set_={
                        "fatigue": stmt.excluded.fatigue,
                        "notes": stmt.excluded.notes,
                        "updated_at": stmt.excluded.updated_at,
                    },
                )
                self.db.execute(stmt)
            else:
                existing = self._get(user_id, record_date)
                if existing:
                    existing.fatigue = fatigue
                    existing.notes = notes
                else:
                    self.db.add(Record(
                        user_id=user_id, date=record_date, fatigue=fatigue, notes=notes
                    ))

            self.db.commit()
            record = self._get(user_id, record_date)
            # Upsert statements bypass the identity map
            self.db.refresh(record)

        logger.info("Saved record for %s on %s", user_id, record_date)
        return record

    def get(self, user_id: str, record_date: date) -> Optional[Record]:
        """Exact-date lookup."""
        with store_call(self.db, "record lookup"):
            return self._get(user_id, record_date)

    def list_range(
        self,
        from_date: date,
        to_date: date,
        user_id: Optional[str] = None,
    ) -> List[Record]:
        """Records with date in [from_date, to_date], oldest first."""
        with store_call(self.db, "record range select"):
            query = self.db.query(Record).filter(
                Record.date >= from_date, Record.date <= to_date
            )
            if user_id is not None:
                query = query.filter(Record.user_id == user_id)
            return query.order_by(Record.date.asc(), Record.user_id.asc()).all()

    def _get(self, user_id: str, record_date: date) -> Optional[Record]:
        return (
            self.db.query(Record)
            .filter(Record.user_id == user_id, Record.date == record_date)
            .first()
        )


class ChatMessageStore:
    """Append-only chat message log."""

    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        user: str,
        message: str,
        parent_message_id: Optional[str] = None,
    ) -> ChatMessage:
        """Insert one message under a freshly generated id."""
        with store_call(self.db, "chat message insert"):
            row = ChatMessage(
                id=str(uuid.uuid4()),
                user=user,
                message=message,
                parent_message_id=parent_message_id,
            )
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    def history(self, user: str, limit: int = 50) -> List[ChatMessage]:
        """The user's latest messages plus the AI replies threaded to them, oldest first."""
        with store_call(self.db, "chat history select"):
            user_messages = (
                self.db.query(ChatMessage)
                .filter(ChatMessage.user == user)
                .order_by(ChatMessage.created_at.desc())
                .limit(limit)
                .all()
            )
            if not user_messages:
                return []

            ids = [m.id for m in user_messages]
            rows = (
                self.db.query(ChatMessage)
                .filter(
                    or_(
                        ChatMessage.id.in_(ids),
                        (ChatMessage.user == AI_USER) & ChatMessage.parent_message_id.in_(ids),
                    )
                )
                .all()
            )

        # Keep each reply directly after the message it answers
        replies = {}
        for row in rows:
            if row.parent_message_id:
                replies.setdefault(row.parent_message_id, []).append(row)

        ordered = []
        for message in reversed(user_messages):
            ordered.append(message)
            ordered.extend(sorted(replies.get(message.id, []), key=lambda r: r.created_at))
        return ordered
