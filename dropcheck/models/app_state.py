from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dropcheck.database import Base

USER_ID_MAX_LENGTH = 64


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppStateRecord(Base):
    """One JSON-encoded state entry (profile, history or recommendations) for a user."""

    __tablename__ = "app_state"

    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), primary_key=True)
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="null")
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
