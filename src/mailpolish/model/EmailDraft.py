from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone
from mailpolish.model.base import Base


class EmailDraft(Base):
    """A user's raw email draft and its polished variant"""
    __tablename__ = "emails"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    subject = Column(String, nullable=True)
    body_original = Column(Text, nullable=False)  # user's raw draft
    body_polished = Column(Text, nullable=True)  # improved version
    tone = Column(String, nullable=True)  # "formal", "friendly", "apologetic", etc.
    language = Column(String, nullable=True)  # e.g. "en", "ta", "ar"
    context = Column(Text, nullable=True)  # short description of use-case
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
