from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import List, Optional
from mailpolish.config import MAX_EMAIL_LENGTH


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActionInput(CamelModel):
    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        # omitted fields keep their default; only an explicit null lands here
        if value is None:
            raise ValueError("must not be null")
        return value


class EmailCreate(ActionInput):
    id: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = None
    body_original: str = Field(min_length=1, max_length=MAX_EMAIL_LENGTH)
    body_polished: Optional[str] = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    tone: Optional[str] = None
    language: Optional[str] = None
    context: Optional[str] = None


class EmailUpdate(ActionInput):
    id: str
    subject: Optional[str] = None
    body_original: Optional[str] = Field(default=None, min_length=1, max_length=MAX_EMAIL_LENGTH)
    body_polished: Optional[str] = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    tone: Optional[str] = None
    language: Optional[str] = None
    context: Optional[str] = None

    def changes(self) -> dict:
        """Fields the caller actually supplied, keyed by column name.

        Omitted fields are absent; explicit nulls never get past validation.
        """
        return self.model_dump(exclude={"id"}, exclude_unset=True)


class EmailDelete(ActionInput):
    id: str


class EmailPolish(ActionInput):
    id: str
    tone: Optional[str] = None
    language: Optional[str] = None


class EmailDraftResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    user_id: str
    subject: Optional[str] = None
    body_original: str
    body_polished: Optional[str] = None
    tone: Optional[str] = None
    language: Optional[str] = None
    context: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """Timestamps are stored as UTC; SQLite hands them back without tzinfo"""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class EmailResult(BaseModel):
    email: EmailDraftResponse


class EmailListResult(BaseModel):
    emails: List[EmailDraftResponse]
