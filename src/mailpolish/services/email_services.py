"""Owner-scoped CRUD handlers for email drafts.

Every handler takes the caller explicitly and filters each statement by both
the draft id and the caller's user id, so a draft owned by someone else looks
exactly like one that does not exist.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from mailpolish.errors import ActionError, email_not_found
from mailpolish.model.EmailDraft import EmailDraft
from mailpolish.schemas.email import (EmailCreate, EmailUpdate, EmailPolish,
                                      EmailDraftResponse)
from mailpolish.schemas.user import CurrentUser
from mailpolish.services.database import get_db_session
from mailpolish.services.llm_services import polish_text
from mailpolish.services.utils.session_management import require_user

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _owned(db, email_id: str, user_id: str):
    return db.query(EmailDraft).filter(
        EmailDraft.id == email_id,
        EmailDraft.user_id == user_id
    )


def create_email(user: CurrentUser, payload: EmailCreate) -> EmailDraftResponse:
    """Insert a new draft owned by the caller."""
    user = require_user(user)
    now = _utcnow()
    db = get_db_session()
    try:
        email = EmailDraft(
            id=payload.id or str(uuid.uuid4()),
            user_id=user.id,
            subject=payload.subject,
            body_original=payload.body_original,
            body_polished=payload.body_polished,
            tone=payload.tone,
            language=payload.language,
            context=payload.context,
            created_at=now,
            updated_at=now,
        )
        db.add(email)
        db.commit()
        db.refresh(email)
        _logger.info(f"Email {email.id} created for user {user.id}")
        return EmailDraftResponse.model_validate(email)
    except IntegrityError:
        db.rollback()
        _logger.warning(f"Email id {payload.id} already exists")
        raise ActionError("CONFLICT", "An email with this id already exists.")
    except Exception as e:
        db.rollback()
        _logger.error(f"Error creating email for user {user.id}: {str(e)}", exc_info=True)
        raise
    finally:
        db.close()


def update_email(user: CurrentUser, payload: EmailUpdate) -> EmailDraftResponse:
    """Merge the supplied fields into one of the caller's drafts.

    When no field besides ``id`` is supplied the stored draft is returned as is,
    without a write and without touching ``updated_at``.
    """
    user = require_user(user)
    db = get_db_session()
    try:
        existing = _owned(db, payload.id, user.id).first()
        if not existing:
            raise email_not_found()

        changes = payload.changes()
        if not changes:
            _logger.info(f"No changes supplied for email {payload.id}")
            return EmailDraftResponse.model_validate(existing)

        changes["updated_at"] = _utcnow()
        updated = _owned(db, payload.id, user.id).update(changes, synchronize_session=False)
        if not updated:
            # removed between the lookup and the write
            db.rollback()
            raise email_not_found()
        db.commit()

        email = _owned(db, payload.id, user.id).first()
        if not email:
            raise email_not_found()
        _logger.info(f"Email {payload.id} updated: {sorted(changes)}")
        return EmailDraftResponse.model_validate(email)
    except ActionError:
        raise
    except Exception as e:
        db.rollback()
        _logger.error(f"Error updating email {payload.id}: {str(e)}", exc_info=True)
        raise
    finally:
        db.close()


def list_emails(user: CurrentUser) -> List[EmailDraftResponse]:
    """All drafts owned by the caller, in storage order."""
    user = require_user(user)
    db = get_db_session()
    try:
        emails = db.query(EmailDraft).filter(EmailDraft.user_id == user.id).all()
        return [EmailDraftResponse.model_validate(email) for email in emails]
    finally:
        db.close()


def delete_email(user: CurrentUser, email_id: str) -> EmailDraftResponse:
    """Delete one of the caller's drafts and return it as it was."""
    user = require_user(user)
    db = get_db_session()
    try:
        stmt = (
            delete(EmailDraft)
            .where(EmailDraft.id == email_id, EmailDraft.user_id == user.id)
            .returning(EmailDraft)
        )
        email = db.execute(stmt).scalar_one_or_none()
        if not email:
            db.rollback()
            raise email_not_found()

        deleted = EmailDraftResponse.model_validate(email)
        db.commit()
        _logger.info(f"Email {email_id} deleted for user {user.id}")
        return deleted
    except ActionError:
        raise
    except Exception as e:
        db.rollback()
        _logger.error(f"Error deleting email {email_id}: {str(e)}", exc_info=True)
        raise
    finally:
        db.close()


def get_email(user: CurrentUser, email_id: str) -> EmailDraftResponse:
    user = require_user(user)
    db = get_db_session()
    try:
        email = _owned(db, email_id, user.id).first()
        if not email:
            raise email_not_found()
        return EmailDraftResponse.model_validate(email)
    finally:
        db.close()


def polish_email(user: CurrentUser, payload: EmailPolish) -> EmailDraftResponse:
    """Generate ``body_polished`` for one of the caller's drafts.

    ``tone`` and ``language`` from the payload override the stored ones and are
    saved along with the polished body.
    """
    email = get_email(user, payload.id)
    tone = payload.tone or email.tone
    language = payload.language or email.language

    try:
        polished = polish_text(
            body=email.body_original,
            tone=tone,
            language=language,
            context=email.context,
            subject=email.subject,
        )
    except Exception as e:
        _logger.error(f"Error polishing email {payload.id}: {str(e)}", exc_info=True)
        raise ActionError("INTERNAL_SERVER_ERROR", "The email could not be polished. Please try again later.")

    if not polished:
        raise ActionError("INTERNAL_SERVER_ERROR", "The model returned an empty draft.")

    overrides = payload.model_dump(include={"tone", "language"}, exclude_unset=True)
    return update_email(user, EmailUpdate(id=payload.id, body_polished=polished, **overrides))
