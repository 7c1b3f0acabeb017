import logging
import os
from datetime import datetime, timedelta
from fastapi import Request
from mailpolish.config import SESSION_DURATION_HOURS
from mailpolish.errors import unauthorized
from mailpolish.model.UserSession import UserSession
from mailpolish.schemas.user import CurrentUser
from mailpolish.services.database import get_db_session
from mailpolish.services.utils.logger_config import mask_email

_logger = logging.getLogger(__name__)


async def validate_session(
    request: Request = None,
    session_token: str = None
) -> CurrentUser:
    """Resolve the authenticated caller from a session token.

    The token is taken from ``session_token`` when given, otherwise from the
    ``session_token`` cookie on the request.

    Raises:
        ActionError: UNAUTHORIZED when the token is missing, unknown or expired.
    """
    _logger.info("Validating session token")

    token = session_token

    if request and not token:
        token = request.cookies.get("session_token")

    if not token:
        raise unauthorized()

    db = get_db_session()
    try:
        session = db.query(UserSession).filter_by(session_token=token).first()

        if not session:
            raise unauthorized("Invalid session")

        if datetime.now() > session.expires_at:
            db.delete(session)
            db.commit()
            raise unauthorized("Session expired. Please log in again.")

        return CurrentUser(id=session.user_id, email=session.user_email)
    finally:
        db.close()


def require_user(user: CurrentUser | None) -> CurrentUser:
    """Guard used by every action handler before touching storage"""
    if user is None or not user.id:
        raise unauthorized()
    return user


def create_user_session(user_id: str, user_email: str = None) -> str:
    """Issue a session token for a user, replacing any previous one"""
    _logger.info(f"Creating user session for {mask_email(user_email or user_id)}")
    db = get_db_session()
    try:
        raw_string = datetime.now().isoformat() + "-" + user_id + "-" + os.urandom(16).hex()

        session_token = raw_string.encode('utf-8').hex()
        expiration_time = datetime.now() + timedelta(hours=SESSION_DURATION_HOURS)

        existing_session = db.query(UserSession).filter_by(user_id=user_id).first()

        if existing_session:
            _logger.info("Updating existing session")
            existing_session.session_token = session_token
            existing_session.user_email = user_email
            existing_session.expires_at = expiration_time
        else:
            db.add(UserSession(
                user_id=user_id,
                user_email=user_email,
                session_token=session_token,
                expires_at=expiration_time
            ))
        db.commit()
        return session_token
    except Exception as e:
        db.rollback()
        _logger.error(f"Error creating user session: {str(e)}", exc_info=True)
        raise Exception("Error creating user session")
    finally:
        db.close()


def delete_user_session(session_token: str) -> bool:
    """Remove a session; returns False when the token was unknown"""
    db = get_db_session()
    try:
        deleted = db.query(UserSession).filter_by(session_token=session_token).delete()
        db.commit()
        return deleted > 0
    except Exception as e:
        db.rollback()
        _logger.error(f"Error deleting user session: {str(e)}", exc_info=True)
        raise
    finally:
        db.close()
