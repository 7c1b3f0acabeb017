"""Remote-callable email draft actions"""
import logging
from fastapi import APIRouter, Request
from mailpolish.schemas.email import (EmailCreate, EmailUpdate, EmailDelete, EmailPolish,
                                      EmailResult, EmailListResult)
from mailpolish.services.email_services import (create_email, update_email, list_emails,
                                                delete_email, polish_email)
from mailpolish.services.utils.session_management import validate_session

_logger = logging.getLogger(__name__)
router = APIRouter(prefix="/_actions", tags=["actions"])


@router.post("/createEmail", response_model=EmailResult)
async def create_email_action(payload: EmailCreate, request: Request):
    """Create a new email draft"""
    _logger.info("Create Email Action Hit")
    user = await validate_session(request)
    return EmailResult(email=create_email(user, payload))


@router.post("/updateEmail", response_model=EmailResult)
async def update_email_action(payload: EmailUpdate, request: Request):
    """Update some fields of an email draft"""
    _logger.info("Update Email Action Hit")
    user = await validate_session(request)
    return EmailResult(email=update_email(user, payload))


@router.post("/listEmails", response_model=EmailListResult)
async def list_emails_action(request: Request):
    """List the caller's email drafts"""
    _logger.info("List Emails Action Hit")
    user = await validate_session(request)
    return EmailListResult(emails=list_emails(user))


@router.post("/deleteEmail", response_model=EmailResult)
async def delete_email_action(payload: EmailDelete, request: Request):
    """Delete an email draft"""
    _logger.info("Delete Email Action Hit")
    user = await validate_session(request)
    return EmailResult(email=delete_email(user, payload.id))


@router.post("/polishEmail", response_model=EmailResult)
async def polish_email_action(payload: EmailPolish, request: Request):
    """Generate an AI-polished variant of an email draft"""
    _logger.info("Polish Email Action Hit")
    user = await validate_session(request)
    return EmailResult(email=polish_email(user, payload))
