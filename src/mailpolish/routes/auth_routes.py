"""Session routes"""
import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from mailpolish.services.utils.session_management import validate_session, delete_user_session

_logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/me")
async def get_current_user(request: Request):
    """Get current authenticated user from the session cookie"""
    user = await validate_session(request)
    return {"id": user.id, "email": user.email, "authenticated": True}


@router.post("/logout")
async def logout(request: Request):
    """Logout and clear session"""
    token = request.cookies.get("session_token")
    if token:
        delete_user_session(token)
    response = JSONResponse(content={"message": "Logged out successfully"})
    response.delete_cookie("session_token")
    return response
