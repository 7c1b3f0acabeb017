"""Typed, user-facing errors raised by action handlers"""
from fastapi import HTTPException

STATUS_BY_CODE = {
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "INTERNAL_SERVER_ERROR": 500,
}


class ActionError(HTTPException):
    """An error with a machine-readable code and a human-readable message.

    The HTTP status is derived from the code, so handlers only ever name the
    condition. Unknown codes map to 500.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(status_code=STATUS_BY_CODE.get(code, 500), detail=message)

    def to_dict(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


def unauthorized(message: str = "You must be signed in to perform this action.") -> ActionError:
    return ActionError("UNAUTHORIZED", message)


def email_not_found() -> ActionError:
    return ActionError("NOT_FOUND", "Email not found.")
