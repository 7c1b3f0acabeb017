from pydantic import BaseModel
from typing import Optional


class CurrentUser(BaseModel):
    """The authenticated caller, resolved from a session"""
    id: str
    email: Optional[str] = None
