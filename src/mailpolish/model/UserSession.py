from sqlalchemy import Column, DateTime, Integer, String
from mailpolish.model.base import Base

class UserSession(Base):
    __tablename__ = "user_sessions"
    
    id = Column(Integer, primary_key=True)
    user_id = Column(String, index=True, nullable=False)
    user_email = Column(String, nullable=True)
    session_token = Column(String, unique=True)
    expires_at = Column(DateTime)
