import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from mailpolish.config import DATABASE_URL
from mailpolish.model.base import Base
from mailpolish.model.EmailDraft import EmailDraft  # noqa: F401  registers the table
from mailpolish.model.UserSession import UserSession  # noqa: F401

_logger = logging.getLogger(__name__)


engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create all tables that do not exist yet"""
    _logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)


def get_db_session() -> Session:
    """Get a database session. The caller is responsible for closing it."""
    return SessionLocal()
