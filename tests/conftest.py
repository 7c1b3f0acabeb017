"""
Pytest configuration and shared fixtures for mailpolish tests.
"""
import pytest
import sys
import os
from pathlib import Path

# Set required environment variables before importing app modules
os.environ['GROQ_API_KEY'] = 'test_groq_api_key_for_testing'
os.environ['DATABASE_URL'] = 'sqlite:///./test_mailpolish.db'

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from mailpolish.schemas.user import CurrentUser  # noqa: E402


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test, removed afterwards"""
    from mailpolish.model.base import Base
    from mailpolish.services.database import engine

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

    test_db = Path('test_mailpolish.db')
    if test_db.exists():
        test_db.unlink()


@pytest.fixture
def user_a():
    return CurrentUser(id='user_a', email='alice@example.com')


@pytest.fixture
def user_b():
    return CurrentUser(id='user_b', email='bob@example.com')


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from mailpolish.app import app
    return TestClient(app)


@pytest.fixture
def login():
    """Returns a helper that gives a client a live session for a user"""
    from mailpolish.services.utils.session_management import create_user_session

    def _login(client, user):
        token = create_user_session(user_id=user.id, user_email=user.email)
        client.cookies.set('session_token', token)
        return token
    return _login
