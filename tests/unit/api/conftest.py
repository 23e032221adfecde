"""
HTTP test fixtures.

The root `org` fixture stores users in `user_repo`; here `user_repo` is the
container singleton so the app under test sees the same roster.
"""

import pytest
from fastapi.testclient import TestClient

from teamtasks.api.main import app
from teamtasks.container import get_user_repository
from teamtasks.identity.auth_users import create_access_token


@pytest.fixture
def user_repo():
    return get_user_repository()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict[str, str]:
        token, _ = create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers
