import pytest
from rest_framework.test import APIClient

from core.models import User, AuthToken


def make_user(email, username='sam', password='secret123'):
    user = User(email=email, username=username)
    user.set_password(password)
    user.save()
    return user


@pytest.fixture
def user(db):
    return make_user('sam@example.com')


@pytest.fixture
def other_user(db):
    return make_user('alex@example.com', username='alex')


@pytest.fixture
def token(user):
    return AuthToken.create_token(user)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(token):
    """Client authenticated as ``user`` with a bare token key."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=token.key)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Token {AuthToken.create_token(other_user).key}')
    return client
