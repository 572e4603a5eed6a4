"""Shared test fixtures for usergate.

The gateway talks to a real authentication service app in-process:
httpx.WSGITransport routes AuthServiceClient calls straight into the
service's Flask app, so every gateway test crosses the service boundary.
Each test gets a fresh temp-file database.
"""

import os
import tempfile

import httpx
import pytest

from usergate.auth import service
from usergate.auth.schemas import RegisterRequest
from usergate.auth.token import TokenIssuer
from usergate.config import Settings
from usergate.db import Database
from usergate.gateway import create_app
from usergate.gateway.client import AuthServiceClient
from usergate.service import create_service_app

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
PASSWORD = "TestPass123"


@pytest.fixture
def db_path():
    """Path of a temp-file database, removed after the test."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    try:
        os.unlink(path)
    except OSError:
        pass


@pytest.fixture
def settings(db_path):
    """Test settings: temp database, fast bcrypt, generous rate limit."""
    return Settings(
        _env_file=None,
        environment="test",
        database_path=db_path,
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
        throttle_limit=1000,
    )


@pytest.fixture
def database(settings):
    """Database with schema applied."""
    db = Database(settings.database_path)
    db.init()
    return db


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def service_app(settings, database):
    app = create_service_app(settings, database)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def service_client(service_app):
    """Flask test client for the authentication service."""
    with service_app.test_client() as client:
        yield client


@pytest.fixture
def auth_client(service_app):
    """AuthServiceClient wired to the in-process service app."""
    http = httpx.Client(
        transport=httpx.WSGITransport(app=service_app),
        base_url="http://auth-service",
    )
    client = AuthServiceClient(http)
    yield client
    client.close()


@pytest.fixture
def app(settings, auth_client):
    """Gateway app."""
    gateway = create_app(settings, client=auth_client)
    gateway.config["TESTING"] = True
    return gateway


@pytest.fixture
def client(app):
    """Flask test client for the gateway."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(database):
    """A self-registered user stored directly.

    Returns a tuple of (user, password).
    """
    data = RegisterRequest(email="owner@example.com", password=PASSWORD, name="Owner")
    with database.get_core(atomic=True) as core:
        user = service.create_user(core, data, rounds=4)
    return user, PASSWORD


@pytest.fixture
def auth_headers(test_user, token_issuer):
    """Authorization header for test_user."""
    user, _password = test_user
    return {"Authorization": f"Bearer {token_issuer.generate_access_token(user)}"}


@pytest.fixture
def register_user(client):
    """Register through the gateway.

    Returns a function (email, password=PASSWORD, name=...) -> response.
    """
    def register(email, password=PASSWORD, name="Test User"):
        return client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
    return register


@pytest.fixture
def registered(register_user):
    """A user registered through the gateway.

    Returns a tuple of (user json, auth headers).
    """
    body = register_user("alice@example.com", name="Alice").get_json()
    return body["user"], {"Authorization": f"Bearer {body['accessToken']}"}


@pytest.fixture
def second_registered(register_user):
    """Another independent registered user, as (user json, auth headers)."""
    body = register_user("bob@example.com", name="Bob").get_json()
    return body["user"], {"Authorization": f"Bearer {body['accessToken']}"}
