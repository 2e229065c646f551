import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from supplier_hub.api.dependencies import get_http_client
from supplier_hub.core.config import Settings, get_settings
from supplier_hub.core.database import get_db, init_db
from supplier_hub.main import app


API_KEY = "test-api-key"
SUPPLIER_PORTAL_URL = "https://supplier.test"
MENU_PLATFORM_URL = "https://menu.test"
MAIN_SYSTEM_URL = "https://main.test"


class FakeDownstream:
    """
    Stand-in for every downstream platform.

    Records each outbound request and answers with whatever the test set
    through ``respond`` / ``raise_error``.
    """

    def __init__(self):
        self.calls = []
        self._status = 200
        self._json = {"success": True}
        self._text = None
        self._error = None

    def respond(self, status=200, json_body=None, text=None):
        self._status = status
        self._json = json_body
        self._text = text
        self._error = None

    def raise_error(self, error_cls, message="boom"):
        self._error = (error_cls, message)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self._error:
            error_cls, message = self._error
            raise error_cls(message, request=request)
        if self._text is not None:
            return httpx.Response(self._status, text=self._text)
        if self._json is None:
            return httpx.Response(self._status)
        return httpx.Response(self._status, json=self._json)

    @property
    def last(self) -> httpx.Request:
        return self.calls[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def test_settings():
    return Settings(
        API_KEY=API_KEY,
        SUPPLIER_PORTAL_URL=SUPPLIER_PORTAL_URL,
        MENU_PLATFORM_URL=MENU_PLATFORM_URL,
        MAIN_SYSTEM_URL=MAIN_SYSTEM_URL,
        SUPPLIER_PORTAL_API_KEY=None,
        MENU_PLATFORM_API_KEY=None,
        JWT_SECRET_KEY="test-secret",
        ENVIRONMENT="test",
    )


@pytest.fixture
def downstream():
    return FakeDownstream()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(test_settings, downstream, db_session):
    http = httpx.AsyncClient(transport=httpx.MockTransport(downstream))

    def override_db():
        yield db_session

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_http_client] = lambda: http
    app.dependency_overrides[get_db] = override_db

    # no context manager: the lifespan (real http client, file database) stays off
    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


@pytest.fixture
def relay_headers():
    return {"Authorization": f"Bearer {API_KEY}"}


def register_supplier(client, email="owner@freshfoods.test", password="secret-pass-1"):
    response = client.post("/api/v1/auth/register", json={
        "supplier_name": "Fresh Foods",
        "supplier_email": "sales@freshfoods.test",
        "name": "Ana Owner",
        "email": email,
        "password": password,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def portal_user(client):
    token = register_supplier(client)
    return {
        "supplier_id": token["supplier_id"],
        "headers": {"Authorization": f"Bearer {token['access_token']}"},
    }
