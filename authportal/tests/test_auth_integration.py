from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authportal.app import create_app
from authportal.domain.accounts.entities import ResetNotification
from authportal.infrastructure.container import Container
from authportal.infrastructure.db import build_engine
from authportal.shared.config import AppConfig, AuthConfig, DatabaseConfig, SecurityConfig

REGISTRATION = {
    "username": "alice",
    "email": "alice@example.com",
    "phone": "5551234567",
    "gender": "female",
    "password": "Secret123!",
    "confirmPassword": "Secret123!",
    "countryCode": "+1",
}


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[ResetNotification] = []

    def send(self, notification: ResetNotification) -> None:
        self.sent.append(notification)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def _config(**overrides) -> AppConfig:
    return AppConfig(
        public_base_url="http://portal.test/",
        database=DatabaseConfig(url="sqlite://"),
        auth=AuthConfig(password_hash_method="pbkdf2:sha256:1000"),
        **overrides,
    )


@pytest.fixture()
def container(clock, notifier: RecordingNotifier) -> Iterator[Container]:
    config = _config()
    engine = build_engine(config.database)
    yield Container(config, engine, clock=clock, notifier=notifier)
    engine.dispose()


@pytest.fixture()
def make_client(clock, notifier: RecordingNotifier) -> Iterator[Callable[[AppConfig], FlaskClient]]:
    engines = []

    def factory(config: AppConfig) -> FlaskClient:
        engine = build_engine(config.database)
        engines.append(engine)
        container = Container(config, engine, clock=clock, notifier=notifier)
        return create_app(config, container=container).test_client()

    yield factory
    for engine in engines:
        engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container.config, container=container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client


def _login(client: FlaskClient, password: str = "Secret123!"):
    return client.post("/api/login", json={"username": "alice", "password": password})


def _reset_token(notifier: RecordingNotifier) -> str:
    return notifier.sent[-1].link.rsplit("/", 1)[-1]


def test_register_then_duplicate(client: FlaskClient) -> None:
    first = client.post("/api/register", json=REGISTRATION)
    assert first.status_code == 200
    assert first.get_json()["user"] == {"username": "alice", "email": "alice@example.com"}

    second = client.post(
        "/api/register", json={**REGISTRATION, "email": "ALICE@example.com", "phone": "5550000000"}
    )
    assert second.status_code == 400
    assert second.get_json()["errors"] == [
        "Username 'alice' is already registered.",
        "Email 'alice@example.com' is already registered.",
    ]

    assert client.get("/api/check-username?username=alice").get_json() == {"exists": True}
    assert client.get(
        "/api/check-phone", query_string={"phone": "555-123-4567", "countryCode": "+1"}
    ).get_json() == {"exists": True}


def test_check_phone_with_combined_number(client: FlaskClient) -> None:
    client.post("/api/register", json=REGISTRATION)

    taken = client.get("/api/check-phone?phone=%2B15551234567")
    free = client.get("/api/check-phone", query_string={"phone": "+445551234567"})

    assert taken.get_json() == {"exists": True}
    assert free.get_json() == {"exists": False}


def test_register_missing_fields(client: FlaskClient) -> None:
    response = client.post("/api/register", json={"username": "alice"})

    assert response.status_code == 400
    assert response.get_json()["errors"][0] == "All fields are required."


def test_login_failures_are_identical(client: FlaskClient) -> None:
    client.post("/api/register", json=REGISTRATION)

    wrong = _login(client, "Wrong123!")
    unknown = client.post("/api/login", json={"username": "mallory", "password": "Wrong123!"})
    missing = client.post("/api/login", json={"username": "alice"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()
    assert missing.status_code == 401
    assert missing.get_json()["errors"] == ["Username and password are required."]


def test_session_gate_and_logout(client: FlaskClient) -> None:
    client.post("/api/register", json=REGISTRATION)
    assert client.get("/api/session").status_code == 401

    assert _login(client).status_code == 200
    session = client.get("/api/session")
    assert session.status_code == 200
    assert session.get_json()["user"]["username"] == "alice"

    assert client.post("/logout").get_json()["message"] == "Logged out successfully."
    assert client.get("/api/session").status_code == 401


def test_session_expires_after_ttl(client: FlaskClient, clock) -> None:
    client.post("/api/register", json=REGISTRATION)
    _login(client)

    clock.advance(hours=24)

    assert client.get("/api/session").status_code == 401


def test_forgot_password_does_not_reveal_accounts(
    client: FlaskClient, notifier: RecordingNotifier
) -> None:
    client.post("/api/register", json=REGISTRATION)

    known = client.post("/api/forgot-password", json={"email": "alice@example.com"})
    unknown = client.post("/api/forgot-password", json={"email": "nobody@example.com"})
    empty = client.post("/api/forgot-password", json={"email": ""})

    assert known.status_code == unknown.status_code == 200
    assert known.get_json() == unknown.get_json()
    assert known.get_json()["message"] == (
        "If an account with that email exists, a password reset link has been sent."
    )
    assert len(notifier.sent) == 1
    assert notifier.sent[0].link.startswith("http://portal.test/reset-password/")
    assert empty.status_code == 400
    assert empty.get_json()["errors"] == ["Email is required."]


def test_reset_password_single_use(client: FlaskClient, notifier: RecordingNotifier) -> None:
    client.post("/api/register", json=REGISTRATION)
    client.post("/api/forgot-password", json={"email": "alice@example.com"})
    token = _reset_token(notifier)

    assert client.get(f"/reset-password/{token}").status_code == 200

    body = {"token": token, "password": "NewSecret1!", "confirmPassword": "NewSecret1!"}
    reset = client.post("/api/reset-password", json=body)
    assert reset.status_code == 200
    assert reset.get_json()["message"] == "Password has been reset successfully."

    again = client.post("/api/reset-password", json=body)
    assert again.status_code == 400
    assert again.get_json()["errors"] == ["Invalid or expired password reset token."]
    assert client.get(f"/reset-password/{token}").status_code == 400

    assert _login(client).status_code == 401
    assert _login(client, "NewSecret1!").status_code == 200


def test_reset_token_expires(client: FlaskClient, notifier: RecordingNotifier, clock) -> None:
    client.post("/api/register", json=REGISTRATION)
    client.post("/api/forgot-password", json={"email": "alice@example.com"})
    token = _reset_token(notifier)

    clock.advance(hours=1)

    response = client.post(
        "/api/reset-password",
        json={"token": token, "password": "NewSecret1!", "confirmPassword": "NewSecret1!"},
    )
    assert response.status_code == 400
    assert _login(client).status_code == 200


def test_weather_requires_login_and_is_cached(client: FlaskClient) -> None:
    assert client.get("/api/user-weather").status_code == 401

    client.post("/api/register", json=REGISTRATION)
    _login(client)

    first = client.get("/api/user-weather").get_json()
    second = client.get("/api/user-weather").get_json()

    assert first["success"] is True
    assert first["cached"] is False
    assert second["cached"] is True
    assert second["weather"] == first["weather"]
    assert first["weather"]["city"] == "London"


def test_health_and_security_headers(client: FlaskClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_rate_limit_follows_app_config(make_client) -> None:
    limited = _config(
        security=SecurityConfig(enable_rate_limit=True, rate_limit_requests=2, rate_limit_window=60)
    )
    client = make_client(limited)

    statuses = [
        client.post("/api/forgot-password", json={"email": "a@example.com"}).status_code
        for _ in range(3)
    ]

    assert statuses == [200, 200, 429]
    rejected = client.post("/api/forgot-password", json={"email": "a@example.com"})
    assert rejected.get_json() == {
        "success": False,
        "code": "rate_limited",
        "errors": ["Too many requests. Please try again later."],
    }


def test_rate_limiters_are_per_app(make_client) -> None:
    limited = _config(
        security=SecurityConfig(enable_rate_limit=True, rate_limit_requests=1, rate_limit_window=60)
    )
    first = make_client(limited)
    second = make_client(limited)

    assert first.post("/api/forgot-password", json={"email": "a@example.com"}).status_code == 200
    assert first.post("/api/forgot-password", json={"email": "a@example.com"}).status_code == 429
    assert second.post("/api/forgot-password", json={"email": "a@example.com"}).status_code == 200


def test_rate_limit_disabled_by_app_config(make_client, monkeypatch) -> None:
    monkeypatch.setenv("ENABLE_RATE_LIMIT", "1")
    client = make_client(_config(security=SecurityConfig(enable_rate_limit=False)))

    statuses = {
        client.post("/api/register", json={"username": "alice"}).status_code for _ in range(7)
    }

    assert statuses == {400}
