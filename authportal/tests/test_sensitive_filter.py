from __future__ import annotations

from authportal.shared.logging.sensitive_filter import sanitize_message, sanitize_record


def test_reset_link_token_is_masked() -> None:
    token = "ab" * 32
    message = sanitize_message(f"link=http://localhost:5000/reset-password/{token}")

    assert token not in message
    assert "/reset-password/***REDACTED***" in message


def test_password_and_email_are_masked() -> None:
    message = sanitize_message("to=alice@example.com password=Secret123!")

    assert "alice" not in message
    assert "***@example.com" in message
    assert "Secret123!" not in message


def test_database_credentials_are_masked() -> None:
    message = sanitize_message("postgresql://portal:hunter2@db/portal")

    assert message == "postgresql://portal:***REDACTED***@db/portal"


def test_sanitize_record_rewrites_message() -> None:
    record = {"message": "session_id=" + "x" * 40}

    assert sanitize_record(record) is True
    assert "x" * 40 not in record["message"]
