"""Use-case for ending a login session."""

from __future__ import annotations

from authportal.domain.accounts.repositories import SessionStore


class LogoutAccountUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.destroy(session_id)
