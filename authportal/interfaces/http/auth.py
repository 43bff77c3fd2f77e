# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from authportal.domain.accounts.entities import AccountRef
from authportal.domain.accounts.repositories import SessionStore
from authportal.shared.config import EXTENSION_KEY
from authportal.shared.errors.base import AuthenticationRequiredError
from authportal.shared.logging import logger


def session_store() -> SessionStore:
    return current_app.extensions[EXTENSION_KEY].session_store


def session_cookie_name() -> str:
    return current_app.extensions[EXTENSION_KEY].config.auth.session_cookie_name


def current_session_id() -> str:
    return request.cookies.get(session_cookie_name(), "")


def current_account() -> AccountRef:
    """Account bound by ``login_required`` for the running request."""
    return g.account


def login_required(f):
    @wraps(f)
    def inner(*a, **kw):
        session_id = current_session_id()
        if not session_id:
            logger.warning(
                f"No session cookie on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise AuthenticationRequiredError()

        account = session_store().get(session_id)
        if account is None:
            logger.warning(
                f"Auth failed (session not found/expired) on {request.method} {request.path}"
            )
            raise AuthenticationRequiredError()

        g.account = account
        logger.debug(f"Auth OK: account={account.id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


__all__ = [
    "EXTENSION_KEY",
    "current_account",
    "current_session_id",
    "login_required",
    "session_cookie_name",
    "session_store",
]
