# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, cast

GENERIC_SERVER_ERROR = "Server error. Please try again."


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    messages: Sequence[str] = field(default_factory=tuple)
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        self.messages = tuple(self.messages)
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "code": self.code,
            "errors": list(self.messages),
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Caller-correctable failure raised by the auth workflow.

    Subclasses pin ``code``, ``status`` and ``message`` as class attributes.
    """

    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST
    message = "Request could not be completed."

    def __init__(
        self,
        *messages: str,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, type(self).code)
        resolved_status = status or cast(HTTPStatus, type(self).status)
        resolved_messages = messages or (type(self).message,)
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            messages=resolved_messages,
            context=context,
        )


class InfrastructureError(AppError):
    """Store or hashing failure; the caller only ever sees a generic message."""

    def __init__(
        self,
        code: str = "internal_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(
            code=code,
            status=resolved_status,
            messages=(GENERIC_SERVER_ERROR,),
            context=context,
        )

    def to_dict(self) -> dict[str, Any]:
        # context is for the server log only
        return {"success": False, "code": self.code, "errors": list(self.messages)}


class ValidationError(AppError):
    def __init__(
        self,
        messages: Sequence[str],
        *,
        code: str = "validation_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            messages=messages,
            context=context,
        )


class AuthenticationRequiredError(DomainError):
    code = "authentication_required"
    status = HTTPStatus.UNAUTHORIZED
    message = "Please log in to access this page."
