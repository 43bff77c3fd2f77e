# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from authportal.application.use_cases.accounts.check_availability import CheckAvailabilityUseCase
from authportal.application.use_cases.accounts.login_account import LoginAccountUseCase
from authportal.application.use_cases.accounts.logout_account import LogoutAccountUseCase
from authportal.application.use_cases.accounts.register_account import RegisterAccountUseCase
from authportal.application.use_cases.accounts.request_password_reset import \
    RequestPasswordResetUseCase
from authportal.application.use_cases.accounts.reset_password import ResetPasswordUseCase
from authportal.infrastructure.audit import AuditAction, audit_log
from authportal.interfaces.http.auth import (current_account, current_session_id,
                                             login_required, session_cookie_name)
from authportal.interfaces.http.dto.auth import (AuthSuccessDTO, ForgotPasswordRequestDTO,
                                                 LoginRequestDTO, RegisterRequestDTO,
                                                 ResetPasswordRequestDTO, UserViewDTO)
from authportal.shared.config import AppConfig
from authportal.shared.errors.base import AppError
from authportal.shared.errors.validation import raise_validation_error
from authportal.shared.logging import logger
from authportal.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _success(dto: AuthSuccessDTO) -> Response:
    return jsonify(dto.model_dump(exclude_none=True))


class AuthController:
    def __init__(
        self,
        *,
        config: AppConfig,
        register_use_case: RegisterAccountUseCase,
        login_use_case: LoginAccountUseCase,
        logout_use_case: LogoutAccountUseCase,
        request_reset_use_case: RequestPasswordResetUseCase,
        reset_password_use_case: ResetPasswordUseCase,
        availability_use_case: CheckAvailabilityUseCase,
    ) -> None:
        self._config = config
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._request_reset_use_case = request_reset_use_case
        self._reset_password_use_case = reset_password_use_case
        self._availability_use_case = availability_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            account = self._register_use_case.execute(dto.to_input())
        except AppError as exc:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=_get_client_ip(),
                details={"code": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            account_id=account.id,
            ip_address=_get_client_ip(),
            details={"username": account.username},
        )
        payload = AuthSuccessDTO(
            message="Registration successful!",
            user=UserViewDTO(**account.public_view()),
        )
        logger.info(f"auth.register: ok account_id={account.id}")
        return _success(payload), 200

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        try:
            account, session_id = self._login_use_case.execute(dto.username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username, "code": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            account_id=account.id,
            ip_address=ip_address,
            details={"username": account.username},
        )

        response = _success(
            AuthSuccessDTO(message="Login successful!", user=UserViewDTO(username=account.username))
        )
        response.set_cookie(
            session_cookie_name(),
            session_id,
            httponly=True,
            samesite=self._config.security.cookie_samesite,
            secure=self._config.security.cookie_secure,
            max_age=self._config.auth.session_ttl,
        )
        logger.info(f"auth.login: ok account_id={account.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(current_session_id())

        audit_log(AuditAction.LOGOUT, ip_address=_get_client_ip())

        response = _success(AuthSuccessDTO(message="Logged out successfully."))
        response.delete_cookie(session_cookie_name())
        logger.info("auth.logout: ok")
        return response, 200

    @rate_limit()
    def forgot_password(self) -> tuple[Response, int]:
        try:
            dto = ForgotPasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        message = self._request_reset_use_case.execute(dto.email)
        audit_log(AuditAction.PASSWORD_RESET_REQUESTED, ip_address=_get_client_ip())
        return _success(AuthSuccessDTO(message=message)), 200

    def reset_token_status(self, token: str) -> tuple[Response, int]:
        self._reset_password_use_case.check_token(token)
        return jsonify({"success": True, "token": token}), 200

    @rate_limit()
    def reset_password(self) -> tuple[Response, int]:
        try:
            dto = ResetPasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            account = self._reset_password_use_case.execute(
                dto.token, dto.password, dto.confirm_password
            )
        except AppError as exc:
            audit_log(
                AuditAction.PASSWORD_RESET_FAILED,
                ip_address=_get_client_ip(),
                details={"code": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.PASSWORD_RESET, account_id=account.id, ip_address=_get_client_ip())
        return _success(AuthSuccessDTO(message="Password has been reset successfully.")), 200

    def check_username(self) -> Response:
        exists = self._availability_use_case.username_exists(request.args.get("username", ""))
        return jsonify({"exists": exists})

    def check_email(self) -> Response:
        exists = self._availability_use_case.email_exists(request.args.get("email", ""))
        return jsonify({"exists": exists})

    def check_phone(self) -> Response:
        exists = self._availability_use_case.phone_exists(
            request.args.get("phone", ""), request.args.get("countryCode", "")
        )
        return jsonify({"exists": exists})

    @login_required
    def current_session(self) -> Response:
        return jsonify({"success": True, "user": current_account().to_dict()})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/api/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/api/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/api/forgot-password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule(
            "/reset-password/<token>", view_func=self.reset_token_status, methods=["GET"]
        )
        bp.add_url_rule("/api/reset-password", view_func=self.reset_password, methods=["POST"])
        bp.add_url_rule("/api/check-username", view_func=self.check_username, methods=["GET"])
        bp.add_url_rule("/api/check-email", view_func=self.check_email, methods=["GET"])
        bp.add_url_rule("/api/check-phone", view_func=self.check_phone, methods=["GET"])
        bp.add_url_rule("/api/session", view_func=self.current_session, methods=["GET"])
        return bp
