# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.domain.accounts.entities import ResetNotification
from authportal.domain.accounts.repositories import CredentialStore, ResetNotifier, ResetTokenStore
from authportal.domain.accounts.validation import normalize_email
from authportal.shared.errors.base import ValidationError
from authportal.shared.logging import logger

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)
MSG_EMAIL_REQUIRED = "Email is required."


class RequestPasswordResetUseCase:
    """Issue a reset token for a known e-mail and hand the link to the notifier.

    The returned message is identical whether or not the account exists.
    """

    def __init__(
        self,
        *,
        accounts: CredentialStore,
        reset_tokens: ResetTokenStore,
        notifier: ResetNotifier,
        public_base_url: str,
    ) -> None:
        self._accounts = accounts
        self._reset_tokens = reset_tokens
        self._notifier = notifier
        self._public_base_url = public_base_url.rstrip("/")

    def execute(self, email: str) -> str:
        if not email:
            raise ValidationError([MSG_EMAIL_REQUIRED], context={"fields": ["email"]})

        account = self._accounts.find_by_email(normalize_email(email))
        if account is None:
            logger.info("auth.forgot_password: no account for supplied email")
            return RESET_REQUESTED_MESSAGE

        token = self._reset_tokens.issue(account.id)
        link = f"{self._public_base_url}/reset-password/{token.token}"
        self._notifier.send(
            ResetNotification(
                to=account.email,
                subject="Password Reset Request",
                body=f"Click this link to reset your password: {link}",
                link=link,
            )
        )
        logger.info(f"auth.forgot_password: token issued for account_id={account.id}")
        return RESET_REQUESTED_MESSAGE
