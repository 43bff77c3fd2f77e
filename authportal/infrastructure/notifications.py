# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.domain.accounts.entities import ResetNotification
from authportal.domain.accounts.repositories import ResetNotifier
from authportal.shared.logging import logger


class LoggingResetNotifier(ResetNotifier):
    """Stand-in for an e-mail gateway: writes the message to the log.

    The log filter masks the recipient and the token in the link.
    """

    def send(self, notification: ResetNotification) -> None:
        logger.info(
            "notify.reset: simulated email "
            f"to={notification.to} subject={notification.subject!r} link={notification.link}"
        )


__all__ = ["LoggingResetNotifier"]
