from .base import (
    GENERIC_SERVER_ERROR,
    AppError,
    AuthenticationRequiredError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "GENERIC_SERVER_ERROR",
    "AppError",
    "AuthenticationRequiredError",
    "DomainError",
    "InfrastructureError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
