# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.accounts.check_availability import CheckAvailabilityUseCase
from .use_cases.accounts.login_account import LoginAccountUseCase
from .use_cases.accounts.logout_account import LogoutAccountUseCase
from .use_cases.accounts.register_account import RegisterAccountUseCase, RegistrationInput
from .use_cases.accounts.request_password_reset import RequestPasswordResetUseCase
from .use_cases.accounts.reset_password import ResetPasswordUseCase
from .use_cases.weather.get_weather import GetWeatherUseCase, WeatherProvider, WeatherReport

__all__ = [
    "CheckAvailabilityUseCase",
    "GetWeatherUseCase",
    "LoginAccountUseCase",
    "LogoutAccountUseCase",
    "RegisterAccountUseCase",
    "RegistrationInput",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "WeatherProvider",
    "WeatherReport",
]
