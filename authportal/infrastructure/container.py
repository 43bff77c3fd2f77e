"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authportal.application.services.password_hashing import WerkzeugPasswordHasher
from authportal.application.use_cases.accounts.check_availability import CheckAvailabilityUseCase
from authportal.application.use_cases.accounts.login_account import LoginAccountUseCase
from authportal.application.use_cases.accounts.logout_account import LogoutAccountUseCase
from authportal.application.use_cases.accounts.register_account import RegisterAccountUseCase
from authportal.application.use_cases.accounts.request_password_reset import \
    RequestPasswordResetUseCase
from authportal.application.use_cases.accounts.reset_password import ResetPasswordUseCase
from authportal.application.use_cases.weather.get_weather import GetWeatherUseCase
from authportal.domain.accounts.repositories import ResetNotifier
from authportal.infrastructure.cache import InMemoryTTLCache
from authportal.infrastructure.db import build_session_factory
from authportal.infrastructure.notifications import LoggingResetNotifier
from authportal.infrastructure.repositories.accounts.password_reset_uow import \
    SqlAlchemyPasswordResetUnitOfWork
from authportal.infrastructure.repositories.accounts.sqlalchemy_credential_store import \
    SqlAlchemyCredentialStore
from authportal.infrastructure.repositories.accounts.sqlalchemy_reset_token_store import \
    SqlAlchemyResetTokenStore
from authportal.infrastructure.repositories.accounts.sqlalchemy_session_store import \
    SqlAlchemySessionStore
from authportal.infrastructure.weather import SimulatedWeatherProvider
from authportal.interfaces.http.controllers.auth_controller import AuthController
from authportal.interfaces.http.controllers.misc_controller import MiscController
from authportal.interfaces.http.controllers.weather_controller import WeatherController
from authportal.shared.config import AppConfig


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Container:
    def __init__(
        self,
        config: AppConfig,
        engine: Engine,
        *,
        clock: Callable[[], datetime] = _utcnow,
        notifier: ResetNotifier | None = None,
    ) -> None:
        self.config = config
        self.engine = engine
        self.clock = clock
        self._notifier = notifier

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.auth.password_hash_method)

    @cached_property
    def notifier(self) -> ResetNotifier:
        return self._notifier or LoggingResetNotifier()

    @cached_property
    def credential_store(self) -> SqlAlchemyCredentialStore:
        return SqlAlchemyCredentialStore(self.session_factory)

    @cached_property
    def reset_token_store(self) -> SqlAlchemyResetTokenStore:
        return SqlAlchemyResetTokenStore(
            self.session_factory,
            ttl=timedelta(seconds=self.config.auth.reset_token_ttl),
            clock=self.clock,
        )

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(
            self.session_factory,
            ttl=timedelta(seconds=self.config.auth.session_ttl),
            clock=self.clock,
        )

    def password_reset_unit_of_work(self) -> SqlAlchemyPasswordResetUnitOfWork:
        return SqlAlchemyPasswordResetUnitOfWork(
            self.session_factory,
            reset_token_ttl=timedelta(seconds=self.config.auth.reset_token_ttl),
            clock=self.clock,
        )

    @cached_property
    def weather_cache(self) -> InMemoryTTLCache[str, dict[str, str]]:
        return InMemoryTTLCache(
            self.config.cache.weather_ttl_seconds,
            max_entries=self.config.cache.weather_max_entries,
        )

    @cached_property
    def weather_provider(self) -> SimulatedWeatherProvider:
        return SimulatedWeatherProvider()

    @cached_property
    def register_account_use_case(self) -> RegisterAccountUseCase:
        return RegisterAccountUseCase(
            accounts=self.credential_store,
            password_hasher=self.password_hasher,
            clock=self.clock,
        )

    @cached_property
    def login_account_use_case(self) -> LoginAccountUseCase:
        return LoginAccountUseCase(
            accounts=self.credential_store,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_account_use_case(self) -> LogoutAccountUseCase:
        return LogoutAccountUseCase(sessions=self.session_store)

    @cached_property
    def request_password_reset_use_case(self) -> RequestPasswordResetUseCase:
        return RequestPasswordResetUseCase(
            accounts=self.credential_store,
            reset_tokens=self.reset_token_store,
            notifier=self.notifier,
            public_base_url=self.config.public_base_url,
        )

    @cached_property
    def reset_password_use_case(self) -> ResetPasswordUseCase:
        return ResetPasswordUseCase(
            accounts=self.credential_store,
            reset_tokens=self.reset_token_store,
            password_hasher=self.password_hasher,
            unit_of_work=self.password_reset_unit_of_work,
        )

    @cached_property
    def check_availability_use_case(self) -> CheckAvailabilityUseCase:
        return CheckAvailabilityUseCase(accounts=self.credential_store)

    @cached_property
    def get_weather_use_case(self) -> GetWeatherUseCase:
        return GetWeatherUseCase(
            provider=self.weather_provider,
            cache=self.weather_cache,
            city=self.config.cache.weather_city,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            config=self.config,
            register_use_case=self.register_account_use_case,
            login_use_case=self.login_account_use_case,
            logout_use_case=self.logout_account_use_case,
            request_reset_use_case=self.request_password_reset_use_case,
            reset_password_use_case=self.reset_password_use_case,
            availability_use_case=self.check_availability_use_case,
        )

    @cached_property
    def weather_controller(self) -> WeatherController:
        return WeatherController(get_weather=self.get_weather_use_case)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
