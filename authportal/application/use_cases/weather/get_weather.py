# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from authportal.infrastructure.cache import InMemoryTTLCache
from authportal.shared.logging import logger


class WeatherProvider(Protocol):
    def current(self, city: str) -> dict[str, str]: ...


@dataclass(slots=True, frozen=True)
class WeatherReport:
    weather: dict[str, str]
    cached: bool


class GetWeatherUseCase:
    def __init__(
        self,
        *,
        provider: WeatherProvider,
        cache: InMemoryTTLCache[str, dict[str, str]],
        city: str,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._city = city

    def execute(self) -> WeatherReport:
        weather, cached = self._cache.get_or_set(
            f"weather-{self._city}", lambda: self._provider.current(self._city)
        )
        source = "cache" if cached else "provider"
        logger.info(f"weather: served {self._city} from {source}")
        return WeatherReport(weather=weather, cached=cached)
