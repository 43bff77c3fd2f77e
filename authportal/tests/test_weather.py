from __future__ import annotations

import random
import re

from authportal.application.use_cases.weather.get_weather import GetWeatherUseCase
from authportal.infrastructure.cache import InMemoryTTLCache
from authportal.infrastructure.weather import CONDITIONS, SimulatedWeatherProvider


def test_simulated_provider_shape() -> None:
    report = SimulatedWeatherProvider(random.Random(7)).current("Paris")

    assert report["city"] == "Paris"
    assert 15 <= int(re.fullmatch(r"(\d+)°C", report["temperature"]).group(1)) <= 35
    assert report["condition"] in CONDITIONS
    assert 40 <= int(re.fullmatch(r"(\d+)%", report["humidity"]).group(1)) <= 90
    assert 5 <= int(re.fullmatch(r"(\d+) km/h", report["windSpeed"]).group(1)) <= 20


def test_weather_served_from_cache_on_second_call() -> None:
    calls: list[str] = []

    class CountingProvider:
        def current(self, city: str) -> dict[str, str]:
            calls.append(city)
            return {"city": city, "temperature": "20°C"}

    use_case = GetWeatherUseCase(
        provider=CountingProvider(), cache=InMemoryTTLCache(300), city="London"
    )

    first = use_case.execute()
    second = use_case.execute()

    assert first.cached is False
    assert second.cached is True
    assert second.weather == first.weather
    assert calls == ["London"]
