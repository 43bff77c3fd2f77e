# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Simulated weather source for the dashboard demo."""

from __future__ import annotations

import random

CONDITIONS = ("Sunny", "Partly Cloudy", "Cloudy", "Rainy", "Stormy", "Foggy", "Snowy")


class SimulatedWeatherProvider:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def current(self, city: str) -> dict[str, str]:
        return {
            "city": city,
            "temperature": f"{self._rng.randint(15, 35)}°C",
            "condition": self._rng.choice(CONDITIONS),
            "humidity": f"{self._rng.randint(40, 90)}%",
            "windSpeed": f"{self._rng.randint(5, 20)} km/h",
        }


__all__ = ["CONDITIONS", "SimulatedWeatherProvider"]
