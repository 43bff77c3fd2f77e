# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from authportal.application.use_cases.weather.get_weather import GetWeatherUseCase
from authportal.interfaces.http.auth import login_required


class WeatherController:
    def __init__(self, *, get_weather: GetWeatherUseCase) -> None:
        self._get_weather = get_weather

    @login_required
    def user_weather(self) -> Response:
        report = self._get_weather.execute()
        return jsonify({"success": True, "weather": report.weather, "cached": report.cached})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("weather", __name__)
        bp.add_url_rule("/api/user-weather", view_func=self.user_weather, methods=["GET"])
        return bp
