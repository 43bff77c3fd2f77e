# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    EXTENSION_KEY,
    AppConfig,
    AuthConfig,
    CacheConfig,
    DatabaseConfig,
    SecurityConfig,
    load_config,
)

__all__ = [
    "EXTENSION_KEY",
    "AppConfig",
    "AuthConfig",
    "CacheConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "load_config",
]
