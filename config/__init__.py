"""Settings modules for the Zen Den tracker, one per APP_ENV."""

import os

_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    # Anything unrecognised runs with development settings
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ALIASES.get(env, 'development')}"
