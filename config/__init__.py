"""Settings selection.

Each settings module exposes plain constants: ``SECRET_KEY``, ``DEBUG``,
``HR_API_BASE_URL``, ``HR_API_TIMEOUT``, ``HR_API_TOKEN``, ``DEFAULT_PROJECT``
and ``LOG_LEVEL``.
"""

import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"
