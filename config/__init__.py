import os

_ENV_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    # APP_SETTINGS names a module directly; otherwise APP_ENV picks one (default development)
    explicit = os.getenv("APP_SETTINGS", "").strip()
    if explicit:
        return explicit
    return _ENV_MODULES.get(os.getenv("APP_ENV", "development").strip().lower(), "config.development")
