import os

_ENV_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # APP_ENV chọn module cấu hình; mặc định là 'development'.
    # SETTINGS_MODULE cho phép chỉ định trực tiếp một module cấu hình khác.
    explicit = os.getenv("SETTINGS_MODULE")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_MODULES.get(env, "config.development")
