from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container

logger = logging.getLogger(__name__)


def _settings_dict(settings) -> dict:
    return {name: getattr(settings, name) for name in dir(settings) if name.isupper()}


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = _settings_dict(importlib.import_module(settings_module))

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    container = build_container(settings=settings)
    app.extensions["class_attendance"] = container

    logger.info(
        "[class-attendance] settings=%s store=%s students=%d",
        settings_module,
        settings.get("STORE_BACKEND", "json"),
        len(container.students.list_all()),
    )

    register_attendance(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
