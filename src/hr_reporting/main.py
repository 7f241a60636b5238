from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.client import ApiConfig
from .container import build_container, build_context
from .context import AppContext
from .web.controller import register as register_reports


def create_app(context: Optional[AppContext] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(__name__).debug("settings=%s api=%s", settings_module, settings.HR_API_BASE_URL)

    if context is None:
        context = build_context(
            api_config=ApiConfig(
                base_url=settings.HR_API_BASE_URL,
                timeout=float(settings.HR_API_TIMEOUT),
                token=settings.HR_API_TOKEN,
            ),
            default_project=settings.DEFAULT_PROJECT,
        )
    container = build_container(context=context)
    app.extensions["hr_reporting"] = container

    register_reports(app, container)

    return app
