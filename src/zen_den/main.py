from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .cli import register as register_cli
from .container import Container, build_container
from .core.constants import FREQUENT_VISITOR_DAYS, FREQUENT_VISITOR_MIN_VISITS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema
from .database.connection import DBConfig
from .logging import get_logger, setup_logging
from .visits.controller import register as register_visits

log = get_logger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = dict(getattr(settings, "DB_CONFIG"))
    app.config["DB_CONFIG"] = db_config
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        json_output=bool(getattr(settings, "LOG_JSON", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
    )
    log.info("app.starting", settings=settings_module, db=DBConfig.from_mapping(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
        container = build_container(
            db_config=db_config,
            frequent_days=int(getattr(settings, "FREQUENT_VISITOR_DAYS", FREQUENT_VISITOR_DAYS)),
            frequent_min_visits=int(getattr(settings, "FREQUENT_VISITOR_MIN_VISITS", FREQUENT_VISITOR_MIN_VISITS)),
        )

    register_visits(app, container)
    register_dashboard(app, container)
    register_cli(app, container)

    return app
