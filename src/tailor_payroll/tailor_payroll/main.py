from __future__ import annotations

import importlib
import logging
import logging.config

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.constants import DEFAULT_CURRENCY
from .payroll.controller import register as register_payroll
from .tax.model import TaxPolicy

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging_config = getattr(settings, "LOGGING", None)
    if logging_config:
        logging.config.dictConfig(logging_config)

    tax_policy = TaxPolicy.from_table(
        getattr(settings, "TAX_BRACKETS"),
        social_security_rate=getattr(settings, "SOCIAL_SECURITY_RATE"),
        social_security_cap=getattr(settings, "SOCIAL_SECURITY_CAP"),
    )

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    container = build_container(
        db_config=db_config,
        tax_policy=tax_policy,
        currency=getattr(settings, "DEFAULT_CURRENCY", DEFAULT_CURRENCY),
    )

    register_payroll(app, container)

    return app
