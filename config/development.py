import os

from .logging_conf import build_logging
from .payroll_policy import DEFAULT_CURRENCY, SOCIAL_SECURITY_CAP, SOCIAL_SECURITY_RATE, TAX_BRACKETS  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tailor_payroll"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOGGING = build_logging(LOG_LEVEL)
