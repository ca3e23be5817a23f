from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema
from .presentations.controller import register as register_presentations
from .presentations.ticker import Ticker

logger = logging.getLogger(__name__)


def load_settings(settings_module: str | None = None) -> dict:
    """Upper-case attributes of the selected settings module, as a plain dict."""
    module = importlib.import_module(settings_module or get_settings_module())
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(settings_module: str | None = None, *, ticker: Ticker | None = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(settings_module)
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    container = build_container(settings=settings, ticker=ticker)

    if settings.get("AUTO_INIT_DB") and container.conn is not None:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)

    logger.info(
        "intern-portal started (store=%s, directory=%s)",
        settings.get("STORE_BACKEND"),
        settings.get("DIRECTORY_BACKEND"),
    )

    app.extensions["intern_portal"] = container
    register_presentations(app, container)

    return app
