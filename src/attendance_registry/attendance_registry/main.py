from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .container import build_container
from .core.enums import StorageBackend
from .core.exceptions import RegistryConfigurationError
from .database.bootstrap import apply_schema, list_tables
from .ledger.clock import Clock

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(config_overrides: Optional[dict] = None, *, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(level=str(app.config.get("LOG_LEVEL", "INFO")).upper(), format=_LOG_FORMAT)

    admin_identity = app.config.get("ADMIN_IDENTITY")
    if not admin_identity:
        raise RegistryConfigurationError("ADMIN_IDENTITY is not configured")

    backend = app.config.get("STORAGE_BACKEND", StorageBackend.MEMORY.value)
    db_config = app.config.get("DB_CONFIG")
    logger.info("settings=%s backend=%s", settings_module, backend)

    if backend == StorageBackend.MYSQL.value and bool(app.config.get("AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        admin_identity=admin_identity,
        backend=backend,
        db_config=db_config,
        clock=clock,
    )
    app.extensions["attendance_registry"] = container

    register_api(app, container)

    return app
