from __future__ import annotations

import atexit
import importlib
import logging
import time
import uuid

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_clock_time
from .container import build_container
from .core.constants import DEFAULT_HR_PASSWORD, DEFAULT_LATE_CUTOFF
from .core.logging import configure_logging
from .database.bootstrap import SCHEMA_PATH, apply_schema, list_tables
from .hr.controller import register as register_hr

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("request")


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        latency_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        request_logger.info(
            "request",
            extra={
                "request_id": g.get("request_id"),
                "path": request.path,
                "method": request.method,
                "status_code": response.status_code,
                "latency_ms": round(latency_ms, 2),
            },
        )
        response.headers["X-Request-Id"] = g.get("request_id", "")
        return response


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql"))
    db_config = getattr(settings, "DB_CONFIG", None)
    late_cutoff_raw = getattr(settings, "LATE_CUTOFF", None)
    late_cutoff = parse_clock_time(late_cutoff_raw) if late_cutoff_raw else DEFAULT_LATE_CUTOFF

    logger.info(f"Starting timekeeper (settings={settings_module}, backend={backend})")

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info(f"Schema ready (tables={len(list_tables(db_config))})")

    container = build_container(
        backend=backend,
        db_config=db_config,
        hr_password=str(getattr(settings, "HR_PASSWORD", DEFAULT_HR_PASSWORD)),
        late_cutoff=late_cutoff,
    )
    app.extensions["timekeeper"] = container
    atexit.register(container.close)

    _register_request_logging(app)
    register_attendance(app, container)
    register_hr(app, container)

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

    return app
