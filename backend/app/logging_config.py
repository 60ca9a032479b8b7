"""
Logging del backend de contacto.

JSON (python-json-logger) en production/staging, texto legible en development
y casi silencio en test. Los registros del flujo de contacto llevan sus propios
campos (``event``, ``kind``, ``error_count``, ``recipients`` ...) y los datos
personales del formulario se eliminan en el formatter aunque alguien los pase
por ``extra``.
"""

import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from flask import Flask, g, has_request_context, request
from pythonjsonlogger import jsonlogger
from werkzeug.exceptions import HTTPException

from .services.request_utils import get_client_ip

# Campos de contexto que el flujo de contacto añade con ``extra``
CONTACT_FIELDS = (
    "event",
    "kind",
    "error_count",
    "recipients",
    "bcc",
    "plate",
    "error",
    "status_code",
    "response_time_ms",
)

# Campos del formulario que nunca se escriben en un log
PERSONAL_FIELDS = frozenset({
    "first_name",
    "last_name",
    "full_name",
    "email",
    "phone",
    "body",
    "html",
    "record",
})

REDACTED = "[redacted]"


def contact_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Campos de contacto presentes en el registro, en orden fijo."""
    return {
        name: getattr(record, name)
        for name in CONTACT_FIELDS
        if getattr(record, name, None) is not None
    }


def redact_personal_fields(record: logging.LogRecord) -> None:
    for name in PERSONAL_FIELDS & set(vars(record)):
        setattr(record, name, REDACTED)


class ContactJsonFormatter(jsonlogger.JsonFormatter):
    """Una línea JSON por registro; los campos personales salen como ``[redacted]``."""

    def __init__(self, *args, app_env: str = "production", **kwargs):
        super().__init__(*args, **kwargs)
        self.app_env = app_env

    def add_fields(self, log_record, record, message_dict):
        redact_personal_fields(record)
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["app_env"] = self.app_env
        log_record.update(contact_fields(record))

        if has_request_context():
            log_record["request_id"] = getattr(g, "request_id", None)
            log_record["method"] = request.method
            log_record["path"] = request.path
            log_record["remote_addr"] = get_client_ip(request)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


class DevelopmentFormatter(logging.Formatter):
    """Salida de terminal: ``[hora] NIVEL logger | mensaje [contexto]``."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        redact_personal_fields(record)
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")
        line = f"{color}[{timestamp}] {record.levelname:8s}{self.RESET} {record.name} | {record.getMessage()}"

        context = []
        if has_request_context():
            request_id = getattr(g, "request_id", None)
            if request_id:
                context.append(f"request_id={request_id[:8]}")
            context.append(f"{request.method} {request.path}")
        context.extend(f"{name}={value}" for name, value in contact_fields(record).items())
        if context:
            line += f" [{' '.join(context)}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _log_level(app: Flask) -> int:
    configured = app.config.get("LOG_LEVEL")
    if configured:
        return getattr(logging, str(configured).upper(), logging.INFO)
    return {"test": logging.WARNING, "development": logging.DEBUG}.get(
        app.config.get("APP_ENV"), logging.INFO
    )


def configure_logging(app: Flask) -> None:
    """
    Engancha un handler a stdout en ``app.logger`` (y en root fuera de test).

    En test no se tocan los handlers existentes y ``app.logger`` propaga para
    que ``caplog`` vea los registros de los servicios.
    """
    app_env = app.config.get("APP_ENV", "production")
    level = _log_level(app)

    json_enabled = app.config.get("LOG_JSON_ENABLED")
    if json_enabled is None:
        json_enabled = app_env in {"production", "staging"}
    formatter = (
        ContactJsonFormatter(fmt="%(message)s", app_env=app_env)
        if json_enabled
        else DevelopmentFormatter()
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if app_env == "test":
        app.logger.addHandler(handler)
        app.logger.propagate = True
    else:
        app.logger.handlers[:] = [handler]
        app.logger.propagate = False
        root_logger.handlers[:] = [handler]
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    app.logger.setLevel(level)
    root_logger.setLevel(level)


def setup_request_logging(app: Flask) -> None:
    """Request id en ``g`` y en ``X-Request-ID``; una línea por petición completada."""

    @app.before_request
    def start_request_timer():
        g.request_id = uuid.uuid4().hex
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_completed(response):
        started = getattr(g, "request_start_time", None)
        if started is not None:
            app.logger.info(
                "%s %s -> %s",
                request.method,
                request.path,
                response.status_code,
                extra={
                    "event": "request.completed",
                    "status_code": response.status_code,
                    "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        if hasattr(g, "request_id"):
            response.headers.setdefault("X-Request-ID", g.request_id)
        return response

    @app.errorhandler(Exception)
    def log_uncaught_exception(error: Exception):
        if isinstance(error, HTTPException):
            return error
        app.logger.error(
            "Excepción no controlada: %s",
            type(error).__name__,
            exc_info=True,
            extra={"event": "exception.uncaught"},
        )
        raise


def get_logger(name: str) -> logging.Logger:
    """Loggers de servicios bajo ``backend.app`` para compartir sus handlers."""
    return logging.getLogger(name)
