"""Application configuration values."""
import os
import sys
import json
from dataclasses import dataclass
from typing import List, Optional, Tuple
from pathlib import Path
from dotenv import load_dotenv


# --- Cargar variables de entorno ---
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "staging": "staging",
    "testing": "test",
    "tests": "test",
    "pytest": "test",
    "test": "test",
}

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigurationError(RuntimeError):
    """Raised at startup when a mandatory setting is missing."""


def _normalize_env(value: str) -> str:
    normalized = _ENV_ALIASES.get(value.strip().lower(), value.strip().lower())
    return normalized or "production"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def detect_runtime_env() -> str:
    """Determina el entorno actual (production, development, test)."""
    explicit = (
        os.getenv("APP_ENV")
        or os.getenv("FLASK_ENV")
        or os.getenv("ENV")
        or os.getenv("NODE_ENV")
        or ""
    ).strip()
    if explicit:
        return _normalize_env(explicit)

    if os.getenv("PYTEST_CURRENT_TEST") or any("pytest" in arg for arg in sys.argv):
        return "test"

    debug_flag = os.getenv("FLASK_DEBUG", "").strip().lower()
    if debug_flag in _TRUTHY:
        return "development"

    return "production"


def parse_list_env(name: str, default: Optional[str] = None) -> List[str]:
    """
    Lee una lista desde el entorno.

    Acepta valores separados por comas ("a@x.nl, b@x.nl") o un array JSON.
    Los elementos vacíos se descartan.
    """
    raw = os.getenv(name, default or "").strip()
    return parse_list_value(raw)


def parse_list_value(raw) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(item).strip() for item in raw if str(item).strip()]
    raw = str(raw).strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            return [str(s).strip() for s in json.loads(raw) if str(s).strip()]
        except (TypeError, ValueError):
            return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class ContactSettings:
    """Valores de correo resueltos una sola vez al arrancar."""

    sender: object
    recipients: Tuple[str, ...]
    bcc: Tuple[str, ...] = ()
    business_name: str = "IC-North Automotive"


def resolve_sender(config) -> Optional[object]:
    """
    Determina el remitente configurado.

    Prioriza MAIL_DEFAULT_SENDER sobre MAIL_USERNAME. Soporta strings
    individuales o tuplas (nombre, email) como las acepta Flask-Mail.
    """
    sender = config.get("MAIL_DEFAULT_SENDER")

    if isinstance(sender, str):
        stripped = sender.strip()
        if stripped:
            return stripped
    elif isinstance(sender, (list, tuple)):
        cleaned = []
        for part in sender:
            if isinstance(part, str):
                part = part.strip()
            if part:
                cleaned.append(part)
        if cleaned:
            return tuple(cleaned)

    fallback = config.get("MAIL_USERNAME")
    if isinstance(fallback, str):
        fallback = fallback.strip()
        # "apikey" es el usuario SMTP de SendGrid, no una dirección
        if fallback and "@" in fallback:
            return fallback
    return None


def load_contact_settings(config) -> ContactSettings:
    """Construye el ContactSettings inmutable a partir de app.config."""
    sender = resolve_sender(config)
    if not sender:
        raise ConfigurationError(
            "FATAL: no hay remitente de correo. Define MAIL_FROM (o MAIL_DEFAULT_SENDER)."
        )

    recipients = tuple(parse_list_value(config.get("CONTACT_RECIPIENTS")))
    if not recipients:
        raise ConfigurationError(
            "FATAL: no hay destinatarios para el formulario. Define MAIL_TO con uno o más correos."
        )

    bcc = tuple(parse_list_value(config.get("CONTACT_BCC")))
    business_name = (config.get("CONTACT_BUSINESS_NAME") or "").strip() or ContactSettings.business_name
    return ContactSettings(
        sender=sender,
        recipients=recipients,
        bcc=bcc,
        business_name=business_name,
    )


def init_app_config(app) -> ContactSettings:
    """
    Aplica valores derivados del entorno y valida lo imprescindible.

    Devuelve el ContactSettings que la app usará durante toda su vida.
    Lanza ConfigurationError si falta la credencial de correo fuera de tests.
    """
    runtime_env = _normalize_env(
        str(app.config.get("APP_ENV", "") or app.config.get("ENV", "")).strip()
        or detect_runtime_env()
    )
    app.config["APP_ENV"] = runtime_env
    app.config["ENV"] = runtime_env

    if "TESTING" not in app.config:
        app.config["TESTING"] = runtime_env == "test"
    if "DEBUG" not in app.config:
        app.config["DEBUG"] = runtime_env == "development"

    suppress_send = bool(app.config.get("MAIL_SUPPRESS_SEND")) or bool(app.config.get("TESTING"))
    password = app.config.get("MAIL_PASSWORD")
    if isinstance(password, str):
        password = password.strip()
    if not password and not suppress_send:
        raise ConfigurationError(
            "FATAL: SENDGRID_API_KEY ontbreekt. Define SENDGRID_API_KEY (o MAIL_PASSWORD) "
            "antes de iniciar la aplicación."
        )
    app.config["MAIL_PASSWORD"] = password or None

    try:
        port = int(app.config.get("PORT", 3000))
    except (TypeError, ValueError):
        port = 3000
    app.config["PORT"] = port

    try:
        mail_port = int(app.config.get("MAIL_PORT", 587))
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"FATAL: MAIL_PORT debe ser un número de puerto, no {app.config.get('MAIL_PORT')!r}."
        ) from None
    app.config["MAIL_PORT"] = mail_port

    try:
        max_length = int(app.config.get("MAX_CONTENT_LENGTH") or 1024 * 1024)
    except (TypeError, ValueError):
        max_length = 1024 * 1024
    app.config["MAX_CONTENT_LENGTH"] = max(1024, max_length)

    app.config["CORS_ORIGINS"] = parse_list_value(app.config.get("CORS_ORIGINS"))

    return load_contact_settings(app.config)


class Config:
    # clave secreta de flask
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    _runtime = detect_runtime_env()
    TESTING = _runtime == "test"
    ENV = _runtime
    DEBUG = _runtime == "development"
    del _runtime

    try:
        PORT = int(os.getenv("PORT", "3000"))
    except ValueError:
        PORT = 3000

    # Tamaño máximo del cuerpo de la petición (1 MB)
    MAX_CONTENT_LENGTH = 1024 * 1024

    # --- correo (SMTP de SendGrid por defecto) ---
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.sendgrid.net")
    # init_app_config lo convierte a int (ConfigurationError si no es un número)
    MAIL_PORT = os.getenv("MAIL_PORT", "587")
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _env_flag("MAIL_USE_SSL", "false")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "apikey")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD") or os.getenv("SENDGRID_API_KEY")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_FROM") or os.getenv("MAIL_DEFAULT_SENDER") or "noreply@example.com"

    # --- contacto ---
    CONTACT_RECIPIENTS = parse_list_env("MAIL_TO", "icnorthautomotive@gmail.com")
    CONTACT_BCC = parse_list_env("MAIL_BCC")
    CONTACT_BUSINESS_NAME = os.getenv("CONTACT_BUSINESS_NAME", "IC-North Automotive")

    # --- CORS ---
    CORS_ORIGINS = parse_list_env("CORS_ORIGINS")

    # --- Rate Limiting Configuration ---
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_CONTACT = os.getenv("RATELIMIT_CONTACT", "100 per 15 minutes")

    # --- Logging Configuration ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", None)  # None = auto-detect based on APP_ENV
    LOG_JSON_ENABLED = None  # None = auto-detect (True for production, False otherwise)
    _log_json_env = os.getenv("LOG_JSON_ENABLED", "").strip().lower()
    if _log_json_env in _TRUTHY:
        LOG_JSON_ENABLED = True
    elif _log_json_env in {"0", "false", "no", "off"}:
        LOG_JSON_ENABLED = False
    del _log_json_env

    # --- Sentry Configuration ---
    SENTRY_DSN = os.getenv("SENTRY_DSN")
    SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT")  # None = auto-detect from APP_ENV

    # 1.0 = 100% de las transacciones, 0.1 = 10%
    try:
        _traces_sample_rate = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))
    except ValueError:
        _traces_sample_rate = 0.1
    SENTRY_TRACES_SAMPLE_RATE = max(0.0, min(1.0, _traces_sample_rate))
    del _traces_sample_rate

    SENTRY_ENABLE_IN_DEV = _env_flag("SENTRY_ENABLE_IN_DEV")
