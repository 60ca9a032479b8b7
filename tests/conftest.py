# tests/conftest.py
import os
import sys
import pathlib

import pytest

# Entorno de pruebas antes de importar la config (se evalúa al importar)
os.environ["APP_ENV"] = "test"
for _name in ("SENDGRID_API_KEY", "MAIL_PASSWORD", "SENTRY_DSN"):
    os.environ.pop(_name, None)

# ---------- PATH raíz del repo ----------
THIS = pathlib.Path(__file__).resolve()
ROOT = THIS.parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app import create_app  # noqa: E402
from backend.app.extensions import mail  # noqa: E402
from backend.config import ContactSettings  # noqa: E402


# ---------- Config de pruebas ----------
class TestConfig:
    TESTING = True
    APP_ENV = "test"
    LOG_LEVEL = None  # Auto-detect per APP_ENV during tests
    SECRET_KEY = "testing-secret"
    MAIL_SUPPRESS_SEND = True
    MAIL_SERVER = "localhost"
    MAIL_PORT = 1025
    MAIL_USE_TLS = False
    MAIL_USERNAME = "apikey"
    MAIL_PASSWORD = None
    MAIL_DEFAULT_SENDER = "noreply@icnorth.test"
    CONTACT_RECIPIENTS = ["werkplaats@icnorth.test"]
    CONTACT_BCC = ["archief@icnorth.test"]
    CONTACT_BUSINESS_NAME = "IC-North Automotive"
    CORS_ORIGINS = []
    # Rate limiting - límite muy alto para tests (no queremos que interfiera)
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_CONTACT = "1000 per minute"


VALID_SUBMISSION = {
    "first_name": "Jan",
    "last_name": "de Vries",
    "company": "particulier",
    "license_plate": "ab-12-cd",
    "vin": "wvwzzz1jzxw000001",
    "phone": "06 12345678",
    "email": "jan@example.nl",
    "subject": "Offerte APK",
    "message": "Graag een offerte.\nAuto maakt geluid bij remmen.",
}


@pytest.fixture(scope="session")
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def mail_outbox(monkeypatch):
    sent = []

    def fake_send(message):
        sent.append(message)

    monkeypatch.setattr(mail, "send", fake_send)
    return sent


@pytest.fixture()
def contact_settings():
    return ContactSettings(
        sender="noreply@icnorth.test",
        recipients=("werkplaats@icnorth.test",),
        bcc=("archief@icnorth.test",),
        business_name="IC-North Automotive",
    )


@pytest.fixture()
def valid_submission():
    return dict(VALID_SUBMISSION)


@pytest.fixture()
def app_factory():
    """Crea apps adicionales con valores de TestConfig sobrescritos."""
    def _make(**overrides):
        config = type("OverriddenTestConfig", (TestConfig,), overrides)
        return create_app(config)
    return _make
