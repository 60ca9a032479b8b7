"""Endpoint del formulario de contacto / offerte."""
from flask import current_app, jsonify

from . import api
from ..extensions import limiter, mail
from ..services.request_utils import read_submission_payload
from ..services.submission import handle_submission


def _contact_rate_limit():
    return current_app.config.get("RATELIMIT_CONTACT", "100 per 15 minutes")


@api.post("/contact")
@limiter.limit(_contact_rate_limit)
def contact_submit():
    """
    Recibe el formulario (JSON o form-encoded), valida y reenvía por correo.

    200 {"ok": true, "message": ...}
    400 {"ok": false, "errors": [...]}
    500 {"ok": false, "error": ...}
    """
    payload = read_submission_payload()
    settings = current_app.extensions["contact_settings"]

    outcome = handle_submission(payload, settings, mail.send)
    return jsonify(outcome.payload), outcome.status_code
