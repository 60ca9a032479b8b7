"""Request-related utilities."""
from flask import request as flask_request


def get_client_ip(req=None):
    """
    Returns the submitting client's IP address.

    The contact form sits behind the hosting provider's proxy, so the first
    hop of X-Forwarded-For (or X-Real-IP) is preferred over remote_addr. The
    rate limiter keys on this value.

    Args:
        req: Flask request object. Defaults to the global request.
    """
    req = req or flask_request
    if req is None:
        return None

    forwarded_for = req.headers.get("X-Forwarded-For", "")
    first_hop = next(
        (part.strip() for part in forwarded_for.split(",") if part.strip()),
        None,
    )
    if first_hop:
        return first_hop

    real_ip = (req.headers.get("X-Real-IP") or "").strip()
    return real_ip or req.remote_addr or "unknown"


def read_submission_payload(req=None):
    """
    Reads the submitted fields as a plain dict.

    JSON bodies and form-encoded bodies are both accepted. Anything that cannot
    be parsed as a mapping yields an empty dict, so validation reports the
    missing fields instead of the request failing.
    """
    req = req or flask_request
    data = req.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if req.form:
        return req.form.to_dict()
    return {}
