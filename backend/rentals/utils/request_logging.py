"""
Request/response logging.

Every API request gets an id, echoed back in the ``X-Request-ID`` header, and
a single log line with method, path, status and duration. JSON bodies are
logged at DEBUG with sensitive fields masked.
"""
import time
import uuid

from flask import request, g, current_app

SENSITIVE_FIELDS = {
    "password", "currentpassword", "newpassword", "token", "authorization", "secret",
}


def mask_sensitive_data(data, depth=0, max_depth=3):
    if depth > max_depth:
        return "[max depth reached]"

    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower().replace("_", "")
            if any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS):
                masked[key] = "[REDACTED]"
            else:
                masked[key] = mask_sensitive_data(value, depth + 1, max_depth)
        return masked
    if isinstance(data, list):
        return [mask_sensitive_data(item, depth + 1, max_depth) for item in data]
    return data


def log_request():
    g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    g.request_start_time = time.time()

    if request.is_json:
        body = request.get_json(silent=True)
        if body is not None:
            current_app.logger.debug(
                "request_id=%s body=%s", g.request_id, mask_sensitive_data(body)
            )


def log_response(response):
    request_id = getattr(g, "request_id", None)
    started = getattr(g, "request_start_time", None)
    duration_ms = (time.time() - started) * 1000 if started else 0.0

    level = current_app.logger.warning if response.status_code >= 500 else current_app.logger.info
    level(
        "request_id=%s method=%s path=%s status=%s duration_ms=%.1f",
        request_id, request.method, request.path, response.status_code, duration_ms,
    )

    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def init_request_logging(app):
    @app.before_request
    def _before():
        if request.path.startswith("/api"):
            log_request()

    @app.after_request
    def _after(response):
        if request.path.startswith("/api"):
            return log_response(response)
        return response
