from flask import current_app, jsonify


class RentalError(Exception):
    """Base class for errors the API reports back to the caller."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message=None, **details):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details

    def to_dict(self):
        payload = {"message": self.message}
        payload.update(self.details)
        return payload


class ValidationError(RentalError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(RentalError):
    status_code = 404
    default_message = "Not found"


class ConflictError(RentalError):
    status_code = 409
    default_message = "Conflict"


class PersistenceError(RentalError):
    status_code = 503
    default_message = "Database unavailable"


def register_error_handlers(app):
    @app.errorhandler(RentalError)
    def handle_rental_error(e):
        if isinstance(e, PersistenceError):
            current_app.logger.error("persistence error: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"message": "Forbidden"}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"message": "Method not allowed"}), 405
