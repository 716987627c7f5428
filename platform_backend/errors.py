"""
Error taxonomy for the API and the Flask handlers that render it as JSON.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base error rendered as {'success': False, 'message': ...}."""
    status_code = 500

    def __init__(self, message: str, status_code: int = None, details: list = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        body = {'success': False, 'message': self.message}
        if self.details:
            body['details'] = self.details
        return body


class ValidationError(ApiError):
    """Missing or invalid request fields."""
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class StoreError(ApiError):
    """Connectivity or query failure reported by the database driver."""
    status_code = 500


class ConstraintError(StoreError):
    """Foreign key / CHECK / NOT NULL violation; the caller sent bad data."""
    status_code = 400


def register_error_handlers(app):
    """Attach JSON error handlers to the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logging.error(f"❌ Store error: {error.message}", exc_info=error)
        else:
            logging.warning(f"⚠️ {error.status_code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'message': 'Route not found'}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        original = getattr(error, 'original_exception', None) or error
        logging.error(f"❌ Internal server error: {original}", exc_info=original)
        return jsonify({'success': False, 'message': 'Internal Server Error'}), 500
