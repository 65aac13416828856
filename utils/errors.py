"""
API error type and the JSON error handlers registered on the app.

Every error response has the same envelope::

    {"success": false, "error": {"message": "...", "statusCode": 404}}
"""
from flask import current_app, jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from extensions import db


class APIError(Exception):
    """An expected, client-facing error with an HTTP status code."""

    def __init__(self, message, status_code=500, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __str__(self):
        msg = self.message
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({detail_str})"
        return msg


class NotFoundError(APIError):
    def __init__(self, message='Resource not found', details=None):
        super().__init__(message, 404, details)


class ValidationError(APIError):
    def __init__(self, message='Validation Error', details=None):
        super().__init__(message, 400, details)


class ConflictError(APIError):
    def __init__(self, message='Resource already exists', details=None):
        super().__init__(message, 409, details)


def error_response(message, status_code, details=None):
    error = {'message': message, 'statusCode': status_code}
    if details:
        error['details'] = details
    return jsonify({'success': False, 'error': error}), status_code


def register_error_handlers(app):
    """Register global JSON error handlers"""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f'{error.status_code} {error}')
        else:
            current_app.logger.info(f'{error.status_code} {error}')
        return error_response(error.message, error.status_code, error.details)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        current_app.logger.warning(f'Integrity error: {error.orig}')
        return error_response('Resource already exists', 409)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception(f'Internal Server Error: {error}')
        return error_response('Internal Server Error', 500)
