import logging

import mysql.connector
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for failures that map onto a single HTTP response."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def type(self):
        return type(self).__name__

    def to_dict(self):
        return {'ok': False, 'error': {'type': self.type, 'message': self.message}}


class ValidationError(ApiError):
    status_code = 400


class Unauthenticated(ApiError):
    status_code = 401


class InvalidCredentials(Unauthenticated):
    pass


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class UpstreamError(ApiError):
    """A third-party API failed; carries the upstream status when there is one."""

    status_code = 502


class UploadFailed(UpstreamError):
    pass


class InternalError(ApiError):
    status_code = 500


_HTTP_ERROR_TYPES = {
    400: 'ValidationError',
    401: 'Unauthenticated',
    403: 'Forbidden',
    404: 'NotFound',
    405: 'MethodNotAllowed',
    413: 'PayloadTooLarge',
    429: 'TooManyRequests',
}


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            app.logger.error(f"{e.type}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        body = {
            'ok': False,
            'error': {
                'type': _HTTP_ERROR_TYPES.get(e.code, 'HTTPError'),
                'message': e.description,
            }
        }
        return jsonify(body), e.code

    @app.errorhandler(mysql.connector.Error)
    def handle_database_error(e):
        app.logger.exception(f"Database error: {e}")
        return jsonify(InternalError('Server error').to_dict()), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception(f"Unhandled error: {e}")
        return jsonify(InternalError('Server error').to_dict()), 500
