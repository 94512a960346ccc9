import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from vidshare.models import db

logger = logging.getLogger(__name__)


class VidShareError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(VidShareError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(VidShareError):
    status_code = 403
    default_message = "You do not have permission to perform this action"


class ValidationError(VidShareError):
    status_code = 400
    default_message = "Invalid request"


class UnauthenticatedError(VidShareError):
    status_code = 401
    default_message = "User not authenticated"


class PersistenceError(VidShareError):
    status_code = 500
    default_message = "Failed to access the data store"


def register_error_handlers(app):
    """Render every failure as a JSON ``{"error": message}`` body."""

    @app.errorhandler(VidShareError)
    def handle_vidshare_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception(f"Database error: {error}")
        return jsonify({"error": PersistenceError.default_message}), PersistenceError.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unexpected error: {error}")
        return jsonify({"error": VidShareError.default_message}), 500
