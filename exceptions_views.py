from flask import Blueprint, jsonify, make_response
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from common.utils.logging_service import logger

bp = Blueprint("exceptions", __name__)


@bp.app_errorhandler(HTTPException)
def handle_http_exception(error: HTTPException):
    # responses built by json_abort already carry their JSON body
    if error.response is not None:
        return error.response

    return make_response(
        jsonify({"success": False, "message": error.description}), error.code
    )


@bp.app_errorhandler(PyMongoError)
def handle_database_error(error: PyMongoError):
    logger.exception("Database error")

    return make_response(
        jsonify({"success": False, "message": "Server error", "error": str(error)}),
        500,
    )


@bp.app_errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    logger.exception("Unhandled error")

    return make_response(
        jsonify({"success": False, "message": "Server error"}),
        500,
    )
