import datetime

from bson import ObjectId
from flask import abort, jsonify, request
from flask.json.provider import DefaultJSONProvider

invalid_id_error = {"success": False, "message": "Invalid id"}


def json_abort(status_code, data=None):
    response = jsonify(data)
    response.status_code = status_code
    abort(response)


def parse_object_id(id: str) -> ObjectId:
    """
    Converts a path parameter into an ObjectId.

    Aborts with 400 before anything reaches the database when the value is
    not a 24 character hex string.
    """
    if not isinstance(id, str) or not ObjectId.is_valid(id):
        json_abort(400, invalid_id_error)

    return ObjectId(id)


def get_json_object_body() -> dict:
    """Returns the request body as a dict, aborting with 400 for anything else."""
    body = request.get_json(silent=True)

    if not isinstance(body, dict):
        json_abort(
            400, {"success": False, "message": "Request body must be a JSON object"}
        )

    return body


class MongoJSONProvider(DefaultJSONProvider):
    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, (datetime.datetime, datetime.date)):
            return o.isoformat()
        return DefaultJSONProvider.default(o)
