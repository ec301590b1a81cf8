from functools import wraps
from http import HTTPStatus

from flask import current_app, g, request

from common.utils.utils import json_abort
from security.route_policy import AccessPolicy

IDENTITY_SERVICE_EXTENSION = "identity_service"

unauthorized_error = {"message": "Requires authentication"}

invalid_request_error = {
    "error": "invalid_request",
    "error_description": "Authorization header value must follow this format: Bearer access-token",
    "message": "Requires authentication",
}

forbidden_error = {"message": "Permission denied"}


def __get_bearer_token_from_request():
    authorization_header = request.headers.get("Authorization", None)

    if not authorization_header:
        json_abort(HTTPStatus.UNAUTHORIZED, unauthorized_error)
        return

    authorization_header_elements = authorization_header.split()

    if len(authorization_header_elements) != 2:
        json_abort(HTTPStatus.UNAUTHORIZED, invalid_request_error)
        return

    auth_scheme = authorization_header_elements[0]
    bearer_token = authorization_header_elements[1]

    if not (auth_scheme and auth_scheme.lower() == "bearer"):
        json_abort(HTTPStatus.UNAUTHORIZED, unauthorized_error)
        return

    if not bearer_token:
        json_abort(HTTPStatus.UNAUTHORIZED, unauthorized_error)
        return

    return bearer_token


def authorization_guard(function):
    @wraps(function)
    def decorator(*args, **kwargs):
        token = __get_bearer_token_from_request()
        identity_service = current_app.extensions[IDENTITY_SERVICE_EXTENSION]
        validated_token = identity_service.validate_jwt(token)

        g.access_token = validated_token

        return function(*args, **kwargs)

    return decorator


def owner_guard(query_param="email"):
    """
    Requires the verified identity's email claim to match the query
    parameter naming whose data is read. Must run after authorization_guard.
    """

    def decorator(function):
        @wraps(function)
        def wrapper(*args, **kwargs):
            access_token = g.get("access_token")

            if not access_token:
                json_abort(HTTPStatus.UNAUTHORIZED, unauthorized_error)
                return

            requested = (request.args.get(query_param) or "").strip()
            if not requested:
                # leave the 400 to the handler's own validation
                return function(*args, **kwargs)

            claimed = access_token.get(current_app.config["AUTH_EMAIL_CLAIM"])

            if not claimed or str(claimed).strip().lower() != requested.lower():
                json_abort(HTTPStatus.FORBIDDEN, forbidden_error)
                return

            return function(*args, **kwargs)

        return wrapper

    return decorator


def apply_policy(view, policy: AccessPolicy):
    if policy is AccessPolicy.AUTHENTICATED:
        return authorization_guard(view)
    if policy is AccessPolicy.AUTHENTICATED_OWNER:
        return authorization_guard(owner_guard()(view))
    return view
