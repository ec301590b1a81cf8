from http import HTTPStatus
from typing import Any, Dict

import jwt

from common.utils.logging_service import logger
from common.utils.utils import json_abort

invalid_token_error = {
    "error": "invalid_token",
    "error_description": "Bad credentials",
    "message": "Requires authentication",
}


class Auth0Service:
    """Perform JSON Web Token (JWT) validation using PyJWT"""

    def __init__(self, auth0_domain: str, auth0_audience: str):
        self.issuer_url = f"https://{auth0_domain}/"
        self.jwks_uri = f"{self.issuer_url}.well-known/jwks.json"
        self.audience = auth0_audience
        self.algorithm = "RS256"
        # the client caches fetched keys, keep one per service
        self.jwks_client = jwt.PyJWKClient(self.jwks_uri)

    def get_signing_key(self, token: str):
        return self.jwks_client.get_signing_key_from_jwt(token).key

    def validate_jwt(self, token: str) -> Dict[str, Any]:
        try:
            jwt_signing_key = self.get_signing_key(token)

            payload = jwt.decode(
                token,
                jwt_signing_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer_url,
            )
        except jwt.PyJWTError as error:
            logger.warning(f"Token verification failed: {error}")
            json_abort(HTTPStatus.UNAUTHORIZED, invalid_token_error)
            return

        return payload
