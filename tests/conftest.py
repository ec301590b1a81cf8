from http import HTTPStatus
from unittest.mock import MagicMock

import mongomock
import pytest

from app import create_app
from common.utils.database import CatalogCollections
from common.utils.utils import json_abort

VALID_TOKEN = "valid-token"
OTHER_USER_TOKEN = "other-user-token"


class FakeIdentityService:
    """Accepts a fixed set of tokens and records every verification."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.calls = []

    def validate_jwt(self, token):
        self.calls.append(token)
        claims = self.tokens.get(token)
        if claims is None:
            json_abort(HTTPStatus.UNAUTHORIZED, {"message": "Requires authentication"})
        return claims


def build_app(collections, identity_service, **config):
    test_config = {"TESTING": True, "FORCE_HTTPS": False}
    test_config.update(config)
    return create_app(
        test_config=test_config,
        collections=collections,
        identity_service=identity_service,
    )


@pytest.fixture()
def identity_service():
    return FakeIdentityService(
        {
            VALID_TOKEN: {"sub": "auth0|alice", "email": "alice@example.com"},
            OTHER_USER_TOKEN: {"sub": "auth0|bob", "email": "bob@example.com"},
        }
    )


@pytest.fixture()
def collections():
    db = mongomock.MongoClient()["Movie-Master-Pro"]
    return CatalogCollections(movies=db["All Movies"], watch_list=db["myWatchList"])


@pytest.fixture()
def mock_collections():
    return CatalogCollections(movies=MagicMock(), watch_list=MagicMock())


@pytest.fixture()
def app(collections, identity_service):
    return build_app(collections, identity_service)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
