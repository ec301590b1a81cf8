import pytest
from flask import g

from security.guards import authorization_guard

from conftest import OTHER_USER_TOKEN, VALID_TOKEN, build_app

MOVIE_ID = "64b7f0c2a1b2c3d4e5f60718"

STRICT_GATED = [
    ("get", f"/movies/{MOVIE_ID}"),
    ("post", "/movies/add"),
    ("put", f"/movies/update/{MOVIE_ID}"),
    ("delete", f"/movies/{MOVIE_ID}"),
    ("get", "/movie/my-collection?email=alice@example.com"),
]

ALWAYS_PUBLIC = [
    ("get", "/movies"),
    ("get", "/latest-movie"),
    ("get", "/topMovies"),
    ("get", "/genreMovies"),
    ("get", "/myWatchList"),
    ("post", "/myWatchList"),
    ("get", "/"),
]


@pytest.mark.parametrize("method,path", STRICT_GATED)
def test_gated_routes_reject_missing_header_before_the_handler(
    mock_collections, identity_service, method, path
):
    client = build_app(mock_collections, identity_service).test_client()

    resp = getattr(client, method)(path, json={"title": "x"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Requires authentication"
    assert identity_service.calls == []
    assert mock_collections.movies.method_calls == []


@pytest.mark.parametrize(
    "header",
    ["Token abc", "Bearer", "Bearer a b", "bearer unknown-token"],
)
def test_bad_credentials_are_401(client, header):
    resp = client.get(f"/movies/{MOVIE_ID}", headers={"Authorization": header})

    assert resp.status_code == 401


@pytest.mark.parametrize("method,path", ALWAYS_PUBLIC)
def test_public_routes_need_no_token(client, identity_service, method, path):
    resp = getattr(client, method)(path, json={"title": "x"})

    assert resp.status_code in (200, 201)
    assert identity_service.calls == []


def test_verified_claims_reach_the_request_context(app, identity_service):
    seen = {}

    @authorization_guard
    def protected():
        seen.update(g.access_token)
        return "ok"

    with app.test_request_context(headers={"Authorization": f"Bearer {VALID_TOKEN}"}):
        assert protected() == "ok"

    assert seen["sub"] == "auth0|alice"
    assert identity_service.calls == [VALID_TOKEN]


class TestLegacyProfile:
    @pytest.fixture()
    def client(self, collections, identity_service):
        app = build_app(collections, identity_service, AUTH_POLICY_PROFILE="legacy")
        return app.test_client()

    def test_movie_routes_are_public(self, client):
        created = client.post("/movies/add", json={"title": "Alien"})
        movie_id = created.get_json()["result"]["insertedId"]

        assert created.status_code == 201
        assert client.get(f"/movies/{movie_id}").status_code == 200
        assert client.put(f"/movies/update/{movie_id}", json={"rating": 9}).status_code == 200
        assert client.delete(f"/movies/{movie_id}").status_code == 200

    def test_my_collection_stays_gated(self, client):
        resp = client.get("/movie/my-collection?email=alice@example.com")

        assert resp.status_code == 401


class TestCollectionOwnership:
    def test_other_users_collection_is_forbidden(self, client):
        resp = client.get(
            "/movie/my-collection?email=alice@example.com",
            headers={"Authorization": f"Bearer {OTHER_USER_TOKEN}"},
        )

        assert resp.status_code == 403

    def test_email_match_ignores_case(self, client):
        resp = client.get(
            "/movie/my-collection?email=Alice@Example.com",
            headers={"Authorization": f"Bearer {VALID_TOKEN}"},
        )

        assert resp.status_code == 200

    def test_token_without_email_claim_is_forbidden(self, client, identity_service):
        identity_service.tokens["no-email"] = {"sub": "auth0|carol"}

        resp = client.get(
            "/movie/my-collection?email=carol@example.com",
            headers={"Authorization": "Bearer no-email"},
        )

        assert resp.status_code == 403

    def test_owner_check_can_be_disabled(self, collections, identity_service):
        app = build_app(collections, identity_service, ENFORCE_COLLECTION_OWNER=False)

        resp = app.test_client().get(
            "/movie/my-collection?email=alice@example.com",
            headers={"Authorization": f"Bearer {OTHER_USER_TOKEN}"},
        )

        assert resp.status_code == 200

    def test_custom_email_claim(self, collections, identity_service):
        identity_service.tokens["namespaced"] = {
            "sub": "auth0|dave",
            "https://movies.example.com/email": "dave@example.com",
        }
        app = build_app(
            collections,
            identity_service,
            AUTH_EMAIL_CLAIM="https://movies.example.com/email",
        )

        resp = app.test_client().get(
            "/movie/my-collection?email=dave@example.com",
            headers={"Authorization": "Bearer namespaced"},
        )

        assert resp.status_code == 200
