from dataclasses import dataclass
from functools import wraps
from typing import Callable, Dict, List

from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from flask import Blueprint, Flask, jsonify

import movies.movies_views as movies_views
import watchlist.watchlist_views as watchlist_views
import common.utils.utils_views as utils_views
from common.utils.database import CatalogCollections
from common.utils.logging_service import logger
from schema.movie_schema import (
    DeleteResultSchema,
    GenreMoviesQuerySchema,
    InsertResultSchema,
    MyCollectionQuerySchema,
    UpdateResultSchema,
)
from security.guards import apply_policy
from security.route_policy import AccessPolicy, policy_for

bp_name = "catalog"


@dataclass(frozen=True)
class Route:
    endpoint: str
    method: str
    path: str
    handler: Callable
    summary: str
    query_schema: type = None
    response_schema: type = None


ROUTE_TABLE: List[Route] = [
    Route(
        "list_movies", "GET", "/movies", movies_views.show_all_movies, "List every movie"
    ),
    Route(
        "get_movie",
        "GET",
        "/movies/<string:id>",
        movies_views.show_one_movie,
        "Get one movie by id",
    ),
    Route(
        "add_movie",
        "POST",
        "/movies/add",
        movies_views.add_movie,
        "Add a movie",
        response_schema=InsertResultSchema,
    ),
    Route(
        "update_movie",
        "PUT",
        "/movies/update/<string:id>",
        movies_views.update_movie,
        "Update fields of a movie",
        response_schema=UpdateResultSchema,
    ),
    Route(
        "delete_movie",
        "DELETE",
        "/movies/<string:id>",
        movies_views.delete_movie,
        "Delete a movie",
        response_schema=DeleteResultSchema,
    ),
    Route(
        "latest_movies",
        "GET",
        "/latest-movie",
        movies_views.show_latest_movies,
        "Six most recently created movies",
    ),
    Route(
        "top_movies",
        "GET",
        "/topMovies",
        movies_views.show_top_movies,
        "Five highest rated movies",
    ),
    Route(
        "my_collection",
        "GET",
        "/movie/my-collection",
        movies_views.show_my_collection,
        "Movies added by a user",
        query_schema=MyCollectionQuerySchema,
    ),
    Route(
        "genre_movies",
        "GET",
        "/genreMovies",
        movies_views.show_genre_movies,
        "Filter movies by genre and rating",
        query_schema=GenreMoviesQuerySchema,
    ),
    Route(
        "add_watch_list_entry",
        "POST",
        "/myWatchList",
        watchlist_views.add_to_watch_list,
        "Add a watch list entry",
        response_schema=InsertResultSchema,
    ),
    Route(
        "list_watch_list",
        "GET",
        "/myWatchList",
        watchlist_views.show_watch_list,
        "List the watch list",
    ),
    Route("liveness", "GET", "/", utils_views.liveness, "Liveness check"),
    Route("health", "GET", "/health", utils_views.health_check, "Database health check"),
]


def __bind(handler: Callable, collections: CatalogCollections) -> Callable:
    @wraps(handler)
    def view(**kwargs):
        return handler(collections, **kwargs)

    return view


def create_blueprint(
    collections: CatalogCollections,
    policies: Dict[str, AccessPolicy],
    routes: List[Route] = ROUTE_TABLE,
) -> Blueprint:
    bp = Blueprint(bp_name, __name__)

    for route in routes:
        policy = policy_for(policies, route.endpoint)
        view = apply_policy(__bind(route.handler, collections), policy)

        bp.add_url_rule(
            route.path,
            endpoint=route.endpoint,
            view_func=view,
            methods=[route.method],
        )
        logger.debug(f"{route.method} {route.path} -> {route.endpoint} ({policy.value})")

    return bp


def register_routes(
    app: Flask,
    collections: CatalogCollections,
    policies: Dict[str, AccessPolicy],
):
    app.register_blueprint(create_blueprint(collections, policies))

    spec = build_api_spec(policies)

    @app.route("/swagger/", methods=["GET"])
    def swagger():
        return jsonify(spec.to_dict())


def __openapi_path(path: str) -> str:
    return path.replace("<string:id>", "{id}")


def build_api_spec(
    policies: Dict[str, AccessPolicy], routes: List[Route] = ROUTE_TABLE
) -> APISpec:
    spec = APISpec(
        title="Movie Catalog API",
        version="v1",
        plugins=[MarshmallowPlugin()],
        openapi_version="3.0.2",
    )
    spec.components.security_scheme(
        "bearerAuth", {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
    )

    operations_by_path: Dict[str, Dict] = {}

    for route in routes:
        operation = {"summary": route.summary, "operationId": route.endpoint}

        if "<string:id>" in route.path:
            operation["parameters"] = [
                {"in": "path", "name": "id", "required": True, "schema": {"type": "string"}}
            ]
        if route.query_schema is not None:
            operation.setdefault("parameters", []).append(
                {"in": "query", "schema": route.query_schema}
            )

        response = {"description": "OK"}
        if route.response_schema is not None:
            response["content"] = {"application/json": {"schema": route.response_schema}}
        status = "201" if route.method == "POST" else "200"
        operation["responses"] = {status: response}

        if policy_for(policies, route.endpoint) is not AccessPolicy.PUBLIC:
            operation["security"] = [{"bearerAuth": []}]

        operations_by_path.setdefault(__openapi_path(route.path), {})[
            route.method.lower()
        ] = operation

    for path, operations in operations_by_path.items():
        spec.path(path=path, operations=operations)

    return spec
