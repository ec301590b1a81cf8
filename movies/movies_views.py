from dataclasses import asdict
from typing import Any

from flask import jsonify, make_response

import movies.movies_service as movies_service
from common.utils.database import CatalogCollections
from common.utils.utils import get_json_object_body, json_abort, parse_object_id

movie_not_found_error = {"success": False, "message": "Movie not found"}


def show_all_movies(collections: CatalogCollections) -> Any:
    result = movies_service.get_all_movies(collections.movies)
    return make_response(jsonify(result), 200)


def show_one_movie(collections: CatalogCollections, id: str) -> Any:
    movie_id = parse_object_id(id)

    movie = movies_service.get_movie(collections.movies, movie_id)

    if movie is None:
        return make_response(jsonify(movie_not_found_error), 404)

    return make_response(jsonify({"success": True, "result": movie}), 200)


def add_movie(collections: CatalogCollections) -> Any:
    body = get_json_object_body()

    result = movies_service.add_movie(collections.movies, body)

    return make_response(
        jsonify({"success": True, "result": asdict(result)}), 201
    )


def update_movie(collections: CatalogCollections, id: str) -> Any:
    movie_id = parse_object_id(id)
    body = get_json_object_body()

    patch = movies_service.strip_immutable_fields(body)
    if not patch:
        json_abort(400, {"success": False, "message": "No fields to update"})

    result = movies_service.update_movie(collections.movies, movie_id, patch)

    if result is None:
        return make_response(jsonify(movie_not_found_error), 404)

    return make_response(
        jsonify({"success": True, "result": asdict(result)}), 200
    )


def delete_movie(collections: CatalogCollections, id: str) -> Any:
    movie_id = parse_object_id(id)

    result = movies_service.delete_movie(collections.movies, movie_id)

    if result is None:
        return make_response(jsonify(movie_not_found_error), 404)

    return make_response(
        jsonify(
            {
                "success": True,
                "message": "Movie deleted",
                "deletedCount": result.deletedCount,
            }
        ),
        200,
    )


def show_latest_movies(collections: CatalogCollections) -> Any:
    result = movies_service.get_latest_movies(collections.movies)
    return make_response(jsonify(result), 200)


def show_top_movies(collections: CatalogCollections) -> Any:
    result = movies_service.get_top_movies(collections.movies)
    return make_response(jsonify(result), 200)


def show_my_collection(collections: CatalogCollections) -> Any:
    email = movies_service.get_collection_owner()

    result = movies_service.get_user_collection(collections.movies, email)
    return make_response(jsonify(result), 200)


def show_genre_movies(collections: CatalogCollections) -> Any:
    params = movies_service.get_filter_params()

    result = movies_service.get_filtered_movies(collections.movies, params)
    return make_response(jsonify(result), 200)
