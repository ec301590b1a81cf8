from typing import Any, Dict, List, Optional

from bson import ObjectId
from flask import request
from marshmallow import ValidationError
from pymongo import DESCENDING
from pymongo.collection import Collection

from common.utils.logging_service import logger
from common.utils.utils import json_abort
from common.model.write_results import DeleteData, InsertData, UpdateData
from movies.model.movies_filter_params import MoviesFilterParams
from schema.movie_schema import GenreMoviesQuerySchema, MyCollectionQuerySchema

LATEST_MOVIES_LIMIT = 6
TOP_MOVIES_LIMIT = 5

IMMUTABLE_FIELDS = ("_id",)


def get_filter_params() -> MoviesFilterParams:
    """
    Reads `genres`, `minRating` and `maxRating` from the query string.

    Aborts with 400 when a rating bound is not a number.
    """
    try:
        return GenreMoviesQuerySchema().load(request.args)
    except ValidationError as e:
        json_abort(
            400,
            {"success": False, "message": "Invalid query parameters", "errors": e.messages},
        )


def get_collection_owner() -> str:
    try:
        params = MyCollectionQuerySchema().load(request.args)
    except ValidationError as e:
        json_abort(
            400,
            {"success": False, "message": "Invalid query parameters", "errors": e.messages},
        )

    return params["email"].strip()


def get_all_movies(movies: Collection) -> List[Dict[str, Any]]:
    return list(movies.find())


def get_movie(movies: Collection, movie_id: ObjectId) -> Optional[Dict[str, Any]]:
    return movies.find_one({"_id": movie_id})


def add_movie(movies: Collection, movie: Dict[str, Any]) -> InsertData:
    # insert_one sets _id on the dict it is given
    result = movies.insert_one(dict(movie))
    logger.info(f"Movie {result.inserted_id} added")

    return InsertData.from_result(result)


def strip_immutable_fields(patch: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in patch.items() if key not in IMMUTABLE_FIELDS}


def update_movie(
    movies: Collection, movie_id: ObjectId, patch: Dict[str, Any]
) -> Optional[UpdateData]:
    """
    Applies a $set of the given fields.

    :return: None when no document matched the id.
    """
    result = movies.update_one({"_id": movie_id}, {"$set": patch})

    if result.matched_count == 0:
        return None

    return UpdateData.from_result(result)


def delete_movie(movies: Collection, movie_id: ObjectId) -> Optional[DeleteData]:
    result = movies.delete_one({"_id": movie_id})

    if result.deleted_count == 0:
        return None

    logger.info(f"Movie {movie_id} deleted")
    return DeleteData.from_result(result)


def get_latest_movies(movies: Collection) -> List[Dict[str, Any]]:
    return list(
        movies.find().sort("created_at", DESCENDING).limit(LATEST_MOVIES_LIMIT)
    )


def get_top_movies(movies: Collection) -> List[Dict[str, Any]]:
    return list(movies.find().sort("rating", DESCENDING).limit(TOP_MOVIES_LIMIT))


def get_user_collection(movies: Collection, email: str) -> List[Dict[str, Any]]:
    return list(movies.find({"addedBy": email}))


def get_filtered_movies(
    movies: Collection, params: MoviesFilterParams
) -> List[Dict[str, Any]]:
    query = params.to_query()
    logger.debug(f"Filtering movies with {query}")

    return list(movies.find(query))
