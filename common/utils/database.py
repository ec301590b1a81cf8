from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from common.utils.logging_service import logger


class DatabaseConnectionError(RuntimeError):
    pass


@dataclass
class CatalogCollections:
    movies: Collection
    watch_list: Collection
    client: Optional[MongoClient] = None

    def ping(self) -> bool:
        try:
            self.movies.database.command("ping")
            return True
        except PyMongoError:
            logger.exception("Database ping failed")
            return False


def connect_mongo(
    uri: str,
    db_name: str,
    movies_collection: str,
    watch_list_collection: str,
) -> CatalogCollections:
    """
    Opens the single MongoClient shared by every request and confirms the
    deployment answers a ping before returning the collection handles.

    :raises DatabaseConnectionError: when the uri is missing or the ping fails.
    """
    if not uri:
        raise DatabaseConnectionError("MONGO_URL is not configured")

    client = MongoClient(
        uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )

    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        logger.error(f"Could not connect to MongoDB: {e}")
        raise DatabaseConnectionError("Could not connect to MongoDB") from e

    logger.info("Pinged your deployment. You successfully connected to MongoDB!")

    db = client[db_name]
    return CatalogCollections(
        movies=db[movies_collection],
        watch_list=db[watch_list_collection],
        client=client,
    )
