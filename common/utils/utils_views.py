from flask import jsonify, make_response

from common.utils.database import CatalogCollections


def liveness(collections: CatalogCollections):
    return make_response("Movie Catalog server is running", 200)


def health_check(collections: CatalogCollections):
    db_status = collections.ping()

    return jsonify(
        {
            "database": "up" if db_status else "down",
        }
    )
