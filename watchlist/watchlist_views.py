from dataclasses import asdict
from typing import Any

from flask import jsonify, make_response

import watchlist.watchlist_service as watchlist_service
from common.utils.database import CatalogCollections
from common.utils.utils import get_json_object_body


def add_to_watch_list(collections: CatalogCollections) -> Any:
    body = get_json_object_body()

    result = watchlist_service.add_entry(collections.watch_list, body)

    return make_response(jsonify({"success": True, "result": asdict(result)}), 201)


def show_watch_list(collections: CatalogCollections) -> Any:
    result = watchlist_service.get_all_entries(collections.watch_list)
    return make_response(jsonify(result), 200)
