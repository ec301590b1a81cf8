from typing import Any, Dict, List

from pymongo.collection import Collection

from common.utils.logging_service import logger
from common.model.write_results import InsertData


def add_entry(watch_list: Collection, entry: Dict[str, Any]) -> InsertData:
    result = watch_list.insert_one(dict(entry))
    logger.info(f"Watch list entry {result.inserted_id} added")

    return InsertData.from_result(result)


def get_all_entries(watch_list: Collection) -> List[Dict[str, Any]]:
    return list(watch_list.find())
