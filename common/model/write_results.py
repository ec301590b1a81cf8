from typing import Any, Optional
from dataclasses import dataclass

from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


@dataclass
class InsertData:
    acknowledged: bool
    insertedId: Any

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertData":
        return cls(acknowledged=result.acknowledged, insertedId=result.inserted_id)


@dataclass
class UpdateData:
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedId: Optional[Any] = None

    @classmethod
    def from_result(cls, result: UpdateResult) -> "UpdateData":
        return cls(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedId=result.upserted_id,
        )


@dataclass
class DeleteData:
    acknowledged: bool
    deletedCount: int

    @classmethod
    def from_result(cls, result: DeleteResult) -> "DeleteData":
        return cls(acknowledged=result.acknowledged, deletedCount=result.deleted_count)
