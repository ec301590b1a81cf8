from typing import Any, Dict, List, Optional
from dataclasses import dataclass


@dataclass
class MoviesFilterParams:
    genres: Optional[List[str]] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {}

        if self.genres:
            # $in also matches documents whose genre is an array
            query["genre"] = {"$in": self.genres}

        rating: Dict[str, float] = {}
        if self.min_rating is not None:
            rating["$gte"] = self.min_rating
        if self.max_rating is not None:
            rating["$lte"] = self.max_rating
        if rating:
            query["rating"] = rating

        return query
