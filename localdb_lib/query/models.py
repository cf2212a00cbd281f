from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, field_validator, model_validator

from localdb_lib.query.values import check_json_value


class Query(BaseModel):
    """Filter for `Collection.all`.

    Accepts ``{"match": {...}, "like": {...}}`` or the same blocks wrapped in
    ``{"search": {...}}``. Missing blocks are empty and impose no condition.
    Values must be JSON values (null, bool, number, text, list, object).
    """

    match: Dict[str, Any] = {}
    like: Dict[str, Any] = {}

    @model_validator(mode='before')
    @classmethod
    def _unwrap_search(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and 'search' in data:
            search = data['search'] or {}
            if not isinstance(search, Mapping):
                raise ValueError("'search' must be an object with 'match' and/or 'like'")
            return {k: v for k, v in search.items() if k in ('match', 'like') and v is not None}
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator('match', 'like')
    @classmethod
    def _json_values_only(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return check_json_value(v)

    @property
    def is_empty(self) -> bool:
        return not self.match and not self.like


def coerce_query(query: Optional[Any]) -> Optional[Query]:
    if query is None or isinstance(query, Query):
        return query
    return Query.model_validate(query)
