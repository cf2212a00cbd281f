from typing import Any, Protocol
import json

from localdb_lib.exceptions import InvalidInput
from localdb_lib.storage.recovery import decode_document


class Serializer(Protocol):
    """Serialize/deserialize documents for text-based collections.

    Implementations should be symmetric: `dump` -> str, `load` <- str.
    """

    def dump(self, value: Any) -> str: ...

    def load(self, data: str, label: str = ...) -> Any: ...


class JSONSerializer:
    """Pretty-printed JSON with two-space indentation.

    Output matches what JavaScript's ``JSON.stringify(value, null, 2)`` writes
    for the same value, so existing databases stay byte-compatible. NaN and
    infinities are rejected rather than written as non-standard tokens.
    """

    indent = 2

    def dump(self, value: Any) -> str:
        try:
            return json.dumps(value, indent=self.indent, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Data is not JSON serializable: {e}") from e

    def load(self, data: str, label: str = "unknown file") -> Any:
        return decode_document(data, label)
