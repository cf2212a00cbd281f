"""Document query matching."""

from .matcher import document_matches, like, matches
from .models import Query, coerce_query
from .values import ValueKind, kind_of

__all__ = ["Query", "ValueKind", "coerce_query", "document_matches", "kind_of", "like", "matches"]
