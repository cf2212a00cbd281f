"""Storage package for LocalDB: collections, serializers and recovery helpers."""

from .collection import Collection
from .interfaces import DocumentStoreProtocol
from .serializer import JSONSerializer, Serializer

__all__ = ["Collection", "DocumentStoreProtocol", "JSONSerializer", "Serializer"]
