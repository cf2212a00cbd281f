from typing import Protocol, Any, Dict, List, Optional, runtime_checkable


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Collection protocol mirroring `localdb_lib.storage.collection.Collection`.

    Absence is not an exception for reads: `get` returns None and `delete` returns
    ``{'success': False, 'not_found': True, ...}``.
    Only `update` treats a missing document as an error.
    """

    name: str

    def set(self, doc_id: str, data: Any = ...) -> Dict[str, Any]: ...

    def insert(self, data: Any, doc_id: Optional[str] = None) -> Dict[str, Any]: ...

    def update(self, doc_id: str, patch: Any) -> Dict[str, Any]: ...

    def get(self, doc_id: str) -> Any: ...

    def delete(self, doc_id: str) -> Dict[str, Any]: ...

    def exists(self, doc_id: str) -> bool: ...

    def list_ids(self) -> List[str]: ...

    def all(self, query: Any = None) -> List[Any]: ...

    def items(self, query: Any = None) -> List[Dict[str, Any]]: ...
