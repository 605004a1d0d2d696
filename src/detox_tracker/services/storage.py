"""Document stores: local TinyDB file and remote Firestore."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional
from uuid import uuid4

import httpx
from tinydb import Query, TinyDB

from ..clients.firestore import FirestoreClient
from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Collection names
LOGS = "logs"
TEST_RESULTS = "testResults"
SETTINGS = "settings"
HEALTH_TRACKING = "healthTracking"


class StoreError(Exception):
    """Base class for storage failures."""


class StoreUnavailableError(StoreError):
    """The store could not be reached or rejected the request."""


class DocumentStore(ABC):
    """
    Minimal document store interface.
    
    Documents are plain dicts grouped in named collections. Every document
    returned by ``load`` or ``query`` carries its ``id``.
    """
    
    @abstractmethod
    def save(
        self,
        collection: str,
        data: dict,
        doc_id: Optional[str] = None,
        merge: bool = False,
    ) -> str:
        """Write a document and return its id (generated if not given)."""
    
    @abstractmethod
    def load(self, collection: str, doc_id: str) -> Optional[dict]:
        """Get a document by id."""
    
    @abstractmethod
    def query(
        self,
        collection: str,
        where: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        """List documents matching all equality filters in ``where``."""
    
    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
    
    def close(self) -> None:
        pass
    
    def __enter__(self) -> "DocumentStore":
        return self
    
    def __exit__(self, *args) -> None:
        self.close()


class LocalStore(DocumentStore):
    """
    Local storage using TinyDB.
    
    Each collection is a TinyDB table in a single JSON file in the data
    directory. Used directly when no remote store is configured and as the
    fallback cache otherwise.
    """
    
    def __init__(self, settings: Optional[Settings] = None, path: Optional[Path] = None):
        self.settings = settings or get_settings()
        self._path = path
        self._db: Optional[TinyDB] = None
    
    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        if self._path is not None:
            return self._path
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        return self.settings.data_dir / "tracker.json"
    
    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = TinyDB(self.db_path)
        return self._db
    
    def save(
        self,
        collection: str,
        data: dict,
        doc_id: Optional[str] = None,
        merge: bool = False,
    ) -> str:
        Doc = Query()
        table = self.db.table(collection)
        doc_id = doc_id or uuid4().hex
        document = {**data, "id": doc_id}
        
        if merge:
            table.upsert(document, Doc.id == doc_id)
        else:
            table.remove(Doc.id == doc_id)
            table.insert(document)
        return doc_id
    
    def load(self, collection: str, doc_id: str) -> Optional[dict]:
        Doc = Query()
        results = self.db.table(collection).search(Doc.id == doc_id)
        if results:
            return dict(results[0])
        return None
    
    def query(
        self,
        collection: str,
        where: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        table = self.db.table(collection)
        
        if where:
            Doc = Query()
            condition = None
            for field, value in where.items():
                clause = Doc[field] == value
                condition = clause if condition is None else condition & clause
            results = table.search(condition)
        else:
            results = table.all()
        
        documents = [dict(r) for r in results]
        if order_by:
            # Missing values sort last in either direction
            present = [d for d in documents if d.get(order_by) is not None]
            missing = [d for d in documents if d.get(order_by) is None]
            present.sort(key=lambda d: d[order_by], reverse=descending)
            documents = present + missing
        return documents
    
    def delete(self, collection: str, doc_id: str) -> bool:
        Doc = Query()
        removed = self.db.table(collection).remove(Doc.id == doc_id)
        return len(removed) > 0
    
    def replace_all(self, collection: str, documents: list[dict]) -> None:
        """Replace a whole collection, keeping each document's id."""
        table = self.db.table(collection)
        table.truncate()
        table.insert_multiple(
            {**d, "id": d.get("id") or uuid4().hex} for d in documents
        )
    
    def close(self) -> None:
        """Close the database connection."""
        if self._db is not None:
            self._db.close()
            self._db = None


class RemoteStore(DocumentStore):
    """Firestore-backed store. Transport and HTTP failures raise StoreUnavailableError."""
    
    def __init__(self, client: Optional[FirestoreClient] = None, settings: Optional[Settings] = None):
        self.client = client or FirestoreClient(settings)
    
    def _call(self, operation: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return operation(*args, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Firestore request failed: %s", e)
            raise StoreUnavailableError(f"Remote store unavailable: {e}") from e
    
    def save(
        self,
        collection: str,
        data: dict,
        doc_id: Optional[str] = None,
        merge: bool = False,
    ) -> str:
        if doc_id is None:
            return self._call(self.client.create, collection, data)
        self._call(self.client.set, collection, doc_id, data, merge=merge)
        return doc_id
    
    def load(self, collection: str, doc_id: str) -> Optional[dict]:
        return self._call(self.client.get, collection, doc_id)
    
    def query(
        self,
        collection: str,
        where: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        return self._call(
            self.client.run_query,
            collection,
            where=where,
            order_by=order_by,
            descending=descending,
        )
    
    def delete(self, collection: str, doc_id: str) -> bool:
        return self._call(self.client.delete, collection, doc_id)
    
    def close(self) -> None:
        self.client.close()
