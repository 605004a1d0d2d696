"""Firestore REST API client."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def encode_value(value: Any) -> dict:
    """Convert a Python value to a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    # bool is a subclass of int
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"timestampValue": value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Cannot store value of type {type(value).__name__}")


def encode_fields(data: dict) -> dict:
    return {key: encode_value(value) for key, value in data.items()}


def decode_value(value: dict) -> Any:
    """Convert a Firestore typed value back to a Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return value["booleanValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        # Left as RFC 3339 text; pydantic parses it
        return value["timestampValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    raise ValueError(f"Unsupported Firestore value: {value}")


def decode_fields(fields: dict) -> dict:
    return {key: decode_value(value) for key, value in fields.items()}


def decode_document(document: dict) -> dict:
    """Flatten a Firestore document into a dict with its id."""
    data = decode_fields(document.get("fields", {}))
    data["id"] = document["name"].rsplit("/", 1)[-1]
    return data


class FirestoreClient:
    """
    Minimal client for the Firestore REST API.
    
    Supports the handful of operations the tracker needs: create, get,
    set (optionally merging), delete and single-collection queries with
    equality filters and ordering.
    """
    
    BASE_URL = "https://firestore.googleapis.com/v1"
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: Optional[httpx.Client] = None
    
    @property
    def is_configured(self) -> bool:
        return self.settings.has_remote
    
    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            params = {}
            if self.settings.firestore_api_key:
                params["key"] = self.settings.firestore_api_key
            self._client = httpx.Client(
                base_url=self.documents_url,
                params=params,
                timeout=self.settings.remote_timeout_seconds,
                transport=self._transport,
            )
        return self._client
    
    @property
    def documents_url(self) -> str:
        return (
            f"{self.BASE_URL}/projects/{self.settings.firestore_project_id}"
            f"/databases/{self.settings.firestore_database}/documents"
        )
    
    def create(self, collection: str, data: dict) -> str:
        """Create a document with a generated id and return the id."""
        response = self.client.post(f"/{collection}", json={"fields": encode_fields(data)})
        response.raise_for_status()
        doc_id = response.json()["name"].rsplit("/", 1)[-1]
        logger.debug("Created %s/%s", collection, doc_id)
        return doc_id
    
    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        """Fetch a document, or None if it does not exist."""
        response = self.client.get(f"/{collection}/{doc_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return decode_document(response.json())
    
    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        """
        Write a document, creating it if needed.
        
        With merge=True only the given fields are replaced; otherwise the
        whole document is overwritten.
        """
        params = None
        if merge:
            params = [("updateMask.fieldPaths", field) for field in data]
        response = self.client.patch(
            f"/{collection}/{doc_id}",
            params=params,
            json={"fields": encode_fields(data)},
        )
        response.raise_for_status()
    
    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        response = self.client.delete(f"/{collection}/{doc_id}")
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True
    
    def run_query(
        self,
        collection: str,
        where: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        """Query one collection with equality filters and optional ordering."""
        query: dict = {"from": [{"collectionId": collection}]}
        
        filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": "EQUAL",
                    "value": encode_value(value),
                }
            }
            for field, value in (where or {}).items()
        ]
        if len(filters) == 1:
            query["where"] = filters[0]
        elif filters:
            query["where"] = {"compositeFilter": {"op": "AND", "filters": filters}}
        
        if order_by:
            query["orderBy"] = [{
                "field": {"fieldPath": order_by},
                "direction": "DESCENDING" if descending else "ASCENDING",
            }]
        
        response = self.client.post(
            f"{self.documents_url}:runQuery",
            json={"structuredQuery": query},
        )
        response.raise_for_status()
        
        # Results without a "document" key only carry a read time
        return [
            decode_document(item["document"])
            for item in response.json()
            if "document" in item
        ]
    
    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None
    
    def __enter__(self) -> "FirestoreClient":
        return self
    
    def __exit__(self, *args) -> None:
        self.close()
