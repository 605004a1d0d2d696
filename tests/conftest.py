"""Shared fixtures."""

from typing import Optional

import pytest

from detox_tracker.services.storage import DocumentStore, LocalStore, StoreUnavailableError
from detox_tracker.services.tracker import TrackerService
from detox_tracker.utils.config import Settings


class UnreachableStore(DocumentStore):
    """A remote store whose every call fails."""
    
    def save(self, collection, data, doc_id=None, merge=False):
        raise StoreUnavailableError("offline")
    
    def load(self, collection, doc_id):
        raise StoreUnavailableError("offline")
    
    def query(self, collection, where=None, order_by=None, descending=False):
        raise StoreUnavailableError("offline")
    
    def delete(self, collection, doc_id):
        raise StoreUnavailableError("offline")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        firestore_project_id=None,
        firestore_api_key=None,
        target_date=None,
    )


@pytest.fixture
def local_store(settings):
    store = LocalStore(settings)
    yield store
    store.close()


@pytest.fixture
def cache(settings, tmp_path):
    store = LocalStore(settings, path=tmp_path / "cache.json")
    yield store
    store.close()


@pytest.fixture
def tracker(settings):
    service = TrackerService(LocalStore(settings), settings=settings)
    yield service
    service.close()


@pytest.fixture
def offline_tracker(settings, cache):
    return TrackerService(UnreachableStore(), cache=cache, settings=settings)


@pytest.fixture
def unreachable_store():
    return UnreachableStore()
