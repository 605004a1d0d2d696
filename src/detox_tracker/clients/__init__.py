"""API clients for external services."""

from .firestore import FirestoreClient

__all__ = ["FirestoreClient"]
