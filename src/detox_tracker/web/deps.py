"""Request dependencies."""

from typing import Iterator

from ..services.tracker import TrackerService, open_tracker


def get_tracker() -> Iterator[TrackerService]:
    """Tracker bound to the configured stores for one request."""
    with open_tracker() as tracker:
        yield tracker
