"""Web UI for the tracker."""

import uvicorn


def run(host: str = "127.0.0.1", port: int = 8000, reload: bool = True):
    """Run the web server."""
    uvicorn.run(
        "detox_tracker.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


__all__ = ["run"]
