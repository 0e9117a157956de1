"""Protocol for the real-time transport that delivers events to connected clients"""

from typing import Any, Protocol


class Broadcaster(Protocol):
    def emit(self, session_ids: list[str], event: str, payload: Any) -> None:
        """Send the named event to every listed session (sessions that are gone are skipped)."""
        ...
