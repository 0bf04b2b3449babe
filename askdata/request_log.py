import logging
from datetime import datetime, timezone

from pydantic import BaseModel

log = logging.getLogger(__name__)


class LogEntry(BaseModel):
    timestamp: str
    message: str


class RequestLog:
    """Append-only diagnostic log for a single request.

    Entries are returned to the caller in both success and error payloads, and
    each one is mirrored to the module logger.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def add(self, message: str) -> None:
        timestamp = datetime.now(timezone.utc).isoformat()
        self._entries.append(LogEntry(timestamp=timestamp, message=message))
        log.info("[QUERY] %s", message)

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
