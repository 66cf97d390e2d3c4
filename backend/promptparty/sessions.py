import threading
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Session:
    room_code: str
    name: str


class ConnectionMap:
    """Which (room, member name) a Socket.IO connection currently speaks for."""

    def __init__(self):
        self._by_sid: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def bind(self, sid: str, room_code: str, name: str) -> Session:
        session = Session(room_code=room_code, name=name)
        with self._lock:
            self._by_sid[sid] = session
        return session

    def get(self, sid: str) -> Optional[Session]:
        return self._by_sid.get(sid)

    def drop(self, sid: str) -> Optional[Session]:
        with self._lock:
            return self._by_sid.pop(sid, None)

    def clear(self) -> None:
        with self._lock:
            self._by_sid.clear()

    def __len__(self) -> int:
        return len(self._by_sid)
