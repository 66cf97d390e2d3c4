import random
import string
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from promptparty.models import Member, Room, WaitingRoom

LETTERS = string.ascii_uppercase


def normalize_code(raw: Optional[str]) -> str:
    """Room codes are case-insensitive on input and always uppercase."""
    return (raw or '').strip().upper()


class RoomRegistry:
    """Process-wide store of every room, keyed by room code.

    Entries are added by ``create_room`` and removed only by ``evict`` (the
    garbage collector). Liveness timestamps record the last broadcast for a
    room and are never used by game logic.
    """

    def __init__(self, code_length: int = 3):
        self.code_length = code_length
        self._rooms: Dict[str, Room] = {}
        self._emit_times: Dict[str, float] = {}
        # Only create_room adds entries, so this is bounded by the code space
        self._room_locks: Dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    def init_app(self, app) -> None:
        self.code_length = int(app.config.get('ROOM_CODE_LENGTH', 3))
        self.clear()
        app.extensions['room_registry'] = self

    def clear(self) -> None:
        with self._lock:
            self._rooms.clear()
            self._emit_times.clear()

    def generate_room_code(self) -> str:
        return ''.join(random.choice(LETTERS) for _ in range(self.code_length))

    def create_room(self, host_name: str, sid: str) -> str:
        with self._lock:
            code = self.generate_room_code()
            while code in self._rooms:
                code = self.generate_room_code()
            self._rooms[code] = WaitingRoom(members={host_name: Member(sid=sid, is_host=True)})
            self._emit_times[code] = time.time()
            self._room_locks.setdefault(code, threading.RLock())
        return code

    def lookup(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def replace(self, code: str, room: Room) -> None:
        """Install the next phase record for an existing room."""
        with self._lock:
            if code not in self._rooms:
                raise KeyError(code)
            self._rooms[code] = room

    def evict(self, code: str) -> bool:
        with self._lock:
            self._emit_times.pop(code, None)
            return self._rooms.pop(code, None) is not None

    def touch(self, code: str, now: Optional[float] = None) -> None:
        with self._lock:
            if code in self._rooms:
                self._emit_times[code] = time.time() if now is None else now

    def last_emit(self, code: str) -> Optional[float]:
        return self._emit_times.get(code)

    def is_stale(self, code: str, retention: float, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        emitted = self._emit_times.get(code)
        return emitted is not None and now - emitted > retention

    def stale_codes(self, retention: float, now: Optional[float] = None) -> List[str]:
        now = time.time() if now is None else now
        with self._lock:
            return [code for code, emitted in self._emit_times.items() if now - emitted > retention]

    def lock_for(self, code: str) -> Optional[threading.RLock]:
        """The lock of an issued code; None for codes create_room never produced."""
        with self._lock:
            return self._room_locks.get(code)

    def lock_count(self) -> int:
        return len(self._room_locks)

    @contextmanager
    def locked(self, code: str) -> Iterator[Optional[Room]]:
        """Serialize every action on one room; other rooms are unaffected.

        Yields None without taking or storing a lock when the code was never
        issued, so arbitrary client input cannot grow the lock table.
        """
        lock = self.lock_for(code)
        if lock is None:
            yield None
            return
        with lock:
            yield self._rooms.get(code)

    def codes(self) -> List[str]:
        with self._lock:
            return list(self._rooms)

    def __contains__(self, code: str) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
