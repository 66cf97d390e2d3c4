import time
from typing import List, Optional

from promptparty import rooms, socketio
from promptparty.registry import RoomRegistry


def sweep_stale_rooms(registry: RoomRegistry, retention: float, now: Optional[float] = None, logger=None) -> List[str]:
    """Evict every room whose last broadcast is older than ``retention`` seconds.

    Each eviction happens under the room's lock and re-checks staleness, so a
    room touched while the sweep was running survives.
    """
    now = time.time() if now is None else now
    evicted = []
    for code in registry.stale_codes(retention, now=now):
        with registry.locked(code):
            if not registry.is_stale(code, retention, now=now):
                continue
            if registry.evict(code):
                evicted.append(code)
                if logger:
                    logger.info(f"[gc-evict] room={code} idle>{int(retention)}s")
    return evicted


def start_room_collector(app) -> None:
    """Run ``sweep_stale_rooms`` every GC_INTERVAL_SEC in a background task.

    - No-ops in TESTING mode unless ENABLE_COLLECTOR_IN_TESTS is set
    - Starts at most one collector per app
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_COLLECTOR_IN_TESTS'):
        return
    if app.extensions.get('room_collector_started'):
        return
    app.extensions['room_collector_started'] = True

    interval = int(app.config.get('GC_INTERVAL_SEC', 3600))
    retention = int(app.config.get('ROOM_RETENTION_SEC', 3 * 3600))
    registry = app.extensions.get('room_registry', rooms)

    def _worker():
        while True:
            socketio.sleep(interval)
            evicted = sweep_stale_rooms(registry, retention, logger=app.logger)
            app.logger.info(f"[gc-sweep] evicted={len(evicted)} remaining={len(registry)}")

    app.logger.info(f"[gc-start] interval={interval}s retention={retention}s")
    socketio.start_background_task(_worker)
