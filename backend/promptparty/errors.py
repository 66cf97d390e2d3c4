from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RoomError:
    """A rejected action. Returned to the requester only, never broadcast."""
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'ERROR', 'message': self.message}


def error(message: str) -> RoomError:
    return RoomError(message)


no_name_error = error("You don't have a name. This is probably a bug.")
no_code_error = error("You don't have a room code. This is probably a bug.")
no_room_error = error("You don't have a room. This is probably a bug.")
not_in_room_error = error("You aren't in the room. This is probably a bug.")
not_host_error = error("You aren't the host of this room.")
