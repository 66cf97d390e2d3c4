from typing import Any, Dict

from promptparty.models import GUESSING, HINTING, WAITING, WRITING, Room

MISSING_PROMPT = 'No prompt???'


def project(room: Room, member_name: str, room_code: str) -> Dict[str, Any]:
    """Build the state one member is allowed to see.

    Other members' submissions are never included; in a guessing room the
    active player's prompt is shown to everyone except the active player.
    """
    member = room.members.get(member_name)
    is_host = bool(member and member.is_host)

    if room.phase == WAITING:
        return {
            'type': WAITING,
            'memberNames': list(room.members),
            'ownName': member_name,
            'roomCode': room_code,
            'isHost': is_host,
        }

    if room.phase == WRITING:
        return {
            'type': WRITING,
            'members': [
                {'name': name, 'isWriting': not m.submission}
                for name, m in room.members.items()
            ],
            'ownName': member_name,
            'roomCode': room_code,
            'isHost': is_host,
            'myPrompt': (member.submission if member else None) or None,
        }

    if room.phase == GUESSING:
        if room.active_player == member_name:
            return {
                'type': GUESSING,
                'ownName': member_name,
                'isHost': is_host,
                'roomCode': room_code,
                'isLastPlayer': room.is_last_player,
            }
        active = room.members.get(room.active_player)
        return {
            'type': HINTING,
            'currentPlayer': room.active_player,
            'prompt': (active.prompt if active else None) or MISSING_PROMPT,
            'isHost': is_host,
            'roomCode': room_code,
            'isLastPlayer': room.is_last_player,
        }

    raise ValueError(f'unknown room phase {room.phase!r}')
