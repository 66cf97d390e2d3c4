import random
from typing import Optional

from promptparty.errors import RoomError, error, no_room_error, not_in_room_error
from promptparty.models import (
    GUESSING,
    WAITING,
    WRITING,
    GuessingMember,
    GuessingRoom,
    WritingRoom,
)
from promptparty.registry import RoomRegistry
from .shuffle import DEFAULT_MAX_ATTEMPTS, DerangementError, derange


def join(registry: RoomRegistry, code: str, name: str, sid: str) -> Optional[RoomError]:
    """Add ``name`` to the room, or reconnect them if they were already in it."""
    room = registry.lookup(code)
    if room is None:
        return error('No room exists with that code!')
    room.rejoin(name, sid)
    return None


def start_writing(registry: RoomRegistry, code: str) -> Optional[RoomError]:
    room = registry.lookup(code)
    if room is None:
        return no_room_error
    if room.phase == WRITING:
        return error("You can't restart the round while users are writing. What would that even do?")
    registry.replace(code, WritingRoom.fresh_from(room))
    return None


def submit_prompt(registry: RoomRegistry, code: str, name: str, text: str) -> Optional[RoomError]:
    room = registry.lookup(code)
    if room is None:
        return no_room_error
    if room.phase != WRITING:
        return error("The room isn't taking any submissions right now.")
    member = room.members.get(name)
    if member is None:
        return not_in_room_error
    if member.submission:
        return error('You already submitted a word!')
    member.submission = text
    return None


def start_guessing(
    registry: RoomRegistry,
    code: str,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Optional[RoomError]:
    """Move a writing room into guessing.

    Every member who submitted gets somebody else's prompt and a place in the
    turn order; members who did not submit sit the round out.
    """
    room = registry.lookup(code)
    if room is None:
        return no_room_error
    if room.phase == GUESSING:
        return error("You can't re-start the round of guessing!")
    if room.phase == WAITING:
        return error("You can't go straight to guessing!")

    submissions = room.submissions()
    if len(submissions) < 2:
        return error('Need at least 2 submissions.')

    try:
        assigned = derange(submissions, rng=rng, max_attempts=max_attempts)
    except DerangementError:
        return error("Couldn't come up with a combination where nobody gets their own submission.")

    prompts = dict(assigned)
    members = {
        name: GuessingMember(sid=member.sid, is_host=member.is_host, prompt=prompts.get(name))
        for name, member in room.members.items()
    }
    upcoming = [name for name, _ in assigned]
    if not upcoming:
        return error('Not enough players have submitted.')
    active = upcoming.pop()

    registry.replace(code, GuessingRoom(members=members, active_player=active, upcoming_players=upcoming))
    return None


def advance_turn(registry: RoomRegistry, code: str) -> Optional[RoomError]:
    """Hand the turn to the next player, or start a new writing round after the last."""
    room = registry.lookup(code)
    if room is None:
        return no_room_error
    if room.phase == WAITING:
        return error('Room is still waiting to start.')
    if room.phase == WRITING:
        return error('Room is still writing submissions.')

    if not room.upcoming_players:
        registry.replace(code, WritingRoom.fresh_from(room))
        return None

    next_name = room.upcoming_players[-1]
    member = room.members.get(next_name)
    if member is None:
        return error("The next player to go isn't in this room.")
    if not member.prompt:
        return error('The next player to go has no prompt.')
    room.active_player = room.upcoming_players.pop()
    return None
