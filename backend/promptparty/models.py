from dataclasses import dataclass, field, replace
from typing import ClassVar, Dict, List, Optional, Type

WAITING = 'WAITING'
WRITING = 'WRITING'
GUESSING = 'GUESSING'
# View-only tag: everyone in a guessing room except the active player
HINTING = 'HINTING'


@dataclass
class Member:
    sid: str
    is_host: bool = False


@dataclass
class WritingMember(Member):
    # None means the member is still writing
    submission: Optional[str] = None


@dataclass
class GuessingMember(Member):
    prompt: Optional[str] = None


@dataclass
class Room:
    """Base for the per-phase room records.

    Members are keyed by display name, which is case-sensitive and acts as the
    member's identity across reconnects.
    """
    phase: ClassVar[str] = ''
    member_type: ClassVar[Type[Member]] = Member

    members: Dict[str, Member] = field(default_factory=dict)

    def rejoin(self, name: str, sid: str) -> None:
        """Insert a new member or point an existing one at a new connection.

        Host flag and phase payload of an existing member are kept.
        """
        previous = self.members.get(name)
        if previous is None:
            self.members[name] = self.member_type(sid=sid)
        else:
            self.members[name] = replace(previous, sid=sid)

    def host_name(self) -> Optional[str]:
        for name, member in self.members.items():
            if member.is_host:
                return name
        return None


@dataclass
class WaitingRoom(Room):
    phase: ClassVar[str] = WAITING
    member_type: ClassVar[Type[Member]] = Member

    members: Dict[str, Member] = field(default_factory=dict)


@dataclass
class WritingRoom(Room):
    phase: ClassVar[str] = WRITING
    member_type: ClassVar[Type[Member]] = WritingMember

    members: Dict[str, WritingMember] = field(default_factory=dict)

    @classmethod
    def fresh_from(cls, room: Room) -> 'WritingRoom':
        """A new writing round for everyone in ``room``, submissions cleared."""
        return cls(members={
            name: WritingMember(sid=member.sid, is_host=member.is_host)
            for name, member in room.members.items()
        })

    def submissions(self) -> Dict[str, str]:
        return {
            name: member.submission
            for name, member in self.members.items()
            if member.submission
        }


@dataclass
class GuessingRoom(Room):
    phase: ClassVar[str] = GUESSING
    member_type: ClassVar[Type[Member]] = GuessingMember

    members: Dict[str, GuessingMember] = field(default_factory=dict)
    active_player: str = ''
    # Consumed from the end
    upcoming_players: List[str] = field(default_factory=list)

    @property
    def is_last_player(self) -> bool:
        return not self.upcoming_players
