"""
Room scoped alias tables.

Every mutator returns the message to show to the user.  Alias bodies are
expanded once before they are stored, a body that fails to expand is rejected
and the tables are left as they were.
"""
from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from disle.aliases.errors import ExpansionError
from disle.aliases.resolver import Resolver

log = logging.getLogger(__name__)

DEFAULT_RESERVED_NAMES = ("ova",)

RESTORE_NOTE = "You can still undo this with a `load` until the next `save`."


@dataclass
class RoomAliasData:
    global_aliases: Dict[str, str] = field(default_factory=dict)
    users_aliases: Dict[str, Dict[str, str]] = field(default_factory=dict)
    allowed: Set[str] = field(default_factory=set)


def canonical_name(name: str) -> str:
    return name.strip().strip("$").strip()


class AliasStore:
    """Alias tables of every room the bot has seen"""

    def __init__(self, reserved_names: Iterable[str] = DEFAULT_RESERVED_NAMES):
        self.rooms: Dict[str, RoomAliasData] = {}
        self.reserved_names = {n.lower() for n in reserved_names}
        self.resolver = Resolver(self)
        self._lock = threading.RLock()

    def room(self, room: str) -> RoomAliasData:
        """Room data, created on first write"""
        room = str(room)
        if room not in self.rooms:
            log.debug(f"Creating alias tables for room {room}")
            self.rooms[room] = RoomAliasData()
        return self.rooms[room]

    def get_user_alias(self, room: str, user: str, name: str) -> Optional[str]:
        data = self.rooms.get(str(room))
        if data is None:
            return None
        return data.users_aliases.get(str(user), {}).get(name)

    def get_global_alias(self, room: str, name: str) -> Optional[str]:
        data = self.rooms.get(str(room))
        if data is None:
            return None
        return data.global_aliases.get(name.upper())

    def expand(self, text: str, room: str, user: str, expand_args: bool = True) -> str:
        with self._lock:
            return self.resolver.expand(text, str(room), str(user), expand_args)

    def set_global_alias(self, name: str, body: str, room: str) -> str:
        name = canonical_name(name).upper()
        if not name:
            return "Alias name can't be empty"

        with self._lock:
            try:
                self.resolver.expand_global(body, str(room), seen=[name])
            except ExpansionError as exc:
                log.debug(f"Rejected global alias ${name} in room {room}: {exc}")
                return str(exc)

            self.room(room).global_aliases[name] = body

        return f"Global alias `${name}` set"

    def del_global_alias(self, name: str, room: str) -> str:
        name = canonical_name(name).upper()
        with self._lock:
            self.room(room).global_aliases.pop(name, None)

        return f"Global alias `${name}` deleted"

    def set_user_alias(self, name: str, body: str, room: str, user: str, user_name: str = "") -> str:
        name = canonical_name(name).lower()
        if not name:
            return "Alias name can't be empty"

        with self._lock:
            try:
                self.resolver.expand(body, str(room), str(user), expand_args=False, seen=[name])
            except ExpansionError as exc:
                log.debug(f"Rejected alias ${name} for user {user} in room {room}: {exc}")
                return str(exc)

            self.room(room).users_aliases.setdefault(str(user), {})[name] = body

        msg = f"Alias `${name}` set for user {user_name or user}"
        if name in self.reserved_names:
            msg += (f"\nWarning: `{name}` is also a roll command, if you want to call it, "
                    f"don't add space before parenthesis:\n`{name}(5)`, not `{name} (5)`")
        return msg

    def del_user_alias(self, name: str, room: str, user: str) -> str:
        name = canonical_name(name).lower()
        with self._lock:
            user_aliases = self.room(room).users_aliases.get(str(user), {})
            if user_aliases.pop(name, None) is None:
                return "Alias to delete not found"

        return f"Alias `${name}` deleted"

    def clear_user_aliases(self, room: str, user: str) -> str:
        with self._lock:
            self.room(room).users_aliases.get(str(user), {}).clear()

        return f"All your aliases have been deleted. {RESTORE_NOTE}"

    def clear_global_aliases(self, room: str) -> str:
        with self._lock:
            self.room(room).global_aliases.clear()

        return f"Aliases cleared. {RESTORE_NOTE}"

    def list_aliases(self, room: str, user: str) -> Tuple[List[str], List[str]]:
        """(user aliases, global aliases) as `name` = `body` lines"""
        with self._lock:
            data = self.rooms.get(str(room))
            if data is None:
                return [], []

            user_aliases = data.users_aliases.get(str(user), {})
            return ([f"`{k}` = `{v}`" for k, v in sorted(user_aliases.items())],
                    [f"`{k}` = `{v}`" for k, v in sorted(data.global_aliases.items())])

    def allow_user(self, user: str, room: str) -> str:
        with self._lock:
            self.room(room).allowed.add(str(user))

        return f"{user} has been allowed to manage global aliases"

    def disallow_user(self, user: str, room: str) -> str:
        with self._lock:
            self.room(room).allowed.discard(str(user))

        return f"{user} has been forbidden to manage global aliases"

    def list_allowed_users(self, room: str) -> List[str]:
        with self._lock:
            data = self.rooms.get(str(room))
            return sorted(data.allowed) if data else []

    def is_allowed(self, user: str, room: str) -> bool:
        with self._lock:
            data = self.rooms.get(str(room))
            return data is not None and str(user) in data.allowed

    def clear_users(self, room: str) -> str:
        with self._lock:
            self.room(room).allowed.clear()

        return f"Users cleared. {RESTORE_NOTE}"

    def snapshot(self, room: str) -> Optional[RoomAliasData]:
        """Copy of the room data, None if the room was never written or loaded"""
        with self._lock:
            data = self.rooms.get(str(room))
            return copy.deepcopy(data) if data is not None else None

    def replace_room(self, room: str, data: RoomAliasData):
        with self._lock:
            self.rooms[str(room)] = data

    def known_rooms(self) -> List[str]:
        with self._lock:
            return list(self.rooms.keys())
