from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Set

from serum import inject

from disle.aliases.persistence import AliasPersistence
from disle.aliases.store import AliasStore
from disle.config import Config
from disle.plugins.commands import CommandManager, Invocation

log = logging.getLogger(__name__)


@inject
class Director:
    """Owns the alias tables and routes command lines to the plugins"""
    config: Config

    def __init__(self, roller: Optional[Callable[[str], str]] = None):
        # the dice evaluator, an expanded command goes in and the roll result comes out
        self.roller = roller
        self.store: AliasStore = AliasStore(self.config.get_specific_option("global", "reserved_names"))
        self.persistence: AliasPersistence = AliasPersistence(self.store, self.config.data_directory())
        self.command_manager: CommandManager = CommandManager(self.config.get_specific_option("global", "command_char"))
        self.loaded_rooms: Set[str] = set()
        self._rooms_lock = threading.Lock()
        self._room_locks: Dict[str, threading.Lock] = {}

    def register_object(self, obj: object):
        self.command_manager.register_object(obj)

    def unregister_object(self, obj: object):
        self.command_manager.unregister_object(obj)

    def ensure_room_loaded(self, room: str) -> None:
        """Load the saved aliases of a room the first time we hear from it"""
        room = str(room)
        with self._rooms_lock:
            if room in self.loaded_rooms:
                return
            room_lock = self._room_locks.setdefault(room, threading.Lock())

        # other messages for the room wait here until its tables are loaded
        with room_lock:
            with self._rooms_lock:
                if room in self.loaded_rooms:
                    return

            log.debug(f"First contact with room {room}")
            self.persistence.autoload_room(room)

            with self._rooms_lock:
                self.loaded_rooms.add(room)
                self._room_locks.pop(room, None)

    def expand(self, text: str, invocation: Invocation, expand_args: bool = True) -> str:
        self.ensure_room_loaded(invocation.room)
        return self.store.expand(text, invocation.room, invocation.user, expand_args)

    def handle(self, line: str, invocation: Invocation) -> Optional[str]:
        """Reply to a command line, None if the line isn't a command"""
        self.ensure_room_loaded(invocation.room)
        if not self.command_manager.is_command(line):
            return None

        return self.command_manager.execute_command(line, invocation)

    def save_all(self) -> int:
        return self.persistence.save_all()
