"""
Save and load the alias tables of a room.

Each room is stored in its own TOML file, `<data_directory>/<room>.toml`:

    allowed = ["1234"]

    [global_aliases]
    FS = "d6! - d6!"

    [users_aliases]

    [users_aliases.1234]
    bonus = "+4"

A missing file only means nothing was saved for the room.  A file that can't be
read or parsed raises PersistenceError: an explicit load reports it and keeps the
tables in memory, the automatic load done on first contact with a room logs it
and starts with empty tables.
"""
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from disle.aliases.errors import PersistenceError
from disle.aliases.store import AliasStore, RoomAliasData

log = logging.getLogger(__name__)

re_room_id = re.compile(r"^[A-Za-z0-9_\-][A-Za-z0-9_.\-]*$")


def dumps(data: RoomAliasData) -> str:
    doc = tomlkit.document()
    doc.add("allowed", sorted(data.allowed))

    global_aliases = tomlkit.table()
    for name, body in sorted(data.global_aliases.items()):
        global_aliases.add(name, body)
    doc.add("global_aliases", global_aliases)

    users_aliases = tomlkit.table()
    for user, aliases in sorted(data.users_aliases.items()):
        user_table = tomlkit.table()
        for name, body in sorted(aliases.items()):
            user_table.add(name, body)
        users_aliases.add(user, user_table)
    doc.add("users_aliases", users_aliases)

    return tomlkit.dumps(doc)


def _string_table(value, where: str) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        raise PersistenceError(f"`{where}` should be a table")

    table = {}
    for k, v in value.items():
        if not isinstance(v, str):
            raise PersistenceError(f"`{where}.{k}` should be a string")
        table[str(k)] = str(v)
    return table


def loads(text: str) -> RoomAliasData:
    try:
        doc = tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        raise PersistenceError(f"Malformed alias file: {exc}")

    users = doc.get("users_aliases", {})
    if not isinstance(users, Mapping):
        raise PersistenceError("`users_aliases` should be a table")

    allowed = doc.get("allowed", [])
    if not isinstance(allowed, list) or not all(isinstance(u, (str, int)) for u in allowed):
        raise PersistenceError("`allowed` should be a list of user ids")

    return RoomAliasData(
        global_aliases=_string_table(doc.get("global_aliases", {}), "global_aliases"),
        users_aliases={str(user): _string_table(aliases, f"users_aliases.{user}") for user, aliases in users.items()},
        allowed={str(u) for u in allowed},
    )


class AliasPersistence:
    def __init__(self, store: AliasStore, directory: Path):
        self.store = store
        self.directory = Path(directory).expanduser()

    def room_path(self, room: str) -> Path:
        room = str(room)
        if not re_room_id.match(room):
            raise PersistenceError(f"Invalid room identifier '{room}'")
        return self.directory.joinpath(f"{room}.toml")

    def write_room(self, room: str, data: RoomAliasData):
        path = self.room_path(room)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dumps(data), encoding="UTF-8")
        except OSError as exc:
            raise PersistenceError(f"Unable to write '{path}': {exc.strerror or exc}")

        log.debug(f"Saved aliases of room {room} to '{path}'")

    def read_room(self, room: str) -> Optional[RoomAliasData]:
        """Room data from disk, None if nothing was saved for it"""
        path = self.room_path(room)
        if not path.exists():
            return None

        try:
            text = path.read_text(encoding="UTF-8")
        except OSError as exc:
            raise PersistenceError(f"Unable to read '{path}': {exc.strerror or exc}")

        log.debug(f"Import aliases from '{path}'")
        return loads(text)

    def save_room(self, room: str) -> str:
        data = self.store.snapshot(room)
        if data is None:
            return "Nothing to save"

        self.write_room(room, data)
        return "Configuration saved"

    def load_room(self, room: str) -> str:
        data = self.read_room(room)
        if data is None:
            return "Nothing to load"

        self.store.replace_room(room, data)
        return "Configuration loaded"

    def autoload_room(self, room: str) -> bool:
        """Load a room on first contact, a broken file leaves the room empty"""
        try:
            data = self.read_room(room)
        except PersistenceError as exc:
            log.warning(f"Unable to load aliases of room {room}, starting empty: {exc}")
            return False

        if data is not None:
            self.store.replace_room(room, data)
        return data is not None

    def save_all(self) -> int:
        saved = 0
        for room in self.store.known_rooms():
            try:
                self.save_room(room)
                saved += 1
            except PersistenceError as exc:
                log.error(f"Unable to save aliases of room {room}: {exc}")

        log.info(f"Saved aliases of {saved} room(s)")
        return saved
