from __future__ import annotations

import re
from typing import List

from disle.aliases.errors import PersistenceError
from disle.plugins import Plugin, command, Invocation

re_mention = re.compile(r"^<@!?(\w+)>$")


def mentioned_users(text: str) -> List[str]:
    """User ids from `<@id>` mentions or bare ids"""
    users = []
    for word in text.split():
        m = re_mention.match(word)
        users.append(m.group(1) if m else word)
    return users


class AliasCommand(Plugin):
    """Provides the alias management commands"""

    def can_manage(self, invocation: Invocation) -> bool:
        return invocation.is_super_user or self.store.is_allowed(invocation.user, invocation.room)

    @command(name="list", aliases=["l"], group="alias")
    def list_alias(self, invocation: Invocation, _mine: bool = False, _global: bool = False):
        """
        List defined aliases

        :param _mine: only list your aliases
        :param _global: only list the global aliases
        """
        user_aliases, global_aliases = self.store.list_aliases(invocation.room, invocation.user)

        if user_aliases:
            user_text = "\n".join([f"{invocation.display_name}'s aliases:"] + user_aliases)
        else:
            user_text = f"{invocation.display_name} has no aliases set"

        if global_aliases:
            global_text = "\n".join(["Global aliases:"] + global_aliases)
        else:
            global_text = "No global aliases defined"

        if _mine and not _global:
            return user_text
        if _global and not _mine:
            return global_text
        return f"{user_text}\n{global_text}"

    @command(name="set_global_alias", aliases=["sg", "setg"], group="alias")
    def set_global_alias(self, invocation: Invocation, alias: str, text: str):
        """
        Create or replace a global alias, callable by anybody in the room

        :param alias: name of the alias, stored in upper case
        :param text: roll command to substitute
        """
        if not self.can_manage(invocation):
            return "You are not allowed to set global aliases"

        return self.store.set_global_alias(alias, text, invocation.room)

    @command(name="del_global_alias", aliases=["dg", "delg"], group="alias")
    def del_global_alias(self, invocation: Invocation, alias: str):
        """
        Remove a global alias

        :param alias: name of the alias
        """
        if not self.can_manage(invocation):
            return "Only allowed users can delete global aliases"

        return self.store.del_global_alias(alias, invocation.room)

    @command(name="set_user_alias", aliases=["su", "set"], group="alias")
    def set_user_alias(self, invocation: Invocation, alias: str, text: str):
        """
        Create or replace one of your aliases

        :param alias: name of the alias, stored in lower case
        :param text: roll command to substitute
        """
        return self.store.set_user_alias(alias, text, invocation.room, invocation.user, invocation.display_name)

    @command(name="del_user_alias", aliases=["du", "del"], group="alias")
    def del_user_alias(self, invocation: Invocation, alias: str):
        """
        Remove one of your aliases

        :param alias: name of the alias
        """
        return self.store.del_user_alias(alias, invocation.room, invocation.user)

    @command(name="clear_user_alias", group="alias")
    def clear_user_alias(self, invocation: Invocation):
        """Remove all your aliases"""
        return self.store.clear_user_aliases(invocation.room, invocation.user)

    @command(name="list_users", aliases=["users", "u"], group="alias")
    def list_users(self, invocation: Invocation):
        """List the users allowed to manage global aliases"""
        users = self.store.list_allowed_users(invocation.room)
        if not users:
            return "No allowed user"

        return "\n".join(["Allowed users:"] + [f"- {u}" for u in users])

    @command(name="allow_user_alias", aliases=["allow", "au"], group="alias")
    def allow_user_alias(self, invocation: Invocation, text: str):
        """
        Allow users to manage global aliases

        :param text: mentions or ids of the users
        """
        if not invocation.is_super_user:
            return "Only administrator or server's owner can allow a user to manage global aliases"

        return "\n".join(self.store.allow_user(u, invocation.room) for u in mentioned_users(text))

    @command(name="disallow_user_alias", aliases=["disallow"], group="alias")
    def disallow_user_alias(self, invocation: Invocation, text: str):
        """
        Forbid users to manage global aliases

        :param text: mentions or ids of the users
        """
        if not invocation.is_super_user:
            return "Only administrator or server's owner can disallow a user to manage global aliases"

        return "\n".join(self.store.disallow_user(u, invocation.room) for u in mentioned_users(text))

    @command(name="save_alias", aliases=["save"], group="alias")
    def save_alias(self, invocation: Invocation):
        """Persist the aliases of the room"""
        if not self.can_manage(invocation):
            return "Only allowed users can save the configuration"

        try:
            return self.persistence.save_room(invocation.room)
        except PersistenceError as exc:
            return f"Unable to save the configuration: {exc}"

    @command(name="load_alias", aliases=["load"], group="alias")
    def load_alias(self, invocation: Invocation):
        """Reload the saved aliases of the room, undoing the changes made since the last save"""
        if not self.can_manage(invocation):
            return "Only allowed users can load the configuration"

        try:
            return self.persistence.load_room(invocation.room)
        except PersistenceError as exc:
            return f"Unable to load the configuration: {exc}"

    @command(name="clear_global_aliases", group="alias")
    def clear_global_aliases(self, invocation: Invocation):
        """Delete all the global aliases. You can still undo this with a `load` until the next `save`."""
        if not invocation.is_super_user:
            return "Only admin users can clear all the aliases"

        return self.store.clear_global_aliases(invocation.room)

    @command(name="clear_users", group="alias")
    def clear_users(self, invocation: Invocation):
        """Delete all allowed users. You can still undo this with a `load` until the next `save`."""
        if not invocation.is_super_user:
            return "Only administrator or owner can clear allowed users list"

        return self.store.clear_users(invocation.room)
