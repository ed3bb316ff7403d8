from __future__ import annotations

from typing import Sequence

from serum import inject

from disle.config import Config
from disle.plugins.commands import CommandArgumentError, CommandError, Invocation
from disle.plugins.director import Director


@inject
class Plugin:
    """Generic Plugin Class"""
    config: Config
    director: Director

    def __init__(self):
        self.store = self.director.store
        self.persistence = self.director.persistence

    def get_name(self):
        return self.__class__.__name__

    def get_help(self):
        doc = getattr(self, '__doc__', None)
        return doc


def command(function=None, name: str = '', aliases: Sequence[str] = (), group: str = '', hide: bool = False):
    def add_command(fn):
        fn.command_name = name or fn.__name__
        fn.command_aliases = list(aliases)
        fn.command_group = group
        fn.command_hide = hide
        return fn

    if function:
        return add_command(function)

    return add_command
