from __future__ import annotations

from disle.aliases.errors import ExpansionError
from disle.plugins import Plugin, command, Invocation


class RollCommand(Plugin):
    """Expand aliases and hand the roll to the dice evaluator"""

    @command(name="roll", aliases=["r"])
    def roll(self, invocation: Invocation, text: str = ""):
        """
        Roll dice, aliases are expanded first

        :param text: the roll, `$NAME`, `$name` and `$arg1,arg2|NAME` are replaced by their alias
        """
        if not text.strip():
            return f"To get help, run `{self.director.command_manager.command_char}help`"

        try:
            expanded = self.director.expand(text, invocation)
        except ExpansionError as exc:
            return str(exc)

        if self.director.roller is None:
            return expanded

        return self.director.roller(expanded)
