from __future__ import annotations

import inspect
import re

from disle.plugins import Plugin, command

re_param_doc = re.compile(r".*:param (\w+): (.*)")


class CommandHelper(Plugin):
    """Display help for the commands"""

    def command_help(self, command_name: str) -> str:
        manager = self.director.command_manager
        group, _, name = command_name.rpartition(" ")
        cmd = manager.find_command(name, group)

        doc_lines = []
        parameter_doc = {}
        for line in (getattr(cmd.callback, '__doc__') or '').split("\n"):
            if m := re_param_doc.match(line):
                parameter_doc[m.group(1)] = m.group(2)
            elif len(line.strip(" \n")):
                doc_lines.append(line.strip())

        help_text = [f"Usage: {manager.get_usage(cmd)}"]
        if cmd.aliases:
            help_text.append(f"Aliases: {', '.join(cmd.aliases)}")
        help_text += doc_lines

        for parameter in cmd.get_parameters() + list(cmd.get_options().values()):
            if parameter.name in parameter_doc:
                optional = "" if parameter.default is inspect.Parameter.empty else " (optional)"
                help_text.append(f"  {parameter.name.lstrip('_')}{optional}: {parameter_doc[parameter.name]}")

        return "\n".join(help_text)

    @command(hide=True)
    def help(self, text: str = ""):
        """Display the list of commands, or the help of one command"""
        manager = self.director.command_manager

        if text.strip().lower() in manager.get_groups():
            return manager.get_group_help(text.strip().lower())

        if text:
            return self.command_help(text.strip().lower())

        help_text = [f"Usage: {manager.command_char}command <arguments>", "Available commands:"]

        for c in sorted(manager.commands, key=lambda c: c.qualified_name):
            if c.hide_help:
                continue
            help_text.append(f"  {c.qualified_name}: {c.get_description()}")

        return "\n".join(help_text)
