from __future__ import annotations

import inspect
import logging
import shlex
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

log = logging.getLogger(__name__)


class CommandArgumentError(Exception):
    pass


class CommandError(Exception):
    pass


@dataclass
class Invocation:
    """Who sent a command and from where"""
    room: str
    user: str
    user_name: str = ""
    # decided by the chat platform, administrators and room owners
    is_super_user: bool = False

    @property
    def display_name(self) -> str:
        return self.user_name or str(self.user)


class Command:
    def __init__(self, source: object, callback: Callable, name: str, aliases: Sequence[str] = (),
                 group: str = '', hide_help: bool = False):
        self.callback = callback
        self.name = name
        self.aliases = [a.lower() for a in aliases]
        self.group = group
        self.source = source
        self.hide_help = hide_help

    @property
    def qualified_name(self) -> str:
        return f"{self.group} {self.name}" if self.group else self.name

    def matches(self, name: str) -> bool:
        return name.lower() == self.name.lower() or name.lower() in self.aliases

    def execute(self, command_arguments: str, invocation: Invocation) -> Optional[str]:
        """Run the command, returns None when help was requested"""
        if self.pass_full_command_text():
            first = command_arguments.split(None, 1)[:1]
            if first and first[0].lower() in ('-h', '--help', '-?'):
                return None

            d = self.evaluate_text_arguments(command_arguments)
        else:
            try:
                submitted_arguments = shlex.split(command_arguments)
            except ValueError as exc:
                raise CommandArgumentError(f"Unable to parse arguments: {exc}")

            submitted_options = [s.strip("-") for s in submitted_arguments if s.startswith("-")]

            d = self.evaluate_options(submitted_options)
            if 'help' in d:
                return None

            submitted_arguments = [s for s in submitted_arguments if not s.startswith("-")]
            d.update(self.evaluate_arguments(submitted_arguments))

        if self.invocation_parameter():
            d[self.invocation_parameter()] = invocation

        return self.callback(**d)

    def evaluate_value(self, parameter: inspect.Parameter, submitted_value: str):
        if parameter.annotation in [int, "int"]:
            try:
                return int(submitted_value)
            except ValueError:
                raise CommandArgumentError(f"`{parameter.name}` should be a number")

        return submitted_value

    def evaluate_arguments(self, submitted_arguments: List[str]) -> Dict:
        """evaluate arguments to command functions"""
        evaluated_args = {}

        for parameter in self.get_parameters():
            if parameter.default is inspect.Parameter.empty and len(submitted_arguments) == 0:
                raise CommandArgumentError(f"Missing argument `{parameter.name}`")

            if len(submitted_arguments) > 0:
                value = self.evaluate_value(parameter, submitted_arguments.pop(0))
            else:
                value = parameter.default

            evaluated_args[parameter.name] = value

        if submitted_arguments:
            raise CommandArgumentError(f"Too many arguments: {' '.join(submitted_arguments)}")

        return evaluated_args

    def evaluate_text_arguments(self, command_arguments: str) -> Dict:
        """
        The parameters before `text` take one word each, `text` receives the rest verbatim.

        Alias bodies contain quotes, `-` and `*` that shlex and option parsing would mangle.
        """
        parameters = self.get_parameters()
        words = command_arguments.strip().split(None, len(parameters) - 1) if parameters else []
        evaluated_args = {}

        for parameter in parameters:
            if len(words) == 0:
                if parameter.default is inspect.Parameter.empty:
                    raise CommandArgumentError(f"Missing argument `{parameter.name}`")
                evaluated_args[parameter.name] = parameter.default
                continue

            if parameter.name.lower() == 'text':
                evaluated_args[parameter.name] = " ".join(words)
                words = []
            else:
                evaluated_args[parameter.name] = self.evaluate_value(parameter, words.pop(0))

        return evaluated_args

    def evaluate_options(self, submitted_options: List[str]) -> dict[str, any]:
        """evaluate options to command functions"""
        if len([so for so in submitted_options if so.lower() in ('h', 'help', '?')]):
            return {'help': True}

        command_options = self.get_options()

        result = {name: p.default for name, p in command_options.items()}

        for so in submitted_options:
            so_name = so.split("=")[0]

            matched_options = [k for k in command_options.keys() if k.lstrip("_").startswith(so_name.lower())]

            if len(matched_options) == 0:
                raise CommandArgumentError(f"Invalid option: {so_name}")

            if len(matched_options) > 1:
                raise CommandArgumentError(f"Ambiguous option: {so_name}")

            option_name = matched_options[0]

            if command_options[option_name].annotation in [bool, 'bool']:
                result[option_name] = True
                continue

            if so.find("=") < 0:
                raise CommandArgumentError(f"Please specify value for --{option_name.lstrip('_')}")

            submitted_value = so.split("=")[1]

            parameter = command_options[option_name]
            result[option_name] = self.evaluate_value(parameter, submitted_value)

        return result

    def pass_full_command_text(self) -> bool:
        return any([a for a in self.get_parameters() if a.name.lower() == 'text'])

    def invocation_parameter(self) -> Optional[str]:
        for p in inspect.signature(self.callback).parameters.values():
            if p.name == 'invocation' or p.annotation in [Invocation, 'Invocation']:
                return p.name
        return None

    def get_parameters(self) -> List[inspect.Parameter]:
        parameters = inspect.signature(self.callback).parameters.values()
        return [p for p in parameters if p.annotation not in [bool, 'bool'] and not p.name.startswith("_")
                and p.name != self.invocation_parameter()]

    def get_options(self) -> Dict[str, inspect.Parameter]:
        parameters = inspect.signature(self.callback).parameters.values()
        return {p.name: p for p in parameters if p.annotation in [bool, 'bool'] or p.name.startswith("_")}

    def get_description(self) -> str:
        doc = getattr(self.callback, '__doc__', None)
        if doc is None:
            return ""
        lines = [line.strip() for line in doc.split("\n") if len(line.strip())]
        return "" if len(lines) == 0 else lines[0]


class CommandManager:

    def __init__(self, command_char: str = "/"):
        self.commands: List[Command] = []
        self.command_char = command_char

    def register_object(self, obj: object):
        for name, member in inspect.getmembers(obj, callable):
            if hasattr(member, "command_name"):
                group = getattr(member, "command_group", "")
                duplicates = [c for c in self.commands if c.group == group and c.matches(member.command_name)]
                if duplicates:
                    log.debug(f"Skipping duplicate function '{member.command_name}' on {member}")
                    continue

                log.debug(f"Adding command function '{member.command_name}'")
                self.commands.append(Command(obj, member, member.command_name, member.command_aliases,
                                             group, member.command_hide))

    def unregister_object(self, obj: object):
        self.commands = [c for c in self.commands if c.source != obj]

    def get_groups(self) -> List[str]:
        return sorted({c.group for c in self.commands if c.group})

    def is_command(self, line: str) -> bool:
        return line.lstrip().startswith(self.command_char)

    def find_command(self, command_str: str, group: str = '') -> Command:
        candidates = [cmd for cmd in self.commands if cmd.group == group]

        # look for partial matches and exact matches
        exact_matches = [cmd for cmd in candidates if cmd.matches(command_str)]
        starts = [cmd for cmd in candidates if cmd.name.lower().startswith(command_str.lower())]

        if len(exact_matches) == 1:
            # use the exact match if we have 1
            return exact_matches[0]

        if len(starts) == 1:
            # use the partial match if there is only 1
            return starts[0]

        full_name = f"{group} {command_str}" if group else command_str
        if len(starts) == 0:
            raise CommandError(f"Unknown command '{full_name}'")

        matches = ", ".join([cmd.name for cmd in starts])
        raise CommandError(f"Ambiguous command '{full_name}' [{matches}]")

    def parse_command_line(self, command_line: str) -> Tuple[Optional[Command], str, str]:
        """Returns (command, arguments, group), command is None when only a group was given"""
        command_line = command_line.strip()[len(self.command_char):]

        s = command_line.split(None, 1)
        command_str = s[0] if s else 'help'
        argument_str = "" if len(s) < 2 else s[1]

        if command_str.lower() in self.get_groups():
            group = command_str.lower()
            s = argument_str.split(None, 1)
            if not s:
                return None, "", group
            return self.find_command(s[0], group), "" if len(s) < 2 else s[1], group

        return self.find_command(command_str), argument_str, ''

    def get_usage(self, command: Command) -> str:
        parameter_names = []
        for parameter in command.get_parameters():
            if parameter.default is inspect.Parameter.empty:
                parameter_names.append(f"<{parameter.name}>")
            else:
                parameter_names.append(f"[{parameter.name}]")

        for name in command.get_options():
            parameter_names.append(f"[--{name.lstrip('_')}]")

        return " ".join([f"{self.command_char}{command.qualified_name}"] + parameter_names)

    def get_group_help(self, group: str) -> str:
        help_text = [f"Usage: {self.command_char}{group} <command> <arguments>", "Available commands:"]
        for c in sorted(self.commands, key=lambda c: c.name):
            if c.group == group and not c.hide_help:
                aliases = f" ({', '.join(c.aliases)})" if c.aliases else ""
                help_text.append(f"  {c.name}{aliases}: {c.get_description()}")

        return "\n".join(help_text)

    def show_command_help(self, command: Command) -> str:
        help_command = next((c for c in self.commands if not c.group and c.name == 'help'), None)

        if help_command is None:
            log.debug("Unable to find 'help' command handler")
            return self.get_usage(command)

        return help_command.callback(command.qualified_name)

    def execute_command(self, command_line: str, invocation: Invocation) -> str:
        command: Command | None = None

        try:
            command, arg_str, group = self.parse_command_line(command_line)
            if command is None:
                return self.get_group_help(group)

            result = command.execute(arg_str, invocation)
            if result is None:
                return self.show_command_help(command)
            return result

        except CommandArgumentError as exc:
            if command is not None:
                return f"{exc}\nUsage: {self.get_usage(command)}"
            return str(exc)

        except CommandError as exc:
            return str(exc)

        except Exception as exc:
            log.exception(f"Command '{command_line}' failed")
            return f"Error: {exc!r}"
