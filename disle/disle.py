"""Disle application and command line entrypoint"""
import signal
import sys
from typing import Callable, Optional

import click
from rich.console import Console
from rich.text import Text
from serum import Context, inject

from disle.aliases.errors import ExpansionError
from disle.config import Config
from disle.logger import DisleLogger
from disle.plugins.commands import Invocation
from disle.plugins.director import Director
from disle.plugins.loader import PluginLoader
from disle.utils.renderables import AliasPanel, OutputColors


@inject
class Disle:
    """Alias tables, persistence and command plugins wired together"""
    config: Config

    def __init__(self, roller: Optional[Callable[[str], str]] = None):
        self.logger = DisleLogger("global", self.config)

        with Context(config=self.config):
            self.director = Director(roller=roller)

        modules = self.config.get_specific_option("global", "modules") or []
        if isinstance(modules, str):
            modules = [modules]

        self.plugin_loader = PluginLoader()
        self.plugin_loader.load_plugins(["disle.plugins"] + [str(m) for m in modules],
                                        plugin_context={"config": self.config, "director": self.director})

        num_failed = len(self.plugin_loader.get_failed_modules())
        if num_failed:
            s = 's' if num_failed > 1 else ''
            self.logger.error(f"{num_failed} plugin module{s} failed to load")

    def handle(self, line: str, invocation: Invocation) -> str:
        """Reply to a line of input, lines that aren't commands are rolls"""
        reply = self.director.handle(line, invocation)
        if reply is None:
            command_char = self.director.command_manager.command_char
            reply = self.director.handle(f"{command_char}roll {line}", invocation)
        return reply

    def shutdown(self) -> None:
        self.logger.info("Shutting down, saving every room")
        self.director.save_all()


def _terminate(signum, frame):
    sys.exit(0)


@click.group()
@click.option("-c", "--config", "config")
@click.option("-r", "--room", "room", default="local", show_default=True)
@click.option("-u", "--user", "user", default="local", show_default=True)
@click.option("-n", "--name", "name", default="")
@click.option("-s", "--super", "super_user", is_flag=True, default=False)
@click.pass_context
def main(ctx, config, room, user, name, super_user):
    """Expand dice roll aliases"""
    _config = Config(config=config)

    with Context(config=_config):
        app = Disle()

    ctx.obj = (app, Invocation(room=room, user=user, user_name=name, is_super_user=super_user))


@main.command()
@click.pass_obj
def shell(obj):
    """Read commands and rolls from standard input, save every room on exit"""
    app, invocation = obj
    previous = signal.signal(signal.SIGTERM, _terminate)

    try:
        for line in click.get_text_stream("stdin"):
            line = line.rstrip("\n")
            if not line.strip():
                continue
            click.echo(app.handle(line, invocation))
    except KeyboardInterrupt:
        pass
    finally:
        signal.signal(signal.SIGTERM, previous)
        app.shutdown()


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--no-args", "no_args", is_flag=True, default=False, help="Leave %N parameters in place")
@click.pass_context
def expand(ctx, text, no_args):
    """Print the expansion of TEXT"""
    app, invocation = ctx.obj
    try:
        click.echo(app.director.expand(" ".join(text), invocation, expand_args=not no_args))
    except ExpansionError as exc:
        Console(stderr=True).print(Text(str(exc), style=OutputColors.error))
        ctx.exit(1)


@main.command(name="list")
@click.pass_obj
def list_aliases(obj):
    """Show the aliases of the room"""
    app, invocation = obj
    app.director.ensure_room_loaded(invocation.room)
    data = app.director.store.snapshot(invocation.room)

    user_aliases = sorted(data.users_aliases.get(invocation.user, {}).items()) if data else []
    global_aliases = sorted(data.global_aliases.items()) if data else []

    console = Console()
    console.print(AliasPanel(user_aliases, title=f"{invocation.display_name}'s aliases"))
    console.print(AliasPanel(global_aliases, title="Global aliases"))


if getattr(sys, 'frozen', False):
    main(sys.argv[1:])
