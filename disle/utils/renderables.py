from dataclasses import dataclass
from typing import Iterable, Tuple

from rich import box
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text


@dataclass
class OutputColors:
    panel: str = "#334455"
    title: str = "cyan"
    name: str = "bold white"
    body: str = "white"
    border: str = "#DDEEFF"
    empty: str = "gray50"
    error: str = "bold red"


class AliasTable(Table):
    """Two column table of `$name` and alias body"""

    def __init__(self, aliases: Iterable[Tuple[str, str]], **kwargs):
        kwargs.setdefault("header_style", OutputColors.name)
        kwargs.setdefault("border_style", OutputColors.border)
        kwargs.setdefault("style", OutputColors.body)
        kwargs.setdefault("box", box.HORIZONTALS)
        super().__init__(**kwargs)

        self.add_column("Alias", style=OutputColors.name, no_wrap=True)
        self.add_column("Command", overflow="fold")

        for name, body in aliases:
            # bodies hold `[` and `*`, never interpret them as markup
            self.add_row(Text(f"${name}"), Text(body))


class AliasPanel(Panel):
    def __init__(self, aliases: Iterable[Tuple[str, str]], title: str, **kwargs):
        aliases = list(aliases)
        if aliases:
            renderable = AliasTable(aliases)
        else:
            renderable = Text("No aliases defined", style=OutputColors.empty)

        kwargs.setdefault("expand", False)
        kwargs.setdefault("style", Style(bgcolor=OutputColors.panel))
        kwargs.setdefault("box", box.ROUNDED)
        kwargs.setdefault("title_align", "left")
        super().__init__(renderable, title=Text(title, style=OutputColors.title), **kwargs)
