"""
Segments are the classified chunks of a command line.

A tokenized line is a list made of Literal, AliasRef, Comment and Error
segments.  Expansion replaces every AliasRef with the segments of the alias
body, so a fully expanded line only holds Literal, Comment and Error segments.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from disle.aliases.errors import AliasError


@dataclass(frozen=True)
class AliasReference:
    name: str
    args: Tuple[str, ...] = ()
    # lower-case names belong to the calling user's namespace, a global alias
    # definition leaves them alone until a user expands it
    deferred: bool = False

    @classmethod
    def parse(cls, name: str, args: Tuple[str, ...] = ()) -> "AliasReference":
        return cls(name=name, args=tuple(args), deferred=name.islower())

    def __str__(self) -> str:
        if self.args:
            return f"${','.join(self.args)}|{self.name}"
        return f"${self.name}"


@dataclass(frozen=True)
class Literal:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AliasRef:
    reference: AliasReference

    def __str__(self) -> str:
        return str(self.reference)


@dataclass(frozen=True)
class Comment:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Error:
    error: AliasError

    @property
    def text(self) -> str:
        return str(self.error)

    def __str__(self) -> str:
        return self.text


Segment = Union[Literal, AliasRef, Comment, Error]

TEXT_RANK = 0
COMMENT_RANK = 1
ERROR_RANK = 2


def merge_rank(segment: Segment) -> int:
    """Ordinal used to move comments after the text and errors after everything else"""
    if isinstance(segment, Error):
        return ERROR_RANK
    if isinstance(segment, Comment):
        return COMMENT_RANK
    return TEXT_RANK
