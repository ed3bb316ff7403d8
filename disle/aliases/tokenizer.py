"""
Split a raw command line into segments.

    "$4|ATK + $bonus : sneak attack"

becomes

    [AliasRef(ATK, args=("4",)), Literal(" + "), AliasRef(bonus), Comment(" : sneak attack")]

An alias token starts at `$` and runs to the next whitespace, `+`, `-`, `*`, `/`
or the end of the line.  Everything from the first `:` on is a comment and is
never scanned for aliases.
"""
import logging
import re
from typing import List

from disle.aliases.errors import AliasSyntaxError
from disle.aliases.segments import AliasRef, AliasReference, Comment, Error, Literal, Segment

log = logging.getLogger(__name__)

ALIAS_CHAR = "$"
COMMENT_CHAR = ":"
ARGUMENT_SEPARATOR = "|"

re_alias_end = re.compile(r"[\s+\-*/]")


def split_comment(text: str) -> (str, str):
    """Return (command, comment), the whitespace before the `:` goes with the comment"""
    idx = text.find(COMMENT_CHAR)
    if idx < 0:
        return text, ""

    command = text[:idx].rstrip()
    return command, text[len(command):]


def parse_alias_token(token: str) -> Segment:
    """Parse the text following a `$` into an alias reference or a syntax error"""
    parts = token.split(ARGUMENT_SEPARATOR)

    if len(parts) > 2:
        return Error(AliasSyntaxError(f"Syntax error in `${token}`: only one `{ARGUMENT_SEPARATOR}` is allowed"))

    if len(parts) == 1:
        if not token:
            return Error(AliasSyntaxError(f"Syntax error: `{ALIAS_CHAR}` must be followed by an alias name"))
        return AliasRef(AliasReference.parse(token))

    arguments, name = parts
    if not arguments:
        return Error(AliasSyntaxError(f"Syntax error in `${token}`: missing parameters before `{ARGUMENT_SEPARATOR}`"))

    if not name:
        return Error(AliasSyntaxError(f"Syntax error in `${token}`: missing alias name after `{ARGUMENT_SEPARATOR}`"))

    return AliasRef(AliasReference.parse(name, tuple(arguments.split(","))))


def tokenize(text: str) -> List[Segment]:
    command, comment = split_comment(text)
    segments: List[Segment] = []

    while (start := command.find(ALIAS_CHAR)) >= 0:
        if start > 0:
            segments.append(Literal(command[:start]))

        m = re_alias_end.search(command, start + 1)
        end = m.start() if m else len(command)

        segments.append(parse_alias_token(command[start + 1:end]))
        command = command[end:]

    if command:
        segments.append(Literal(command))

    if comment:
        segments.append(Comment(comment))

    log.debug(f"Tokenized '{text}' into {segments}")
    return segments
