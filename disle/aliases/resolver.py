"""
Recursive alias expansion.

Aliases live in two namespaces per room: global aliases (upper-case names,
shared by everybody in the room) and user aliases (lower-case names, private
to their owner).  Expanding a line for a user looks each `$name` up in the
user's aliases first and falls back on the global ones.

Checking a global alias definition has no user to resolve against, so
lower-case references are left in place for whoever calls the alias later.

One set of seen names is shared by the whole call, nested and sibling
references alike, which guarantees termination on cyclic definitions.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Set, Tuple

from disle.aliases.assembler import assemble
from disle.aliases.errors import (AliasCycleError, ExpansionError, ParameterRangeError,
                                  UndefinedAliasError)
from disle.aliases.segments import AliasRef, AliasReference, Error, Literal, Segment
from disle.aliases.tokenizer import tokenize

if TYPE_CHECKING:
    from disle.aliases.store import AliasStore

log = logging.getLogger(__name__)

re_param = re.compile(r"%([0-9]+)")


@dataclass
class ExpansionContext:
    room: str
    # None while checking a global alias definition
    user: Optional[str]
    seen: Set[str] = field(default_factory=set)
    expand_args: bool = True


def substitute_parameters(body: str, args: Tuple[str, ...]) -> str:
    """Replace %1, %2... with the arguments of the alias call"""
    def parameter(m: re.Match) -> str:
        index = int(m.group(1))
        if index < 1 or index > len(args):
            raise ParameterRangeError(index, len(args))
        return args[index - 1]

    return re_param.sub(parameter, body)


class Resolver:
    def __init__(self, store: AliasStore):
        self.store = store

    def expand(self, text: str, room: str, user: str, expand_args: bool = True,
               seen: Iterable[str] = ()) -> str:
        """Expand every alias of text for the user, raise ExpansionError on failure"""
        return self._expand(text, ExpansionContext(room, user, set(seen), expand_args))

    def expand_global(self, text: str, room: str, seen: Iterable[str] = ()) -> str:
        """Expand text against the global aliases only, used to validate a global alias body"""
        return self._expand(text, ExpansionContext(room, None, set(seen), expand_args=False))

    def _expand(self, text: str, context: ExpansionContext) -> str:
        segments = tokenize(text)

        syntax_errors = [s.error for s in segments if isinstance(s, Error)]
        if syntax_errors:
            raise ExpansionError(syntax_errors)

        try:
            expanded = self.resolve_segments(segments, context)
        except ParameterRangeError as exc:
            log.debug(f"Expansion of '{text}' aborted: {exc}")
            raise ExpansionError([exc])

        return assemble(expanded)

    def resolve_segments(self, segments: Iterable[Segment], context: ExpansionContext) -> List[Segment]:
        resolved: List[Segment] = []
        for segment in segments:
            if isinstance(segment, AliasRef):
                resolved += self.resolve_reference(segment.reference, context)
            else:
                resolved.append(segment)

        return resolved

    def resolve_reference(self, reference: AliasReference, context: ExpansionContext) -> List[Segment]:
        if context.user is None:
            return self.resolve_global_reference(reference, context)

        name = reference.name
        if name in context.seen:
            return [Error(AliasCycleError(name))]

        context.seen.add(name)

        body = self.store.get_user_alias(context.room, context.user, name)
        if body is None:
            body = self.store.get_global_alias(context.room, name)

        if body is None:
            return [Error(UndefinedAliasError(name))]

        return self.expand_body(body, reference, context)

    def resolve_global_reference(self, reference: AliasReference, context: ExpansionContext) -> List[Segment]:
        if reference.deferred:
            return [Literal(str(reference))]

        # global names are case insensitive, `$Fs` is `$FS`
        name = reference.name.upper()
        if name in context.seen:
            return [Error(AliasCycleError(reference.name))]

        context.seen.add(name)

        body = self.store.get_global_alias(context.room, name)
        if body is None:
            return [Error(UndefinedAliasError(reference.name, global_only=True))]

        return self.expand_body(body, reference, context)

    def expand_body(self, body: str, reference: AliasReference, context: ExpansionContext) -> List[Segment]:
        log.debug(f"Expanding ${reference.name} -> '{body}' args={reference.args}")
        if context.expand_args:
            body = substitute_parameters(body, reference.args)

        return self.resolve_segments(tokenize(body), context)
