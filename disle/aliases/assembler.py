"""Merge an expanded segment list into the final command text"""
from typing import Iterable, List

from disle.aliases.errors import AliasError, ExpansionError
from disle.aliases.segments import Error, Segment, merge_rank


def assemble(segments: Iterable[Segment]) -> str:
    """
    Concatenate the text of the segments, comments last.

    As soon as one branch of the expansion failed, the partial text is thrown away
    and the errors are raised together: a half substituted command must never be
    handed to the dice roller.
    """
    ordered = sorted(segments, key=merge_rank)

    text = ""
    errors: List[AliasError] = []

    for segment in ordered:
        if isinstance(segment, Error):
            if segment.text:
                errors.append(segment.error)
            continue

        if not errors:
            text += str(segment)

    if errors:
        raise ExpansionError(errors)

    return text
