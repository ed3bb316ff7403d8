"""Errors raised while expanding or defining aliases"""
from typing import Iterable, List


class AliasError(Exception):
    """Base class for alias problems, the message is shown to the user as-is"""


class AliasSyntaxError(AliasError):
    pass


class AliasCycleError(AliasError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"`${name}` was already expanded, we have a cycle definition")


class UndefinedAliasError(AliasError):
    def __init__(self, name: str, global_only: bool = False):
        self.name = name
        self.global_only = global_only
        where = " amongs global aliases" if global_only else ""
        super().__init__(f"`${name}` not found{where}")


class ParameterRangeError(AliasError):
    """A %N placeholder asked for more arguments than the call supplied, aborts the whole expansion"""

    def __init__(self, index: int, supplied: int):
        self.index = index
        self.supplied = supplied
        super().__init__("Parameter reference is above number of parameter")


class ExpansionError(AliasError):
    """All the errors collected by one expansion call"""

    def __init__(self, errors: Iterable[AliasError]):
        self.errors: List[AliasError] = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))


class PersistenceError(Exception):
    pass
