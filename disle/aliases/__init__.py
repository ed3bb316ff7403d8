"""
Aliases let players pre-script their rolls and call them by name.

Functionality includes:
    $NAME                 a global alias, shared by the room
    $name                 a user alias, private to its owner
    $arg1,arg2|NAME       an alias called with arguments
    %<number>             replaced, in an alias body, with the numbered argument
    : text                a comment, kept after the expanded roll
"""
from disle.aliases.errors import (AliasError, AliasSyntaxError, AliasCycleError, UndefinedAliasError,
                                  ParameterRangeError, ExpansionError, PersistenceError)
from disle.aliases.store import AliasStore, RoomAliasData
from disle.aliases.persistence import AliasPersistence
