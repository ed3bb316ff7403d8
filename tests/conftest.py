from __future__ import annotations

import pytest
from serum import Context

from disle.aliases.store import AliasStore
from disle.config import Config
from disle.disle import Disle
from disle.plugins.commands import Invocation

ROOM = "0"
USER = "1"


@pytest.fixture
def store() -> AliasStore:
    store = AliasStore()
    data = store.room(ROOM)
    data.users_aliases[USER] = {
        "alias1": "1d10",
        "alias2": "$GALIAS1 + 1d6",
        "alias_call_self": "$alias_call_self + 1d6",
        "alias_call_alias_that_call_self": "$alias_call_self + 1d6",
        "cycle_alias1": "$cycle_alias2 + 1d6",
        "cycle_alias2": "$cycle_alias3 + 1d10",
        "cycle_alias3": "$cycle_alias1 + 1d8",
    }
    data.global_aliases["GALIAS1"] = "1d4"
    return store


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "dislerc"
    path.write_text(f'[global]\ndata_directory = "{(tmp_path / "rooms").as_posix()}"\n', encoding="UTF-8")
    return path


@pytest.fixture
def config(config_file) -> Config:
    return Config(config=str(config_file))


@pytest.fixture
def app(config) -> Disle:
    with Context(config=config):
        return Disle()


@pytest.fixture
def admin() -> Invocation:
    return Invocation(room="R", user="10", user_name="Admin", is_super_user=True)


@pytest.fixture
def player() -> Invocation:
    return Invocation(room="R", user="42", user_name="Toto")
