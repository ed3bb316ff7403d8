from disle.aliases.store import AliasStore, RoomAliasData, canonical_name
from tests.conftest import ROOM, USER


def test_canonical_name():
    assert canonical_name(" $fs ") == "fs"
    assert canonical_name("$") == ""


def test_set_global_alias():
    store = AliasStore()

    assert store.set_global_alias("$fs", "d6! - d6!", "R") == "Global alias `$FS` set"
    assert store.get_global_alias("R", "FS") == "d6! - d6!"
    assert store.get_global_alias("R", "fs") == "d6! - d6!"


def test_empty_alias_name():
    store = AliasStore()

    assert store.set_global_alias("$", "1d6", "R") == "Alias name can't be empty"
    assert store.set_user_alias(" ", "1d6", "R", "U") == "Alias name can't be empty"
    assert store.rooms == {}


def test_rejected_global_alias_leaves_store_unchanged():
    store = AliasStore()

    assert store.set_global_alias("BAD", "$UNDEFINED + 1", "R") == "`$UNDEFINED` not found amongs global aliases"
    assert store.get_global_alias("R", "BAD") is None
    assert "R" not in store.rooms


def test_global_alias_referencing_itself():
    store = AliasStore()

    assert store.set_global_alias("A", "$A + 1", "R") == "`$A` was already expanded, we have a cycle definition"
    assert store.get_global_alias("R", "A") is None


def test_redefinition_creating_a_cycle_is_rejected():
    store = AliasStore()
    store.set_global_alias("A", "1", "R")
    store.set_global_alias("B", "$A", "R")

    assert store.set_global_alias("A", "$C + $B", "R") == "`$B` was already expanded, we have a cycle definition"
    assert store.get_global_alias("R", "A") == "1"


def test_global_alias_with_arguments_is_not_substituted_on_definition():
    store = AliasStore()
    store.set_global_alias("ATK", "%1d6! + %1", "R")

    assert store.set_global_alias("BIG", "$ATK * 2", "R") == "Global alias `$BIG` set"


def test_set_user_alias():
    store = AliasStore()

    assert store.set_user_alias("Bonus", "+4", "R", "U", "Toto") == "Alias `$bonus` set for user Toto"
    assert store.get_user_alias("R", "U", "bonus") == "+4"
    assert store.set_user_alias("other", "+1", "R", "U") == "Alias `$other` set for user U"


def test_user_alias_chain(store):
    store.set_global_alias("ATT", "d20", ROOM)
    store.set_user_alias("bonus_att", "+4", ROOM, USER)
    store.set_user_alias("att", "$ATT $bonus_att", ROOM, USER)

    assert store.expand("$att", ROOM, USER) == "d20 +4"


def test_changing_a_global_alias_changes_its_callers(store):
    store.set_global_alias("GALIAS1", "4", ROOM)

    assert store.expand("$alias2", ROOM, USER) == "4 + 1d6"


def test_rejected_user_alias():
    store = AliasStore()

    assert store.set_user_alias("x", "$nothere", "R", "U") == "`$nothere` not found"
    assert store.get_user_alias("R", "U", "x") is None


def test_user_alias_may_call_parametrized_alias():
    store = AliasStore()
    store.set_global_alias("ATK", "%1d6", "R")

    assert store.set_user_alias("x", "$ATK", "R", "U") == "Alias `$x` set for user U"


def test_reserved_name_warning():
    store = AliasStore()

    msg = store.set_user_alias("ova", "1d6", "R", "U")

    assert msg.startswith("Alias `$ova` set for user U\nWarning: `ova` is also a roll command")
    assert "`ova(5)`, not `ova (5)`" in msg
    assert "Warning" not in AliasStore(reserved_names=()).set_user_alias("ova", "1d6", "R", "U")


def test_delete_user_alias(store):
    assert store.del_user_alias("$alias1", ROOM, USER) == "Alias `$alias1` deleted"
    assert store.get_user_alias(ROOM, USER, "alias1") is None
    assert store.del_user_alias("alias1", ROOM, USER) == "Alias to delete not found"
    assert store.del_user_alias("alias1", ROOM, "someone") == "Alias to delete not found"


def test_delete_global_alias(store):
    assert store.del_global_alias("galias1", ROOM) == "Global alias `$GALIAS1` deleted"
    assert store.get_global_alias(ROOM, "GALIAS1") is None
    assert store.del_global_alias("galias1", ROOM) == "Global alias `$GALIAS1` deleted"


def test_clear_user_aliases(store):
    msg = store.clear_user_aliases(ROOM, USER)

    assert msg.startswith("All your aliases have been deleted.")
    assert "`load`" in msg
    assert store.list_aliases(ROOM, USER) == ([], ["`GALIAS1` = `1d4`"])


def test_clear_global_aliases(store):
    assert store.clear_global_aliases(ROOM).startswith("Aliases cleared.")
    assert store.get_global_alias(ROOM, "GALIAS1") is None
    assert store.get_user_alias(ROOM, USER, "alias1") == "1d10"


def test_list_aliases(store):
    user_aliases, global_aliases = store.list_aliases(ROOM, USER)

    assert user_aliases[0] == "`alias1` = `1d10`"
    assert user_aliases == sorted(user_aliases)
    assert len(user_aliases) == 7
    assert global_aliases == ["`GALIAS1` = `1d4`"]


def test_list_aliases_of_unknown_room():
    store = AliasStore()

    assert store.list_aliases("R", "U") == ([], [])
    assert store.rooms == {}


def test_allowed_users():
    store = AliasStore()

    assert store.allow_user("42", "R") == "42 has been allowed to manage global aliases"
    store.allow_user(7, "R")

    assert store.list_allowed_users("R") == ["42", "7"]
    assert store.is_allowed("42", "R")
    assert store.is_allowed(7, "R")
    assert not store.is_allowed("42", "other room")

    assert store.disallow_user("42", "R") == "42 has been forbidden to manage global aliases"
    assert not store.is_allowed("42", "R")

    assert store.clear_users("R").startswith("Users cleared.")
    assert store.list_allowed_users("R") == []


def test_snapshot_is_a_copy(store):
    snapshot = store.snapshot(ROOM)
    snapshot.global_aliases["NEW"] = "1"

    assert store.get_global_alias(ROOM, "NEW") is None
    assert store.snapshot("unknown") is None


def test_replace_room():
    store = AliasStore()
    store.replace_room("R", RoomAliasData(global_aliases={"FS": "d6"}))

    assert store.known_rooms() == ["R"]
    assert store.expand("$FS", "R", "U") == "d6"


def test_ids_are_strings():
    store = AliasStore()
    store.set_user_alias("bonus", "+4", 12, 34)

    assert store.expand("$bonus", "12", "34") == "+4"
    assert store.known_rooms() == ["12"]


def test_global_alias_referencing_itself_in_other_case():
    store = AliasStore()
    store.set_global_alias("FS", "d6", "R")

    assert store.set_global_alias("FS", "$Fs + 1", "R") == "`$Fs` was already expanded, we have a cycle definition"
    assert store.get_global_alias("R", "FS") == "d6"
    assert store.expand("$FS", "R", "U") == "d6"


def test_global_cycle_through_another_alias_in_other_case():
    store = AliasStore()
    store.set_global_alias("ATK", "1d20", "R")
    store.set_global_alias("HIT", "$Atk + 2", "R")

    assert store.set_global_alias("ATK", "$HIT", "R") == "`$Atk` was already expanded, we have a cycle definition"
    assert store.expand("$HIT", "R", "U") == "1d20 + 2"
