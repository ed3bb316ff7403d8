from disle.aliases.errors import AliasSyntaxError
from disle.aliases.segments import AliasRef, AliasReference, Comment, Error, Literal
from disle.aliases.tokenizer import split_comment, tokenize


def ref(name, *args):
    return AliasRef(AliasReference.parse(name, args))


def test_text_without_alias():
    assert tokenize("1d6 + 4d4") == [Literal("1d6 + 4d4")]


def test_only_alias():
    assert tokenize("$alias") == [ref("alias")]


def test_alias_followed_by_text():
    assert tokenize("$fs + 4d4") == [ref("fs"), Literal(" + 4d4")]


def test_aliases_around_text():
    assert tokenize("$fs + 4d4 + $attack") == [ref("fs"), Literal(" + 4d4 + "), ref("attack")]


def test_two_aliases_then_text():
    assert tokenize("$fs + $attack + 4d4") == [ref("fs"), Literal(" + "), ref("attack"), Literal(" + 4d4")]


def test_operator_ends_alias_name():
    assert tokenize("$fs+$attack*2") == [ref("fs"), Literal("+"), ref("attack"), Literal("*2")]


def test_alias_with_arguments():
    segments = tokenize("$4,5|ATK")

    assert segments == [ref("ATK", "4", "5")]
    assert segments[0].reference.args == ("4", "5")
    assert not segments[0].reference.deferred


def test_lower_case_reference_is_deferred():
    assert AliasReference.parse("bonus").deferred
    assert not AliasReference.parse("BONUS").deferred
    assert not AliasReference.parse("Bonus").deferred


def test_reference_renders_back_to_source():
    assert str(AliasReference.parse("ATK", ("4", "5"))) == "$4,5|ATK"
    assert str(AliasReference.parse("bonus")) == "$bonus"


def test_comment_is_not_scanned():
    assert tokenize("$fs : $not scanned") == [ref("fs"), Comment(" : $not scanned")]


def test_comment_keeps_leading_whitespace():
    assert split_comment("1d10   : comm1") == ("1d10", "   : comm1")
    assert split_comment("1d10") == ("1d10", "")
    assert tokenize("1d10 : comm1 : again") == [Literal("1d10"), Comment(" : comm1 : again")]


def test_several_pipes_is_a_syntax_error():
    segments = tokenize("$1|2|ATK")

    assert len(segments) == 1
    assert isinstance(segments[0], Error)
    assert isinstance(segments[0].error, AliasSyntaxError)


def test_missing_parts_around_pipe():
    for text in ("$|ATK", "$4|", "d20 $"):
        errors = [s for s in tokenize(text) if isinstance(s, Error)]
        assert len(errors) == 1, text
        assert isinstance(errors[0].error, AliasSyntaxError)


def test_syntax_error_keeps_surrounding_text():
    assert tokenize("d20 + $1|2|X + 3")[0] == Literal("d20 + ")
    assert tokenize("d20 + $1|2|X + 3")[-1] == Literal(" + 3")
