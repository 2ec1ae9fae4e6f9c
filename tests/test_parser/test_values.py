import pytest

from optline.exceptions import ValueCheckError
from optline.parser import Cursor, ParseContext
from optline.parser.values import (
    boolean,
    eq,
    float_,
    inline,
    integer,
    is_option,
    ne,
    non_option,
    optional,
    regex,
    strip_dashes,
    value,
    value_append,
    value_extend,
    value_many,
    value_times,
)

HASH = "d0c820728b04b407627109ce50ebae95"


def context(*tokens, cursor=Cursor(0)):
    return ParseContext(tokens=tuple(tokens), cursor=cursor)


def test_value_without_checks():
    ctx = context(HASH)
    assert value(ctx) == HASH
    assert ctx.cursor == Cursor(1)


def test_value_is_option_rejects_plain_word():
    ctx = context(HASH)
    with pytest.raises(ValueCheckError) as error:
        value(ctx, is_option())
    assert error.value.detail.startswith("check failed is-option")
    assert ctx.cursor == Cursor(0)


def test_value_strip_dashes():
    ctx = context(f"--{HASH}")
    assert value(ctx, strip_dashes()) == HASH


def test_value_run_out_of_input():
    ctx = context()
    with pytest.raises(ValueCheckError, match="run out of input"):
        value(ctx)


def test_value_optional_default_keeps_cursor():
    ctx = context()
    assert value(ctx, optional("a")) == "a"
    assert ctx.cursor == Cursor(0)


def test_value_optional_consumes_present_token():
    ctx = context("b")
    assert value(ctx, optional("a")) == "b"
    assert ctx.cursor == Cursor(1)


def test_value_reads_rest_of_token():
    ctx = context("-c0", "next", cursor=Cursor(0, 2))
    assert value(ctx) == "0"
    assert ctx.cursor == Cursor(1)


def test_inline_never_reads_next_token():
    ctx = context("--vb", "next", cursor=Cursor(1))
    assert value(ctx, inline(), optional("1")) == "1"
    assert ctx.cursor == Cursor(1)

    ctx = context("--vb=0", cursor=Cursor(0, 5))
    assert value(ctx, inline(), optional("1")) == "0"
    assert ctx.cursor == Cursor(1)


def test_checks_fold_in_order():
    ctx = context("42")
    assert value(ctx, integer(), int, lambda number: number * 2) == 84


def test_plain_callable_failure_is_check_failure():
    ctx = context("abc")
    with pytest.raises(ValueCheckError):
        value(ctx, int)
    assert ctx.cursor == Cursor(0)


@pytest.mark.parametrize("text", ["13", "-13", "+0"])
def test_integer_accepts(text):
    assert value(context(text), integer()) == text


@pytest.mark.parametrize("text", ["129set-vi", "1.5", ""])
def test_integer_rejects(text):
    with pytest.raises(ValueCheckError):
        value(context(text), integer())


@pytest.mark.parametrize("text", ["3.14", ".5", "-2", "1e10", "6.02E+23"])
def test_float_accepts(text):
    assert value(context(text), float_()) == text


@pytest.mark.parametrize("text", ["139a", "1.", "e5"])
def test_float_rejects(text):
    with pytest.raises(ValueCheckError):
        value(context(text), float_())


@pytest.mark.parametrize(
    "text, expected",
    [("t", "1"), ("true", "1"), ("TRUE", "1"), ("1", "1"), ("f", "0"), ("False", "0"), ("0", "0")],
)
def test_boolean(text, expected):
    assert value(context(text), boolean()) == expected


def test_boolean_rejects():
    with pytest.raises(ValueCheckError):
        value(context("yes"), boolean())


def test_eq_and_ne():
    assert value(context("a"), eq("a")) == "a"
    with pytest.raises(ValueCheckError):
        value(context("a"), ne("a"))


def test_regex_group():
    ctx = context("--name=value")
    assert value(ctx, regex(r"^--(\w+)=", 1)) == "name"


def test_non_option_in_middle_of_token():
    ctx = context("-c-1", cursor=Cursor(0, 2))
    assert value(ctx, non_option()) == "-1"


def test_value_many_stops_at_first_rejection():
    ctx = context("12", "34", "ab", "56")
    assert value_many(ctx, regex("^[0-9]+$")) == ["12", "34"]
    assert ctx.cursor == Cursor(2)


def test_value_many_may_collect_nothing():
    ctx = context("-10", "11")
    assert value_many(ctx, regex("^[0-9]+$")) == []
    assert ctx.cursor == Cursor(0)


def test_value_times_minimum_restores_cursor():
    ctx = context("1", "x")
    with pytest.raises(ValueCheckError, match="expected at least 2 values, got 1"):
        value_times(ctx, 2, None, integer())
    assert ctx.cursor == Cursor(0)


def test_value_times_maximum():
    ctx = context("1", "2", "3")
    assert value_times(ctx, 1, 2, integer()) == ["1", "2"]
    assert ctx.cursor == Cursor(2)


def test_value_times_stops_when_cursor_does_not_move():
    ctx = context()
    assert value_times(ctx, 0, None, optional("x")) == ["x"]


def test_value_times_custom_consumer():
    ctx = context("a", "b", "c")

    def pair(inner):
        return value(inner) + value(inner)

    assert value_times(ctx, 1, None, consume=pair) == ["ab"]
    assert ctx.cursor == Cursor(2)


def test_value_append_and_extend():
    ctx = context("a", "1", "2", "x")
    value_append(ctx, "items")
    value_extend(ctx, "items", integer(), int)
    assert ctx.bindings.get("items") == ["a", 1, 2]
    assert ctx.cursor == Cursor(3)
