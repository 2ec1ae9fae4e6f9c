import pytest

from optline.exceptions import OptionDefinitionError
from optline.parser import (
    AliasMatcher,
    Cursor,
    CustomMatcher,
    ParseContext,
    PositionalMatcher,
    Priority,
)
from optline.parser.matchers import as_matcher, normalize_alias, split_declaration


def match(matcher, *tokens, cursor=Cursor(0)):
    ctx = ParseContext(tokens=tuple(tokens), cursor=cursor)
    return matcher.match(ctx), ctx.cursor


@pytest.fixture
def train_file():
    return AliasMatcher.from_declaration("-t|--train-file")


def test_priority_order():
    assert Priority.NONE < Priority.SINGLE < Priority.POSITION < Priority.PREFIX < Priority.EXACT


def test_split_declaration():
    assert split_declaration("t|train-file") == ["-t", "--train-file"]
    assert split_declaration("-a, --opta") == ["-a", "--opta"]
    assert split_declaration("input-file") == ["--input-file"]


@pytest.mark.parametrize("alias", ["", "-", "--", "--a=b"])
def test_normalize_alias_rejects(alias):
    with pytest.raises(OptionDefinitionError):
        normalize_alias(alias)


def test_exact(train_file):
    assert match(train_file, "-t", "x") == (Priority.EXACT, Cursor(1))
    assert match(train_file, "--train-file", "x") == (Priority.EXACT, Cursor(1))


def test_prefix(train_file):
    assert match(train_file, "--train", "x") == (Priority.PREFIX, Cursor(1))


def test_single_letter_with_attached_value(train_file):
    assert match(train_file, "-tX") == (Priority.SINGLE, Cursor(0, 2))


def test_attached_value_after_equals(train_file):
    assert match(train_file, "--train-file=a.log") == (Priority.EXACT, Cursor(0, 13))
    assert match(train_file, "--tr=a.log") == (Priority.PREFIX, Cursor(0, 5))


def test_case_sensitive(train_file):
    assert match(train_file, "-T") == (Priority.NONE, Cursor(0))
    assert match(train_file, "--TRAIN") == (Priority.NONE, Cursor(0))


def test_no_match_leaves_cursor(train_file):
    assert match(train_file, "--input") == (Priority.NONE, Cursor(0))
    assert match(train_file, "train.log") == (Priority.NONE, Cursor(0))
    assert match(train_file) == (Priority.NONE, Cursor(0))


def test_aliases_match_only_in_declared_dash_form():
    opta = AliasMatcher.from_declaration("a|opta")
    assert match(opta, "-a", "x") == (Priority.EXACT, Cursor(1))
    assert match(opta, "--opta", "x") == (Priority.EXACT, Cursor(1))
    assert match(opta, "--a", "x") == (Priority.NONE, Cursor(0))
    assert match(opta, "-opta", "x") == (Priority.NONE, Cursor(0))


def test_no_match_in_middle_of_token(train_file):
    assert match(train_file, "-c-t", cursor=Cursor(0, 2)) == (Priority.NONE, Cursor(0, 2))


def test_resolve():
    matcher = AliasMatcher(["--verbose", "--no-verbose"])
    assert matcher.resolve("--no-v") == "--no-verbose"
    assert matcher.resolve("--verbose") == "--verbose"
    assert matcher.resolve("--x") is None


def test_label(train_file):
    assert train_file.label == "-t, --train-file"


def test_positional():
    matcher = PositionalMatcher()
    assert match(matcher, "file.txt") == (Priority.POSITION, Cursor(0))
    assert match(matcher, "--file") == (Priority.NONE, Cursor(0))
    assert match(matcher) == (Priority.NONE, Cursor(0))


def test_custom_matcher_may_move_cursor():
    def plus(ctx):
        if ctx.current_token() == "+":
            ctx.cursor = ctx.cursor.next_token()
            return Priority.EXACT
        return None

    matcher = CustomMatcher(plus)
    assert match(matcher, "+") == (Priority.EXACT, Cursor(1))
    assert match(matcher, "-") == (Priority.NONE, Cursor(0))
    assert matcher.label == "plus"


def test_as_matcher():
    positional = PositionalMatcher()
    assert as_matcher(positional) is positional
    assert isinstance(as_matcher("-x"), AliasMatcher)
    assert isinstance(as_matcher(lambda ctx: 0), CustomMatcher)
    with pytest.raises(OptionDefinitionError):
        as_matcher(42)
