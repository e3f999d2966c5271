import pytest

from eulerlayout.abstract import OUTSIDE, az, desc
from eulerlayout.errors import DescriptionError, DescriptionSyntaxError
from eulerlayout.parser import parse_description, tokenize_line


def test_parse_single_line():
    assert parse_description("a b ab") == desc("a b ab")


def test_parse_multiline_with_comments():
    text = """
    a b   # two disjoint curves
    ab    # and their overlap
    """
    assert parse_description(text) == desc("a b ab")


def test_parse_empty_text_yields_outside_only():
    description = parse_description("  # nothing\n")
    assert description.abstract_zones == (OUTSIDE,)


def test_parse_keeps_parent():
    description = parse_description("b", parent=az("a"))
    assert description.parent == az("a")


def test_tokenize_reports_columns():
    assert tokenize_line("a  bc", 3) == [("a", 3, 1), ("bc", 3, 4)]


def test_unexpected_character_reports_position_with_caret():
    with pytest.raises(DescriptionSyntaxError) as excinfo:
        parse_description("a b\nab, c")

    err = excinfo.value
    assert (err.line, err.col) == (2, 3)
    message = str(err)
    assert "[line 2, col 3]" in message
    assert "unexpected character: ','" in message
    assert message.splitlines()[-1] == "      ^"


def test_repeated_label_in_token_is_rejected():
    with pytest.raises(DescriptionSyntaxError, match="repeated"):
        parse_description("a aba")


def test_syntax_error_is_a_description_error():
    with pytest.raises(DescriptionError):
        parse_description("a-b")
