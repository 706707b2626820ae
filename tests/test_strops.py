import pytest

from confprobe.settings import MAX_SUBSTR
from confprobe.strops import (
    count_char,
    cut_by_label,
    int_to_str,
    last_index,
    remove_char,
    remove_digits,
    replace_char,
    str_to_int,
    strip_leading_blanks,
    unquote_literal,
)


def test_remove_char_example():
    assert remove_char("1 2 3", " ") == "123"


def test_remove_digits_example():
    assert remove_digits("1a 2b 3c") == "a b c"


def test_strip_leading_blanks_example():
    assert strip_leading_blanks("  str") == "str"


def test_strip_leading_blanks_keeps_inner_and_trailing():
    body = "a b  \t"
    assert strip_leading_blanks(" \t " + body) == body


def test_count_char_matches_pieces():
    parts = ["x"] * 5
    text = ":".join(parts)
    assert count_char(text, ":") == len(parts) - 1


def test_cut_by_label_example():
    assert cut_by_label("str1:str2:str3", ":", 3) == ["str1", "str2", "str3"]


def test_cut_by_label_limit_keeps_rest_in_last_piece():
    head, tail = "key ", " value = x"
    assert cut_by_label(head + "=" + tail, "=", 2) == [head, tail]


def test_cut_by_label_skips_consecutive_separators():
    parts = ["a", "b"]
    text = "::" + "::".join(parts)
    assert cut_by_label(text, ":", 5) == parts


def test_cut_by_label_trailing_separator_gives_empty_last():
    pieces = cut_by_label("a:", ":", 4)
    assert pieces[0] == "a"
    assert pieces[-1] == ""
    assert len(pieces) == 2


def test_cut_by_label_without_separator_returns_whole():
    text = "no separator here"
    assert cut_by_label(text, ":", 3) == [text]


def test_cut_by_label_limit_one_returns_whole():
    text = "a:b:c"
    assert cut_by_label(text, ":", 1) == [text]


def test_cut_by_label_clips_long_pieces():
    long_piece = "x" * (MAX_SUBSTR + 10)
    exact = "y" * MAX_SUBSTR
    pieces = cut_by_label(long_piece + ":" + exact + ":" + long_piece, ":", 5)
    assert len(pieces[0]) == MAX_SUBSTR - 1
    assert pieces[1] == exact
    assert len(pieces[2]) == MAX_SUBSTR - 1


def test_cut_by_label_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        cut_by_label("a:b", ":", 0)


def test_int_to_str_example():
    assert int_to_str(12) == "12"


@pytest.mark.parametrize("num", [0, 7, 10, 99, 1024, 987654])
def test_int_str_round_trip(num):
    assert str_to_int(int_to_str(num)) == num


def test_int_to_str_rejects_negative():
    with pytest.raises(ValueError):
        int_to_str(-3)


def test_str_to_int_example_and_ignores_non_digits():
    assert str_to_int("12") == 12
    assert str_to_int(" 1 2\n") == str_to_int("12")


def test_str_to_int_without_digits_is_zero():
    assert str_to_int("abc") == 0


def test_last_index_points_at_last_occurrence():
    text = "a/b/c/prog"
    idx = last_index(text, "/")
    assert text[idx] == "/"
    assert "/" not in text[idx + 1 :]


def test_last_index_missing():
    assert last_index("prog", "/") == -1


def test_unquote_literal_example():
    assert unquote_literal('"maxmemory"') == "maxmemory"


def test_unquote_literal_rejects_short_input():
    with pytest.raises(ValueError):
        unquote_literal('"')


def test_replace_char_invariants():
    text = "dir/sub/file.c"
    new, count = replace_char(text, "/", "_")
    assert "/" not in new
    assert count == count_char(text, "/")
    assert remove_char(new, "_") == remove_char(text, "/")
    assert len(new) == len(text)