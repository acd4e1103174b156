import io

import pytest

from desktools.menu import InputLine, Item, cistrstr, match, read_items


def texts(items):
    return [item.text for item in items]


def test_cistrstr_finds_case_insensitive():
    assert cistrstr("Hello World", "world") == 6
    assert cistrstr("abc", "") == 0
    assert cistrstr("abc", "xyz") is None


def test_match_empty_text_keeps_all_in_order():
    items = [Item("b"), Item("a"), Item("c")]
    assert match(items, "") == items


def test_match_orders_exact_prefix_substring():
    items = [Item("xfoo"), Item("foobar"), Item("foo"), Item("bar")]
    assert texts(match(items, "foo")) == ["foo", "foobar", "xfoo"]


def test_match_requires_all_tokens():
    items = [Item("alpha beta"), Item("alpha"), Item("beta alpha gamma")]
    result = texts(match(items, "alpha beta"))
    assert set(result) == {"alpha beta", "beta alpha gamma"}
    assert result[0] == "alpha beta"


def test_match_case_sensitivity():
    items = [Item("Firefox"), Item("fire")]
    assert texts(match(items, "FIRE")) == []
    assert texts(match(items, "FIRE", case_insensitive=True)) == ["fire", "Firefox"]


def test_read_items_strips_newlines():
    items = read_items(io.StringIO("one\ntwo\nthree"))
    assert texts(items) == ["one", "two", "three"]
    assert not any(item.out for item in items)


def test_insert_and_cursor():
    line = InputLine()
    assert line.insert("hello")
    line.move_left()
    line.move_left()
    line.insert("XY")
    assert line.text == "helXYlo"
    assert line.cursor == 5


def test_insert_refuses_overflow():
    line = InputLine(max_bytes=4)
    assert line.insert("abcd")
    assert not line.insert("e")
    assert line.text == "abcd"


def test_backspace_and_delete_at_edges():
    line = InputLine("abc", 0)
    assert not line.backspace()
    assert line.delete()
    assert (line.text, line.cursor) == ("bc", 0)
    line.cursor = len(line.text)
    assert not line.delete()
    assert line.backspace()
    assert line.text == "b"


def test_kill_to_end_and_start():
    line = InputLine("hello world", 5)
    line.kill_to_end()
    assert line.text == "hello"
    line = InputLine("hello world", 6)
    line.kill_to_start()
    assert (line.text, line.cursor) == ("world", 0)


def test_delete_word_removes_word_and_trailing_spaces():
    line = InputLine("foo bar  ", 9)
    line.delete_word()
    assert (line.text, line.cursor) == ("foo ", 4)
    line.delete_word()
    assert (line.text, line.cursor) == ("", 0)


def test_move_word_edge_both_directions():
    line = InputLine("foo bar baz", 11)
    line.move_word_edge(-1)
    assert line.cursor == len("foo bar ")
    line.move_word_edge(-1)
    assert line.cursor == len("foo ")
    line.move_word_edge(+1)
    assert line.cursor == len("foo bar")
    line.move_word_edge(+1)
    assert line.cursor == len(line.text)


def test_move_left_right_bounds():
    line = InputLine("ab", 0)
    assert not line.move_left()
    assert line.move_right()
    assert line.move_right()
    assert not line.move_right()
    assert line.cursor == 2


def test_invalid_cursor_rejected():
    with pytest.raises(ValueError):
        InputLine("ab", 5)


def test_complete_copies_item_text():
    line = InputLine("fo", 2)
    assert line.complete(Item("foobar"))
    assert (line.text, line.cursor) == ("foobar", 6)
    assert not line.complete(None)