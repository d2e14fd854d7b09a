import re

import pytest

from folio.buffer import Buffer


def test_empty_buffer_has_one_line():
    buf = Buffer([])
    assert buf.lines == [""]
    assert buf.cursor == (0, 0)


def test_movement_clamps_at_edges():
    buf = Buffer(["ab", "c"])
    buf.move_cursor("back")
    buf.move_cursor("up")
    assert buf.cursor == (0, 0)
    for _ in range(10):
        buf.move_cursor("forward")
    assert buf.cursor == (1, 1)
    buf.move_cursor("down")
    assert buf.cursor == (1, 1)


def test_forward_and_back_cross_lines():
    buf = Buffer(["ab", "cd"])
    buf.move_cursor("end")
    buf.move_cursor("forward")
    assert buf.cursor == (1, 0)
    buf.move_cursor("back")
    assert buf.cursor == (0, 2)


def test_vertical_move_clamps_column():
    buf = Buffer(["a long line", "short"])
    buf.move_cursor("end")
    buf.move_cursor("down")
    assert buf.cursor == (1, 5)


def test_unknown_movement_is_rejected():
    with pytest.raises(ValueError):
        Buffer(["x"]).move_cursor("sideways")


def test_word_movement():
    buf = Buffer(["hello world, foo", "next"])
    buf.move_cursor("word_forward")
    assert buf.cursor == (0, 6)
    buf.move_cursor("word_forward")
    assert buf.cursor == (0, 13)
    buf.move_cursor("word_forward")
    assert buf.cursor == (0, 16)
    buf.move_cursor("word_forward")
    assert buf.cursor == (1, 0)
    buf.move_cursor("word_back")
    assert buf.cursor == (0, 13)
    buf.move_cursor("word_back")
    assert buf.cursor == (0, 6)


def test_paragraph_movement():
    buf = Buffer(["one", "one b", "", "", "two", "two b", "", "three"])
    buf.move_cursor("paragraph_forward")
    assert buf.cursor == (4, 0)
    buf.move_cursor("paragraph_forward")
    assert buf.cursor == (7, 0)
    buf.move_cursor("paragraph_forward")
    assert buf.cursor == (7, 0)
    buf.move_cursor("paragraph_back")
    assert buf.cursor == (4, 0)
    buf.cursor_line = 5
    buf.move_cursor("paragraph_back")
    assert buf.cursor == (4, 0)
    buf.move_cursor("paragraph_back")
    assert buf.cursor == (0, 0)


def test_selection_range_is_in_document_order():
    buf = Buffer(["abcdef"])
    buf.cursor_col = 4
    buf.start_selection()
    buf.move_cursor("head")
    assert buf.selection_range() == ((0, 0), (0, 4))
    buf.cancel_selection()
    assert buf.selection_range() is None


def test_cut_undo_redo():
    buf = Buffer(["hello world foo", "bar"])
    buf.start_selection()
    buf.move_cursor("word_forward")
    buf.move_cursor("word_forward")
    assert buf.cut_selection() == "hello world "
    assert buf.lines == ["foo", "bar"]
    assert len(buf.undo_stack) == 1
    assert buf.selection_range() is None
    assert buf.yank == "hello world "

    assert buf.undo()
    assert buf.lines == ["hello world foo", "bar"]
    assert buf.redo()
    assert buf.lines == ["foo", "bar"]


def test_cut_across_lines():
    buf = Buffer(["abc", "def", "ghi"])
    buf.cursor_col = 1
    buf.start_selection()
    buf.move_cursor("down")
    buf.move_cursor("down")
    buf.cut_selection()
    assert buf.lines == ["ahi"]
    buf.undo()
    assert buf.lines == ["abc", "def", "ghi"]
    assert buf.cursor == (2, 1)


def test_empty_cut_records_nothing():
    buf = Buffer(["abc"])
    buf.start_selection()
    assert buf.cut_selection() == ""
    assert buf.undo_stack == []


def test_new_edit_clears_redo():
    buf = Buffer(["x"])
    buf.insert_text("a")
    buf.undo()
    assert len(buf.redo_stack) == 1
    buf.insert_text("b")
    assert buf.redo_stack == []
    assert buf.lines == ["bx"]


def test_undo_redo_on_empty_stacks_are_noops():
    buf = Buffer(["x"])
    assert not buf.undo()
    assert not buf.redo()
    assert buf.lines == ["x"]


def test_insert_text_with_newlines():
    buf = Buffer(["headtail"])
    buf.cursor_col = 4
    buf.insert_text("A\nB\nC")
    assert buf.lines == ["headA", "B", "Ctail"]
    assert buf.cursor == (2, 1)
    buf.undo()
    assert buf.lines == ["headtail"]
    assert buf.cursor == (0, 4)


def test_raw_input_keys():
    buf = Buffer([""])
    for key in ["a", "b", "enter", "c", "backspace", "backspace", "left", "delete"]:
        buf.input(key)
    assert buf.lines == ["a"]
    assert len(buf.undo_stack) == 7
    assert not buf.input("f5")


def test_delete_at_buffer_edges_does_nothing():
    buf = Buffer(["ab"])
    buf.delete_back()
    buf.move_cursor("end")
    buf.delete_forward()
    assert buf.lines == ["ab"]
    assert buf.undo_stack == []


def test_paste_inserts_last_cut():
    buf = Buffer(["one two"])
    buf.start_selection()
    buf.move_cursor("word_forward")
    buf.cut_selection()
    buf.move_cursor("end")
    buf.input("ctrl+y")
    assert buf.lines == ["twoone "]


def test_search_forward_does_not_wrap():
    buf = Buffer(["page 1", "text", "page 2"], pattern=re.compile("page"))
    assert buf.search_forward()
    assert buf.cursor == (2, 0)
    assert not buf.search_forward()
    assert buf.cursor == (2, 0)


def test_search_backward_does_not_wrap():
    buf = Buffer(["page 1", "a page", "text"], pattern=re.compile("page"))
    buf.cursor_line = 2
    assert buf.search_backward()
    assert buf.cursor == (1, 2)
    assert buf.search_backward()
    assert buf.cursor == (0, 0)
    assert not buf.search_backward()
    assert buf.cursor == (0, 0)


def test_search_within_line_is_strictly_after_cursor():
    buf = Buffer(["ab ab ab"], pattern=re.compile("ab"))
    buf.search_forward()
    assert buf.cursor == (0, 3)
    buf.search_forward()
    assert buf.cursor == (0, 6)


def test_search_finds_overlapping_matches():
    buf = Buffer(["aaa"], pattern=re.compile("aa"))
    assert buf.search_forward()
    assert buf.cursor == (0, 1)
    buf.cursor_col = 3
    assert buf.search_backward()
    assert buf.cursor == (0, 1)
    assert buf.search_backward()
    assert buf.cursor == (0, 0)


def test_search_stops_inside_a_token():
    buf = Buffer(["123 x"], pattern=re.compile(r"\d+"))
    assert buf.search_forward()
    assert buf.cursor == (0, 1)
    assert buf.search_forward()
    assert buf.cursor == (0, 2)
    assert not buf.search_forward()
    assert buf.search_backward()
    assert buf.cursor == (0, 1)


def test_search_without_pattern():
    buf = Buffer(["x"])
    assert not buf.search_forward()
    assert not buf.search_backward()


def test_replace_wholesale_resets_state():
    pattern = re.compile("x")
    buf = Buffer(["abc"], pattern=pattern, trailing_newline=True)
    buf.insert_text("z")
    buf.start_selection()
    fresh = buf.replace_wholesale(["new", "text"])
    assert fresh is not buf
    assert fresh.lines == ["new", "text"]
    assert fresh.cursor == (0, 0)
    assert fresh.undo_stack == [] and fresh.redo_stack == []
    assert fresh.selection_range() is None
    assert fresh.pattern is pattern
    assert fresh.trailing_newline
