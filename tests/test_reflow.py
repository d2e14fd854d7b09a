from folio.reflow import LineReflow


def test_reflow_splits_at_long_space_run():
    assert LineReflow().apply(["foo     bar"]) == ["foo", "bar"]


def test_reflow_leaves_short_runs_alone():
    lines = ["a b", "c  d"]
    assert LineReflow().apply(lines) == lines


def test_reflow_counts_tabs_but_not_line_breaks():
    assert LineReflow().apply(["a\t \tb", "c"]) == ["a", "b", "c"]
    # a trailing run on one line and a leading run on the next stay separate
    assert LineReflow().apply(["x  ", "  y"]) == ["x  ", "  y"]


def test_reflow_keeps_trailing_empty_line():
    assert LineReflow().apply(["end   "]) == ["end", ""]


def test_reflow_is_idempotent():
    reflow = LineReflow()
    lines = ["col one    col two\t\t\tcol three", "", "   indented", "plain"]
    once = reflow.apply(lines)
    assert reflow.apply(once) == once
