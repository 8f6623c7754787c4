"""Unit tests for separator wrapping and the viewport width lookup."""

from __future__ import annotations

import io

from pipelog.render.wrap import DEFAULT_SEPARATOR, resolve_separators, terminal_width

SEP = DEFAULT_SEPARATOR


def test_zero_width_turns_every_separator_into_a_newline():
    text = SEP.join(["a", "bb", "ccc"])
    assert resolve_separators(text, SEP, 0) == "a\nbb\nccc"


def test_two_segments_are_pushed_to_both_edges():
    assert resolve_separators(f"left{SEP}right", SEP, 20) == "left" + " " * 11 + "right"


def test_spare_columns_are_spread_across_gaps():
    assert resolve_separators(SEP.join(["a", "b", "c"]), SEP, 8) == "a   b  c"


def test_lines_stay_within_width_when_segments_fit():
    segments = ["aaaa", "bbbbbb", "cc", "ddddddd", "e"]
    lines = resolve_separators(SEP.join(segments), SEP, 10).split("\n")
    assert all(len(line) <= 10 for line in lines)
    assert [line.split() for line in lines] == [["aaaa"], ["bbbbbb", "cc"], ["ddddddd", "e"]]


def test_oversized_segment_is_kept_whole():
    text = SEP.join(["x" * 15, "y"])
    assert resolve_separators(text, SEP, 10) == "x" * 15 + "\ny"


def test_single_segment_is_untouched():
    assert resolve_separators("plain", SEP, 40) == "plain"


def test_terminal_width_is_zero_for_non_terminals():
    assert terminal_width(io.StringIO()) == 0
    assert terminal_width(object()) == 0
