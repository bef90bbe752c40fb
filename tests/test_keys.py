# Copyright (c) 2026 curseshelper contributors
# SPDX-License-Identifier: ISC
#
# Key tests: display_key() names and the resize-transparent get_key() loop.

import curses

import pytest

from curseshelper import display_key, get_key
from conftest import FakeScreen

# ---------------------------------------------------------------------------
# display_key()
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "key, expected",
    [
        (" ", "<Space>"),
        ("\t", "<Tab>"),
        ("\r", "<Enter>"),
        ("\n", "<Enter>"),
        ("z", "z"),
        ("Z", "Z"),
        ("7", "7"),
        ("~", "~"),
        ("é", "é"),
        ("\x01", "^A"),
        ("\x04", "^D"),
        ("\x1a", "^Z"),
    ],
)
def test_display_char_keys(key, expected):
    assert display_key(key) == expected


@pytest.mark.parametrize(
    "key, expected",
    [
        (curses.KEY_UP, "<Up>"),
        (curses.KEY_DOWN, "<Down>"),
        (curses.KEY_LEFT, "<Left>"),
        (curses.KEY_RIGHT, "<Right>"),
        (curses.KEY_HOME, "<Home>"),
        (curses.KEY_END, "<End>"),
        (curses.KEY_PPAGE, "<PPage>"),
        (curses.KEY_NPAGE, "<NPage>"),
        (curses.KEY_IC, "<Insert>"),
        (curses.KEY_DC, "<Delete>"),
        (curses.KEY_BACKSPACE, "<BS>"),
        (curses.KEY_ENTER, "<Return>"),
    ],
)
def test_display_special_keys(key, expected):
    assert display_key(key) == expected


def test_display_function_keys():
    assert display_key(curses.KEY_F0 + 5) == "F5"
    assert display_key(curses.KEY_F1) == "F1"
    assert display_key(curses.KEY_F12) == "F12"
    assert display_key(curses.KEY_F0) == "F0"
    assert display_key(curses.KEY_F0 + 63) == "F63"


def test_display_fallbacks():
    # Control characters outside Ctrl-A..Ctrl-Z
    assert display_key("\x00") == repr("\x00")
    assert display_key("\x1b") == repr("\x1b")
    assert display_key("\x7f") == repr("\x7f")

    # Other curses keys get their constant name
    assert display_key(curses.KEY_RESIZE) == "KEY_RESIZE"
    assert display_key(curses.KEY_MOUSE).startswith("KEY_")

    # Unknown codes
    assert display_key(100000) == "100000"


def test_display_is_deterministic():
    for key in "a", "\x03", curses.KEY_F0 + 3, curses.KEY_DC, 100000:
        assert display_key(key) == display_key(key)


# ---------------------------------------------------------------------------
# get_key()
# ---------------------------------------------------------------------------


def _counter():
    calls = []
    return calls, lambda: calls.append(None)


def test_get_key_returns_first_key():
    screen = FakeScreen(keys=["a", "b"])
    calls, redraw = _counter()

    assert get_key(screen, redraw) == "a"
    assert get_key(screen, redraw) == "b"
    assert calls == []


def test_get_key_absorbs_resizes():
    screen = FakeScreen(keys=[curses.KEY_RESIZE, curses.KEY_RESIZE, "x"])
    calls, redraw = _counter()

    assert get_key(screen, redraw) == "x"
    assert len(calls) == 2
    assert screen.keys == []


def test_get_key_retries_on_nothing():
    screen = FakeScreen(keys=[None, None, curses.KEY_RESIZE, None, curses.KEY_LEFT])
    calls, redraw = _counter()

    assert get_key(screen, redraw) == curses.KEY_LEFT
    assert len(calls) == 1


def test_get_key_redraw_sees_new_state():
    # redraw() runs before the next read, so it can repaint with fresh state
    screen = FakeScreen(keys=[curses.KEY_RESIZE, "q"], height=24, width=80)
    seen = []

    def redraw():
        seen.append(screen.size())

    screen.height, screen.width = 30, 100
    assert get_key(screen, redraw) == "q"
    assert seen == [(30, 100)]


def test_get_key_redraw_failure_propagates():
    screen = FakeScreen(keys=[curses.KEY_RESIZE, "x"])

    def redraw():
        raise RuntimeError("redraw failed")

    with pytest.raises(RuntimeError, match="redraw failed"):
        get_key(screen, redraw)

    # The key after the resize is still there
    assert screen.keys == ["x"]


def test_get_key_many_resizes():
    # A plain loop, so long runs of resizes can't exhaust the stack
    screen = FakeScreen(keys=[curses.KEY_RESIZE] * 5000 + ["y"])
    calls, redraw = _counter()

    assert get_key(screen, redraw) == "y"
    assert len(calls) == 5000
