# Copyright (c) 2026 curseshelper contributors
# SPDX-License-Identifier: ISC
#
# Shared fixtures and fakes for the curseshelper pytest suite.

import curses
import os
import sys

import pytest

# Ensure the modules are importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the user's color settings out of the tests."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CURSESHELPER_STYLE", raising=False)
    yield


@pytest.fixture
def screen():
    """A FakeScreen with plenty of color pairs."""
    return FakeScreen()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeScreen:
    """
    In-memory stand-in for curseshelper.Screen.

    n_pairs is what color_pairs() reports. keys is the scripted input for
    get_wch(); reading past its end raises IndexError, which makes a runaway
    read loop fail the test instead of hanging it.
    """

    def __init__(self, n_pairs=64, keys=(), height=24, width=80):
        self.n_pairs = n_pairs
        self.keys = list(keys)
        self.height = height
        self.width = width

        self.pairs = []  # init_pair() calls, as (pair, fg, bg)
        self.attr = curses.A_NORMAL
        self.pair = 0
        self.visibility = 1
        self.cursor = (0, 0)
        self.written = []  # addstr() calls, as (cursor, s, attr, pair)
        self.events = []  # end(), flush_input(), refresh() and erase() calls

    def color_pairs(self):
        return self.n_pairs

    def init_pair(self, pair, fg, bg):
        self.pairs.append((pair, fg, bg))

    def attr_get(self):
        return self.attr, self.pair

    def attr_set(self, attr, pair):
        self.attr = attr
        self.pair = pair

    def curs_set(self, visibility):
        prev = self.visibility
        self.visibility = visibility
        return prev

    def move(self, y, x):
        self.cursor = (y, x)

    def size(self):
        return self.height, self.width

    def addstr(self, s):
        self.written.append((self.cursor, s, self.attr, self.pair))

    def erase(self):
        self.events.append("erase")

    def refresh(self):
        self.events.append("refresh")

    def get_wch(self):
        return self.keys.pop(0)

    def flush_input(self):
        self.events.append("flush_input")

    def end(self):
        self.events.append("end")
