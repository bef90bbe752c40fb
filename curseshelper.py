#!/usr/bin/env python3

# Copyright (c) 2026 curseshelper contributors
# SPDX-License-Identifier: ISC

"""
Overview
========

Helpers for curses programs: starting and stopping curses, reading keys
without having to care about terminal resizes, turning keys into readable
names, and changing the cursor or the current style for the duration of an
operation with a guarantee that the old state comes back.

Styles (colors and attributes) live in the cursesstyle module. The names most
programs need are re-exported from here.

All terminal access goes through a Screen, a thin wrapper around the curses
standard screen. start() returns one:

    screen = start()
    try:
        styles = resolve_styles(screen, [ColorStyle(ForegroundColor.YELLOW,
                                                    BackgroundColor.DARK_BLUE)])
        with styles.with_style(screen, styles[0]):
            draw_line(screen, 20, "Hello")
        key = get_key(screen, redraw)
    finally:
        end(screen)

run() does the same start/end dance for a function taking the screen.


Resizing
========

No SIGWINCH handler is installed. curses reports a resize as the KEY_RESIZE
key, and get_key() reacts to it by calling the redraw function passed to it
and reading again. The redraw function can therefore use whatever state the
caller has at hand. It should requery the screen size and repaint.


Running
=======

curseshelper.py can be run as a standalone executable. It then shows the
names of the keys pressed, until 'q' is pressed. '!' runs $SHELL with the
terminal handed back, to try out with_program().

The CURSESHELPER_STYLE environment variable can restyle the 'title', 'key' and
'hint' elements of that display, e.g.

    CURSESHELPER_STYLE="title=fg:black,bg:white key=fg:green,underline"

See the cursesstyle module for the style definition syntax.
"""

import curses
import locale
import os
import signal
import subprocess
from contextlib import contextmanager

from cursesscope import scope, scoped
from cursesstyle import (
    Attribute,
    AttributeStyle,
    BackgroundColor,
    ColorlessStyle,
    ColorStyle,
    DEFAULT_CURSES_STYLE,
    DEFAULT_STYLE,
    ForegroundColor,
    reset_style,
    resolve_styles,
    set_style,
    styles_from_env,
    with_style,
)

__all__ = [
    # Lifecycle
    "Screen",
    "start",
    "end",
    "suspend",
    "resizeui",
    "run",
    # Input
    "get_key",
    "display_key",
    # Drawing
    "draw_line",
    "draw_cursor",
    "goto_top",
    # Scopes
    "scoped",
    "with_cursor",
    "with_program",
    "CURSOR_INVISIBLE",
    "CURSOR_NORMAL",
    "CURSOR_VERY_VISIBLE",
    # From cursesstyle
    "Attribute",
    "AttributeStyle",
    "BackgroundColor",
    "ColorlessStyle",
    "ColorStyle",
    "DEFAULT_CURSES_STYLE",
    "DEFAULT_STYLE",
    "ForegroundColor",
    "reset_style",
    "resolve_styles",
    "set_style",
    "with_style",
]


# Cursor visibility values, as taken by curses.curs_set()
CURSOR_INVISIBLE = 0
CURSOR_NORMAL = 1
CURSOR_VERY_VISIBLE = 2

# curses.color_pair() keeps 8 bits of the pair number
_MAX_COLOR_PAIRS = 256

# Consecutive failed reads after which the terminal is considered gone
_MAX_READ_ERRORS = 100


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


class Screen:
    """
    The curses standard screen, plus the bits of state curses won't give
    back. Everything in this module and in cursesstyle talks to the terminal
    through the methods below, so a stand-in with the same methods can replace
    it (the test suite does that).

    Created by start(), not meant to be constructed directly.
    """

    def __init__(self, win):
        self._win = win
        # Python's curses has no wattr_get(), so remember what we set
        self._attr = curses.A_NORMAL
        self._pair = 0
        self._visibility = CURSOR_NORMAL
        self._read_errors = 0

    @property
    def win(self):
        """The underlying curses window."""
        return self._win

    # --- Colors and attributes ---

    def color_pairs(self):
        """
        Returns the number of color pairs available for allocation, not
        counting the reserved pair 0. 0 if the terminal has no colors.
        """
        if not curses.has_colors():
            return 0
        # attr_set() goes through curses.color_pair(), which only encodes
        # pairs below _MAX_COLOR_PAIRS, even where COLOR_PAIRS is larger
        return max(min(curses.COLOR_PAIRS, _MAX_COLOR_PAIRS) - 1, 0)

    def init_pair(self, pair, fg, bg):
        curses.init_pair(pair, fg, bg)

    def attr_get(self):
        """Returns the current (attribute mask, color pair) tuple."""
        return self._attr, self._pair

    def attr_set(self, attr, pair):
        self._win.attrset(attr | curses.color_pair(pair))
        self._attr = attr
        self._pair = pair

    # --- Cursor ---

    def curs_set(self, visibility):
        """
        Sets the cursor visibility and returns the previous one. Terminals
        that can't change it are left alone, and the last known visibility is
        returned.
        """
        try:
            prev = curses.curs_set(visibility)
        except curses.error:
            return self._visibility

        self._visibility = visibility
        return prev

    def move(self, y, x):
        self._win.move(y, x)

    def size(self):
        """Returns (height, width)."""
        return self._win.getmaxyx()

    # --- Output ---

    def addstr(self, s):
        try:
            self._win.addstr(s)
        except curses.error:
            # Writing the bottom-right cell leaves the cursor nowhere to go,
            # which curses reports as an error after doing the write
            height, width = self._win.getmaxyx()
            if self._win.getyx() != (height - 1, width - 1):
                raise

    def erase(self):
        self._win.erase()

    def refresh(self):
        self._win.refresh()

    # --- Input ---

    def get_wch(self):
        """
        Returns the next key (str for characters, int for curses KEY_*
        codes), or None if no key was available.

        Raises EOFError once _MAX_READ_ERRORS reads in a row have failed,
        which happens when the terminal has gone away (e.g. a hangup).
        """
        try:
            key = self._win.get_wch()
        except curses.error:
            # No input within the timeout, or the read was interrupted
            self._read_errors += 1
            if self._read_errors >= _MAX_READ_ERRORS:
                raise EOFError("terminal input is gone") from None
            return None

        self._read_errors = 0
        return key

    def flush_input(self):
        curses.flushinp()

    # --- Lifecycle ---

    def end(self):
        curses.endwin()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def start():
    """
    Initializes curses and grabs the keyboard. Returns a Screen.

    Colors are enabled when the terminal has them, with the terminal's default
    colors available as color -1 (cursesstyle.DEFAULT_COLOR). Enter is read as
    '\\r'. No SIGWINCH handler is installed, see get_key().
    """
    win = curses.initscr()
    try:
        curses.noecho()
        curses.cbreak()
        curses.nonl()
        win.keypad(True)

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
    except Exception:
        curses.endwin()
        raise

    return Screen(win)


def end(screen):
    """Ends curses mode, restoring the terminal."""
    screen.end()


def suspend():
    """Suspends the program, as Ctrl-Z in a shell would (Unix only)."""
    os.kill(os.getpid(), signal.SIGTSTP)


def resizeui(screen):
    """
    Makes curses pick up a new terminal size, and returns it as (height,
    width). Only needed when the resize wasn't reported through KEY_RESIZE,
    e.g. when resuming after suspend().
    """
    screen.end()
    screen.refresh()
    curses.update_lines_cols()
    return screen.size()


def run(fn):
    """
    Safe wrapper: starts curses, calls fn(screen) and always ends curses
    again. Returns what fn() returned.

    Ctrl-C (KeyboardInterrupt) ends the program quietly, returning None.
    """
    screen = None
    try:
        screen = start()
        return fn(screen)
    except KeyboardInterrupt:
        return None
    finally:
        if screen is not None:
            end(screen)


# ---------------------------------------------------------------------------
# Scopes
# ---------------------------------------------------------------------------


def with_cursor(screen, visibility):
    """
    Context manager that sets the cursor visibility to 'visibility' and puts
    the previous visibility back on exit, including when the body raises.
    """
    return scope(lambda: screen.curs_set(visibility), screen.curs_set)


@contextmanager
def with_program(screen):
    """
    Context manager for handing the terminal to another program, e.g.

        with with_program(screen):
            subprocess.call(["vi", filename])

    Leaves curses mode with the cursor shown. On exit, pending input is
    flushed and the cursor visibility is restored, also when the body raises.
    The next refresh brings the curses screen back.
    """
    with with_cursor(screen, CURSOR_NORMAL):
        with scope(screen.end, lambda _: screen.flush_input()):
            yield


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def get_key(screen, redraw):
    """
    Blocks until a key is read and returns it: a str for characters, an int
    (curses.KEY_*) for other keys.

    Terminal resizes never come back from here. When curses reports one
    (KEY_RESIZE), redraw() is called and reading resumes. Exceptions from
    redraw() propagate.

    Failed reads are retried. If the terminal goes away, Screen.get_wch()
    gives up after a run of failures and the EOFError propagates.
    """
    while True:
        key = screen.get_wch()

        if key is None:
            continue

        if key == curses.KEY_RESIZE:
            redraw()
            continue

        return key


_CHAR_KEY_NAMES = {
    " ": "<Space>",
    "\t": "<Tab>",
    "\r": "<Enter>",
    # Enter, when curses is in nl() mode
    "\n": "<Enter>",
}

_SPECIAL_KEY_NAMES = {
    curses.KEY_DOWN: "<Down>",
    curses.KEY_UP: "<Up>",
    curses.KEY_LEFT: "<Left>",
    curses.KEY_RIGHT: "<Right>",
    curses.KEY_HOME: "<Home>",
    curses.KEY_BACKSPACE: "<BS>",
    curses.KEY_NPAGE: "<NPage>",
    curses.KEY_PPAGE: "<PPage>",
    curses.KEY_ENTER: "<Return>",
    curses.KEY_END: "<End>",
    curses.KEY_IC: "<Insert>",
    curses.KEY_DC: "<Delete>",
}

# curses supports function keys F0 to F63
_N_FUNCTION_KEYS = 64

# Reverse map from key codes to curses constant names, for keys without a
# friendlier name
_KEY_CONSTANT_NAMES = {}
for _name in sorted(dir(curses)):
    _val = getattr(curses, _name)
    if _name.startswith("KEY_") and isinstance(_val, int):
        _KEY_CONSTANT_NAMES.setdefault(_val, _name)
del _name, _val


def display_key(key):
    """
    Returns a human-readable name for 'key', as returned by get_key():

      'a'           -> 'a'
      ' '           -> '<Space>'
      '\\x01'        -> '^A'
      KEY_LEFT      -> '<Left>'
      KEY_F0 + 5    -> 'F5'
    """
    if isinstance(key, str):
        if key in _CHAR_KEY_NAMES:
            return _CHAR_KEY_NAMES[key]

        if key.isprintable():
            return key

        if "\x01" <= key <= "\x1a":
            # Ctrl-A to Ctrl-Z
            return "^" + chr(ord(key) - 1 + ord("A"))

        return repr(key)

    if key in _SPECIAL_KEY_NAMES:
        return _SPECIAL_KEY_NAMES[key]

    if curses.KEY_F0 <= key < curses.KEY_F0 + _N_FUNCTION_KEYS:
        return f"F{key - curses.KEY_F0}"

    return _KEY_CONSTANT_NAMES.get(key, str(key))


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


def draw_line(screen, width, s):
    """
    Writes 'width' cells at the cursor position: 's', cut off or padded with
    spaces as needed.
    """
    width = max(width, 0)
    screen.addstr(s[:width].ljust(width))


def draw_cursor(screen, origin, pos):
    """
    Moves the cursor to 'pos' relative to 'origin', both (y, x) tuples,
    clamped to the screen. The cursor is made visible while moving it.
    """
    o_y, o_x = origin
    y, x = pos

    with with_cursor(screen, CURSOR_NORMAL):
        goto_top(screen)
        height, width = screen.size()
        screen.move(
            max(0, min(height - 1, o_y + y)), max(0, min(width - 1, o_x + x))
        )


def goto_top(screen):
    """Moves the cursor to the top-left corner of the screen."""
    screen.move(0, 0)


# ---------------------------------------------------------------------------
# Key display program
# ---------------------------------------------------------------------------

# Elements of the key display, in the order they're resolved
_DEMO_STYLES = {
    "title": AttributeStyle(
        [Attribute.BOLD], ForegroundColor.BRIGHT_WHITE, BackgroundColor.DARK_BLUE
    ),
    "key": ColorStyle(ForegroundColor.YELLOW, BackgroundColor.DEFAULT),
    "hint": ColorlessStyle([Attribute.REVERSE]),
}


def _main():
    try:
        # Make the locale settings specified in the environment active
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        locale.setlocale(locale.LC_ALL, "C")

    # Parse styles before curses takes over, so that warnings are readable
    styles = styles_from_env(_DEMO_STYLES)

    msg = run(lambda screen: _show_keys(screen, styles))
    if msg:
        print(msg)


def _show_keys(screen, symbolic_styles):
    styles = resolve_styles(screen, list(symbolic_styles.values()))
    title_style, key_style, hint_style = styles
    keys = []

    def redraw():
        height, width = screen.size()
        screen.erase()

        goto_top(screen)
        with styles.with_style(screen, title_style):
            draw_line(screen, width, " Keys pressed")

        shown = keys[-max(height - 2, 0):] if height > 2 else []
        for i, key in enumerate(shown, 1):
            screen.move(i, 0)
            with styles.with_style(screen, key_style):
                draw_line(screen, width, " " + display_key(key))

        if height > 1:
            screen.move(height - 1, 0)
            with styles.with_style(screen, hint_style):
                draw_line(screen, width, " [q] Quit  [!] Shell")

        screen.refresh()

    with with_cursor(screen, CURSOR_INVISIBLE):
        while True:
            redraw()
            key = get_key(screen, redraw)

            if key == "q":
                break

            if key == "!":
                with with_program(screen):
                    subprocess.call(os.environ.get("SHELL", "/bin/sh"))
                continue

            keys.append(key)

    msgs = [f"{len(keys)} keys read"]
    msgs.extend("curseshelper warning: " + warning for warning in styles.warnings)
    return "\n".join(msgs)


if __name__ == "__main__":
    _main()
