# Copyright (c) 2026 curseshelper contributors
# SPDX-License-Identifier: ISC

"""
cursesstyle -- symbolic colors, attributes and styles for curses

Application code describes styles symbolically (a foreground color, a
background color, a set of attributes) and resolves them once, at startup,
into curses attribute masks and color pairs. Color pairs are scarce and their
number depends on the terminal. When the terminal can't supply enough pairs,
every color request falls back to the default pair 0 and a warning is
recorded, so the application keeps running in monochrome.

Typical use:

    styles = resolve_styles(screen, [
        ColorStyle(ForegroundColor.WHITE, BackgroundColor.DARK_BLUE),
        AttributeStyle([Attribute.UNDERLINE], ForegroundColor.YELLOW,
                       BackgroundColor.DEFAULT),
        ColorlessStyle([Attribute.REVERSE]),
    ])
    title, link, selection = styles

    with styles.with_style(screen, title):
        ...

Resolved styles are positional: the n'th resolved style corresponds to the
n'th symbolic style passed in.

Foreground colors come in dark and bright variants. A bright variant is the
dark color plus the bold attribute, which is how most terminals render
brightness. Backgrounds only come in dark variants, since bold can't brighten
a background.

Style definitions
=================

Styles can also be written as strings, which is handy for configuration
through environment variables (see styles_from_env()):

    fg:COLOR,bg:COLOR,ATTRIBUTE,...

COLOR is a color name in lowercase without underscores, e.g. 'darkred' or
'brightwhite'. ATTRIBUTE is one of 'bold', 'underline', 'dim', 'reverse' and
'blink'. A definition without colors gives a ColorlessStyle. Unknown fields are
ignored, with a warning.

Setting the NO_COLOR environment variable to a non-empty value makes
resolve_styles() act as if the terminal supported no color pairs.
"""

import curses
import os
import sys

from cursesscope import scope


# ---------------------------------------------------------------------------
# Native colors
# ---------------------------------------------------------------------------

# Terminal default color. Requires curses.use_default_colors(), which
# curseshelper.start() calls.
DEFAULT_COLOR = -1

BLACK = curses.COLOR_BLACK
RED = curses.COLOR_RED
GREEN = curses.COLOR_GREEN
YELLOW = curses.COLOR_YELLOW
BLUE = curses.COLOR_BLUE
MAGENTA = curses.COLOR_MAGENTA
CYAN = curses.COLOR_CYAN
WHITE = curses.COLOR_WHITE


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class Attribute:
    """Named constants for text attributes."""

    BOLD = "bold"
    UNDERLINE = "underline"
    DIM = "dim"
    REVERSE = "reverse"
    BLINK = "blink"


_ATTR_TO_CURSES = {
    Attribute.BOLD: curses.A_BOLD,
    Attribute.UNDERLINE: curses.A_UNDERLINE,
    Attribute.DIM: curses.A_DIM,
    Attribute.REVERSE: curses.A_REVERSE,
    Attribute.BLINK: curses.A_BLINK,
}

ATTRIBUTES = tuple(_ATTR_TO_CURSES)


def convert_attributes(attrs):
    """
    Returns the curses attribute mask for the attributes in 'attrs'. An empty
    collection gives curses.A_NORMAL. Order and repetitions don't matter.
    """
    res = curses.A_NORMAL
    for attr in attrs:
        if attr not in _ATTR_TO_CURSES:
            raise ValueError(f"unknown attribute {attr!r}")
        res |= _ATTR_TO_CURSES[attr]
    return res


# ---------------------------------------------------------------------------
# Symbolic colors
# ---------------------------------------------------------------------------


class ForegroundColor:
    """Named constants for foreground colors."""

    BLACK = "black"
    GREY = "grey"
    DARK_RED = "darkred"
    RED = "red"
    DARK_GREEN = "darkgreen"
    GREEN = "green"
    BROWN = "brown"
    YELLOW = "yellow"
    DARK_BLUE = "darkblue"
    BLUE = "blue"
    PURPLE = "purple"
    MAGENTA = "magenta"
    DARK_CYAN = "darkcyan"
    CYAN = "cyan"
    WHITE = "white"
    BRIGHT_WHITE = "brightwhite"
    DEFAULT = "default"


class BackgroundColor:
    """Named constants for background colors. There are no bright ones."""

    BLACK = "black"
    DARK_RED = "darkred"
    DARK_GREEN = "darkgreen"
    BROWN = "brown"
    DARK_BLUE = "darkblue"
    PURPLE = "purple"
    DARK_CYAN = "darkcyan"
    WHITE = "white"
    DEFAULT = "default"


_NO_ATTRS = frozenset()
_BOLD = frozenset((Attribute.BOLD,))

# Maps each foreground color to (implicit attributes, native color)
_FG_TO_CURSES = {
    ForegroundColor.BLACK: (_NO_ATTRS, BLACK),
    ForegroundColor.GREY: (_BOLD, BLACK),
    ForegroundColor.DARK_RED: (_NO_ATTRS, RED),
    ForegroundColor.RED: (_BOLD, RED),
    ForegroundColor.DARK_GREEN: (_NO_ATTRS, GREEN),
    ForegroundColor.GREEN: (_BOLD, GREEN),
    ForegroundColor.BROWN: (_NO_ATTRS, YELLOW),
    ForegroundColor.YELLOW: (_BOLD, YELLOW),
    ForegroundColor.DARK_BLUE: (_NO_ATTRS, BLUE),
    ForegroundColor.BLUE: (_BOLD, BLUE),
    ForegroundColor.PURPLE: (_NO_ATTRS, MAGENTA),
    ForegroundColor.MAGENTA: (_BOLD, MAGENTA),
    ForegroundColor.DARK_CYAN: (_NO_ATTRS, CYAN),
    ForegroundColor.CYAN: (_BOLD, CYAN),
    ForegroundColor.WHITE: (_NO_ATTRS, WHITE),
    ForegroundColor.BRIGHT_WHITE: (_BOLD, WHITE),
    ForegroundColor.DEFAULT: (_NO_ATTRS, DEFAULT_COLOR),
}

_BG_TO_CURSES = {
    BackgroundColor.BLACK: (_NO_ATTRS, BLACK),
    BackgroundColor.DARK_RED: (_NO_ATTRS, RED),
    BackgroundColor.DARK_GREEN: (_NO_ATTRS, GREEN),
    BackgroundColor.BROWN: (_NO_ATTRS, YELLOW),
    BackgroundColor.DARK_BLUE: (_NO_ATTRS, BLUE),
    BackgroundColor.PURPLE: (_NO_ATTRS, MAGENTA),
    BackgroundColor.DARK_CYAN: (_NO_ATTRS, CYAN),
    BackgroundColor.WHITE: (_NO_ATTRS, WHITE),
    BackgroundColor.DEFAULT: (_NO_ATTRS, DEFAULT_COLOR),
}

FOREGROUND_COLORS = tuple(_FG_TO_CURSES)
BACKGROUND_COLORS = tuple(_BG_TO_CURSES)


def convert_foreground(fg):
    """
    Returns (attributes, native color) for the ForegroundColor 'fg'. Bright
    colors come back as {Attribute.BOLD} plus the dark color.
    """
    try:
        return _FG_TO_CURSES[fg]
    except KeyError:
        raise ValueError(f"unknown foreground color {fg!r}") from None


def convert_background(bg):
    """Returns (attributes, native color) for the BackgroundColor 'bg'."""
    try:
        return _BG_TO_CURSES[bg]
    except KeyError:
        raise ValueError(f"unknown background color {bg!r}") from None


# ---------------------------------------------------------------------------
# Symbolic styles
# ---------------------------------------------------------------------------


class ColorStyle:
    """Foreground and background color, no explicit attributes."""

    __slots__ = ("fg", "bg")

    def __init__(self, fg, bg):
        self.fg = fg
        self.bg = bg

    def __eq__(self, other):
        if not isinstance(other, ColorStyle):
            return NotImplemented
        return self.fg == other.fg and self.bg == other.bg

    def __hash__(self):
        return hash((ColorStyle, self.fg, self.bg))

    def __repr__(self):
        return f"ColorStyle({self.fg!r}, {self.bg!r})"


class AttributeStyle:
    """Attributes plus foreground and background color."""

    __slots__ = ("attrs", "fg", "bg")

    def __init__(self, attrs, fg, bg):
        self.attrs = frozenset(attrs)
        self.fg = fg
        self.bg = bg

    def __eq__(self, other):
        if not isinstance(other, AttributeStyle):
            return NotImplemented
        return (
            self.attrs == other.attrs and self.fg == other.fg and self.bg == other.bg
        )

    def __hash__(self):
        return hash((AttributeStyle, self.attrs, self.fg, self.bg))

    def __repr__(self):
        return "AttributeStyle({}, {!r}, {!r})".format(
            sorted(self.attrs), self.fg, self.bg
        )


class ColorlessStyle:
    """
    Attributes only. Applying it leaves the screen's current colors as they
    are.
    """

    __slots__ = ("attrs",)

    def __init__(self, attrs):
        self.attrs = frozenset(attrs)

    def __eq__(self, other):
        if not isinstance(other, ColorlessStyle):
            return NotImplemented
        return self.attrs == other.attrs

    def __hash__(self):
        return hash((ColorlessStyle, self.attrs))

    def __repr__(self):
        return f"ColorlessStyle({sorted(self.attrs)})"


DEFAULT_STYLE = ColorStyle(ForegroundColor.DEFAULT, BackgroundColor.DEFAULT)


# ---------------------------------------------------------------------------
# Resolved styles
# ---------------------------------------------------------------------------


class ColorPairStyle:
    """Curses attribute mask and color pair number."""

    __slots__ = ("attr", "pair")

    def __init__(self, attr, pair):
        self.attr = attr
        self.pair = pair

    def __eq__(self, other):
        if not isinstance(other, ColorPairStyle):
            return NotImplemented
        return self.attr == other.attr and self.pair == other.pair

    def __hash__(self):
        return hash((ColorPairStyle, self.attr, self.pair))

    def __repr__(self):
        return f"ColorPairStyle(attr={self.attr:#x}, pair={self.pair})"


class ColorlessResolvedStyle:
    """Curses attribute mask. The screen's current color pair is kept."""

    __slots__ = ("attr",)

    def __init__(self, attr):
        self.attr = attr

    def __eq__(self, other):
        if not isinstance(other, ColorlessResolvedStyle):
            return NotImplemented
        return self.attr == other.attr

    def __hash__(self):
        return hash((ColorlessResolvedStyle, self.attr))

    def __repr__(self):
        return f"ColorlessResolvedStyle(attr={self.attr:#x})"


# Terminal defaults: no attributes, color pair 0
DEFAULT_CURSES_STYLE = ColorPairStyle(curses.A_NORMAL, 0)


def mk_curses_style(attrs):
    """Returns a ColorlessResolvedStyle with the attributes in 'attrs'."""
    return ColorlessResolvedStyle(convert_attributes(attrs))


def change_curses_style(style, attrs):
    """
    Returns 'style' with its attributes replaced by 'attrs'. The color pair of
    a ColorPairStyle is kept. Anything else becomes a ColorlessResolvedStyle.
    """
    if isinstance(style, ColorPairStyle):
        return ColorPairStyle(convert_attributes(attrs), style.pair)
    return mk_curses_style(attrs)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class StyleContext:
    """
    Result of resolve_styles(). Behaves as a sequence of resolved styles, in
    the order the symbolic styles were given, and remembers which color pairs
    were allocated.

    pairs:
      Dict mapping each allocated pair number to its (fg, bg) native colors.
      Empty if nothing was allocated.

    degraded:
      True if the terminal had too few color pairs and every color request was
      mapped to pair 0.

    warnings:
      List of warning strings produced during resolution.
    """

    def __init__(self, styles, pairs, degraded, warnings):
        self.styles = styles
        self.pairs = pairs
        self.degraded = degraded
        self.warnings = warnings

    def __len__(self):
        return len(self.styles)

    def __getitem__(self, i):
        return self.styles[i]

    def __iter__(self):
        return iter(self.styles)

    def __repr__(self):
        return "<StyleContext {} styles, {} pairs{}>".format(
            len(self.styles), len(self.pairs), ", degraded" if self.degraded else ""
        )

    def _check(self, style):
        if (
            isinstance(style, ColorPairStyle)
            and style.pair != 0
            and style.pair not in self.pairs
        ):
            raise ValueError(f"color pair {style.pair} was not allocated here")

    def set_style(self, screen, style):
        """Like set_style(), for a style resolved through this context."""
        self._check(style)
        set_style(screen, style)

    def with_style(self, screen, style):
        """Like with_style(), for a style resolved through this context."""
        self._check(style)
        return with_style(screen, style)


def _decompose(style):
    # Returns (attributes, color request) for a symbolic style. The color
    # request is a (fg, bg) native color tuple, or None for colorless styles.

    if isinstance(style, ColorStyle):
        return _decompose(AttributeStyle(_NO_ATTRS, style.fg, style.bg))

    if isinstance(style, AttributeStyle):
        fg_attrs, fg = convert_foreground(style.fg)
        bg_attrs, bg = convert_background(style.bg)
        return fg_attrs | bg_attrs | style.attrs, (fg, bg)

    if isinstance(style, ColorlessStyle):
        return style.attrs, None

    raise TypeError(f"not a symbolic style: {style!r}")


def _no_color():
    # https://no-color.org/
    return bool(os.environ.get("NO_COLOR"))


def _colors_to_pairs(screen, colors, warnings, warn_to_stderr):
    # Allocates a color pair for each (fg, bg) in 'colors', in order, starting
    # at 1. Identical requests get separate pairs. Returns a list with the pair
    # number for each request and a {pair: (fg, bg)} dict. If the terminal
    # can't fit the requests, every request gets pair 0 and the dict is empty.

    n_colors = len(colors)
    no_color = _no_color()
    n_pairs = 0 if no_color else screen.color_pairs()

    if n_pairs < n_colors:
        _warn(
            warnings,
            warn_to_stderr,
            "Terminal does not support enough colors. Number of colors "
            f"requested: {n_colors}. Number of colors supported: {n_pairs}"
            + (" (NO_COLOR is set)" if no_color else ""),
        )
        return [0] * n_colors, {}

    pairs = {}
    for pair, (fg, bg) in enumerate(colors, 1):
        screen.init_pair(pair, fg, bg)
        pairs[pair] = (fg, bg)

    return list(pairs), pairs


def resolve_styles(screen, styles, warn_to_stderr=False):
    """
    Resolves the symbolic styles in 'styles' into curses styles, allocating
    color pairs on 'screen'. Returns a StyleContext holding the resolved
    styles in the same order.

    Call this once, after curses has been initialized and before any style is
    applied. Pair numbers are handed out from 1 in the order the color
    requests appear, so calling it a second time would reuse pair numbers.

    If the terminal supports fewer color pairs than there are color requests,
    all of them get pair 0 (the terminal default) and a warning is recorded
    in StyleContext.warnings. This never raises.

    screen:
      Object with color_pairs() and init_pair(pair, fg, bg) methods, usually
      a curseshelper.Screen

    warn_to_stderr:
      If True, warnings are also printed to stderr. Off by default, since
      output to stderr gets mangled while curses owns the terminal.
    """
    decomposed = [_decompose(style) for style in styles]
    requests = [colors for _, colors in decomposed if colors is not None]
    warnings = []

    pair_nums, pairs = _colors_to_pairs(screen, requests, warnings, warn_to_stderr)
    pair_nums = iter(pair_nums)

    res = []
    for attrs, colors in decomposed:
        attr = convert_attributes(attrs)
        if colors is None:
            res.append(ColorlessResolvedStyle(attr))
        else:
            res.append(ColorPairStyle(attr, next(pair_nums)))

    return StyleContext(res, pairs, len(pairs) < len(requests), warnings)


# ---------------------------------------------------------------------------
# Applying styles
# ---------------------------------------------------------------------------


def set_style(screen, style):
    """Makes 'style' the current style of 'screen'."""
    if isinstance(style, ColorPairStyle):
        screen.attr_set(style.attr, style.pair)

    elif isinstance(style, ColorlessResolvedStyle):
        _, pair = screen.attr_get()
        screen.attr_set(style.attr, pair)

    else:
        raise TypeError(f"not a resolved style: {style!r}")


def reset_style(screen):
    """Resets 'screen' to the terminal's default attributes and colors."""
    set_style(screen, DEFAULT_CURSES_STYLE)


def _push_style(screen, style):
    old = screen.attr_get()
    set_style(screen, style)
    return old


def with_style(screen, style):
    """
    Context manager that applies 'style' to 'screen' and restores the
    previous attributes and color pair exactly as they were on exit,
    including when the body raises.
    """
    return scope(lambda: _push_style(screen, style), lambda old: screen.attr_set(*old))


# ---------------------------------------------------------------------------
# Style definitions
# ---------------------------------------------------------------------------


def style_from_def(style_def, warnings=None, warn_to_stderr=True):
    """
    Parses a style definition string like "fg:white,bg:darkblue,bold" and
    returns the symbolic style it describes. Unknown colors and attributes
    are ignored, with a warning. See the module docstring.

    warnings:
      Optional list that warnings get appended to
    """
    if warnings is None:
        warnings = []

    fg = bg = None
    attrs = set()

    if style_def:
        for field in style_def.split(","):
            if field.startswith("fg:"):
                color = field.split(":", 1)[1]
                if color in _FG_TO_CURSES:
                    fg = color
                else:
                    _warn(
                        warnings,
                        warn_to_stderr,
                        f"Ignoring unknown foreground color {color}",
                    )

            elif field.startswith("bg:"):
                color = field.split(":", 1)[1]
                if color in _BG_TO_CURSES:
                    bg = color
                else:
                    _warn(
                        warnings,
                        warn_to_stderr,
                        f"Ignoring unknown background color {color}",
                    )

            elif field in _ATTR_TO_CURSES:
                attrs.add(field)

            else:
                _warn(
                    warnings,
                    warn_to_stderr,
                    f"Ignoring unknown style attribute {field}",
                )

    if fg is None and bg is None:
        return ColorlessStyle(attrs)

    fg = fg or ForegroundColor.DEFAULT
    bg = bg or BackgroundColor.DEFAULT
    if not attrs:
        return ColorStyle(fg, bg)
    return AttributeStyle(attrs, fg, bg)


def parse_styles(style_str, styles, warnings=None, warn_to_stderr=True):
    """
    Applies the whitespace-separated '<element>=<definition>' assignments in
    'style_str' to the dict 'styles', which maps element names to symbolic
    styles. If the definition is the name of another element, that element's
    style is copied, e.g. "separator=help". Assignments to elements not
    already in 'styles', and fields without '=', are ignored with a warning.

    Returns 'styles'.
    """
    if warnings is None:
        warnings = []

    for sline in style_str.split():
        if "=" not in sline:
            _warn(
                warnings, warn_to_stderr, f"Ignoring malformed style assignment {sline}"
            )
            continue

        key, data = sline.split("=", 1)

        if key not in styles:
            _warn(warnings, warn_to_stderr, f"Ignoring non-existent style {key}")
            continue

        if data in styles:
            styles[key] = styles[data]
        else:
            styles[key] = style_from_def(data, warnings, warn_to_stderr)

    return styles


def styles_from_env(defaults, warnings=None, warn_to_stderr=True):
    """
    Returns a copy of 'defaults' (a dict mapping element names to symbolic
    styles) with the assignments from the CURSESHELPER_STYLE environment
    variable applied. Call it before curses takes over the terminal, so that
    warnings on stderr stay readable.
    """
    styles = dict(defaults)
    if "CURSESHELPER_STYLE" in os.environ:
        parse_styles(
            os.environ["CURSESHELPER_STYLE"], styles, warnings, warn_to_stderr
        )
    return styles


def _warn(warnings, warn_to_stderr, msg):
    warnings.append(msg)
    if warn_to_stderr:
        sys.stderr.write("curseshelper warning: " + msg + "\n")
