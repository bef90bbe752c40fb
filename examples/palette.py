# Shows every foreground color on every background color, with one resolved
# style per combination. That takes 153 color pairs, so terminals with fewer
# (e.g. TERM=xterm, with 64) show the monochrome fallback and the warning
# instead.
#
# Press any key to exit.

import curseshelper
from curseshelper import draw_line, get_key, goto_top
from cursesstyle import BACKGROUND_COLORS, FOREGROUND_COLORS, ColorStyle, resolve_styles

# Width of each cell in the table
_CELL_W = 12


def _palette(screen):
    styles = resolve_styles(
        screen,
        [ColorStyle(fg, bg) for fg in FOREGROUND_COLORS for bg in BACKGROUND_COLORS],
    )

    def redraw():
        height, width = screen.size()
        screen.erase()

        goto_top(screen)
        for col, bg in enumerate(BACKGROUND_COLORS):
            if (col + 1) * _CELL_W <= width:
                screen.move(0, col * _CELL_W)
                draw_line(screen, _CELL_W, "bg:" + bg)

        for row, fg in enumerate(FOREGROUND_COLORS, 1):
            if row >= height - 1:
                break
            for col in range(len(BACKGROUND_COLORS)):
                if (col + 1) * _CELL_W > width:
                    break
                screen.move(row, col * _CELL_W)
                style = styles[(row - 1) * len(BACKGROUND_COLORS) + col]
                with styles.with_style(screen, style):
                    draw_line(screen, _CELL_W, " " + fg)

        if styles.warnings:
            screen.move(height - 1, 0)
            draw_line(screen, width, styles.warnings[0])

        screen.refresh()

    with curseshelper.with_cursor(screen, curseshelper.CURSOR_INVISIBLE):
        redraw()
        get_key(screen, redraw)


if __name__ == "__main__":
    curseshelper.run(_palette)
