"""
Terminal front end built on ``blessed``.

Provides the scoped terminal session, a key source and a renderer that
draws the arena canvas, the score/level gauges and, after a win, the
telemetry sparkline and timer.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from blessed import Terminal

from rally_pong.sim.models import RenderSnapshot

SPARK_BLOCKS = " ▁▂▃▄▅▆▇█"
CANVAS_SHARE = 0.75
GAUGE_SHARE = 0.80
MIN_SIZE = 3

Cell = tuple[str, Optional[str]]


@contextmanager
def terminal_session(term: Terminal) -> Iterator[Terminal]:
    """
    Enter the alternate screen in cbreak mode with the cursor hidden.

    Every mode is undone when the block exits, whatever the reason.
    """
    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        yield term


class TerminalInput:
    """
    Key source reading from the terminal.
    """

    def __init__(self, term: Terminal):
        self.term = term

    def poll(self, timeout: float) -> Optional[str]:
        """
        Wait at most ``timeout`` seconds for a key.

        :return: ``KEY_*`` name for special keys, the character otherwise.
        :rtype: Optional[str]
        """
        keystroke = self.term.inkey(timeout=timeout)
        if not keystroke:
            return None
        if keystroke.is_sequence:
            return keystroke.name
        return str(keystroke)


def scale(value: float, lower: float, upper: float, cells: int) -> int:
    """Map ``value`` in ``[lower, upper]`` to a cell index in ``cells``."""
    if cells <= 1 or upper <= lower:
        return 0
    index = int((value - lower) / (upper - lower) * (cells - 1))
    return max(0, min(cells - 1, index))


def gauge_cells(percent: int, width: int) -> list[bool]:
    """Which of ``width`` cells are filled for ``percent``."""
    filled = int(width * max(0, min(100, percent)) / 100)
    return [i < filled for i in range(width)]


def sparkline_rows(data: Sequence[int], width: int, height: int) -> list[str]:
    """
    Render ``data`` as a bar chart ``height`` rows tall.

    The first ``width`` values are drawn left to right, scaled to the
    largest of them.
    """
    values = list(data[:width])
    if width <= 0 or height <= 0:
        return []
    peak = max(values) if values else 0
    rows = [[" "] * width for _ in range(height)]
    for col, value in enumerate(values):
        eighths = round(value / peak * height * 8) if peak else 0
        for row in range(height):
            level = max(0, min(8, eighths - row * 8))
            rows[height - 1 - row][col] = SPARK_BLOCKS[level]
    return ["".join(row) for row in rows]


class TerminalRenderer:
    """
    Draws snapshots on a ``blessed`` terminal.
    """

    def __init__(
        self,
        term: Terminal,
        *,
        size: Optional[tuple[int, int]] = None,
        stream=None,
    ):
        """
        :param term: Terminal to draw on.
        :type term: Terminal

        :param size: Fixed (width, height); follows the terminal if None.
        :type size: tuple[int, int], optional

        :param stream: Output stream, defaults to the terminal's.
        """
        self.term = term
        self.size = size
        self.stream = stream if stream is not None else term.stream

    def render(self, snapshot: RenderSnapshot):
        """Draw one frame."""
        width, height = self.size or (self.term.width, self.term.height)
        if width < MIN_SIZE or height < MIN_SIZE:
            # too small to hold a bordered canvas
            self.stream.write(self.term.home + self.term.clear)
            self.stream.flush()
            return

        grid: list[list[Cell]] = [
            [(" ", None)] * width for _ in range(height)
        ]

        canvas_h = min(height, max(MIN_SIZE, int(height * CANVAS_SHARE)))
        self._draw_canvas(grid, snapshot, 0, 0, width, canvas_h)

        bottom_h = height - canvas_h
        left_w = int(width * GAUGE_SHARE)
        if bottom_h >= 3:
            if snapshot.win:
                self._draw_sparkline(
                    grid, snapshot, canvas_h, 0, left_w, bottom_h
                )
                self._draw_timer(
                    grid, snapshot, canvas_h, left_w, width - left_w, bottom_h
                )
            else:
                self._draw_score(grid, snapshot, canvas_h, 0, left_w, bottom_h)
                self._draw_level(
                    grid, snapshot, canvas_h, left_w, width - left_w, bottom_h
                )

        self.stream.write(self._compose(grid))
        self.stream.flush()

    def _compose(self, grid: list[list[Cell]]) -> str:
        term = self.term
        out = []
        for row_index, row in enumerate(grid):
            out.append(term.move_xy(0, row_index))
            style = None
            for char, cell_style in row:
                if cell_style != style:
                    out.append(term.normal)
                    if cell_style:
                        out.append(getattr(term, cell_style))
                    style = cell_style
                out.append(char)
            out.append(term.normal)
        return "".join(out)

    # Justification: region geometry is passed explicitly
    # pylint: disable=too-many-arguments,too-many-positional-arguments
    @staticmethod
    def _box(grid, top, left, width, height, title="", borders="all"):
        if width < 2 or height < 2:
            return
        right = left + width - 1
        bottom = top + height - 1
        for row in range(top, bottom + 1):
            grid[row][left] = ("│", None)
            grid[row][right] = ("│", None)
        if borders == "all":
            for col in range(left + 1, right):
                grid[top][col] = ("─", None)
                grid[bottom][col] = ("─", None)
            grid[top][left] = ("┌", None)
            grid[top][right] = ("┐", None)
            grid[bottom][left] = ("└", None)
            grid[bottom][right] = ("┘", None)
        for offset, char in enumerate(title[: max(0, width - 2)]):
            grid[top][left + 1 + offset] = (char, None)

    @staticmethod
    def _text(grid, row, col, text, style=None, limit=None):
        limit = len(grid[row]) if limit is None else limit
        for offset, char in enumerate(text):
            if col + offset >= limit:
                break
            grid[row][col + offset] = (char, style)

    def _draw_canvas(self, grid, snapshot, top, left, width, height):
        self._box(grid, top, left, width, height, title="Pong")
        cols, rows = width - 2, height - 2
        x0, y0, arena_w, arena_h = snapshot.arena
        x1, y1 = x0 + arena_w, y0 + arena_h

        def fill(box, color):
            x, y, w, h = box
            c0, c1 = scale(x, x0, x1, cols), scale(x + w, x0, x1, cols)
            # canvas y grows upwards
            r0, r1 = scale(y1 - y - h, 0, arena_h, rows), scale(
                y1 - y, 0, arena_h, rows
            )
            for row in range(r0, r1 + 1):
                for col in range(c0, c1 + 1):
                    grid[top + 1 + row][left + 1 + col] = ("█", color)

        fill(snapshot.player, "white")
        if snapshot.cpu is not None:
            fill(snapshot.cpu, "white")
        fill(snapshot.ball, snapshot.ball_color)

    def _draw_score(self, grid, snapshot, top, left, width, height):
        self._box(grid, top, left, width, height, title="Score")
        percent = snapshot.score * 100 // max(1, snapshot.win_score)
        self._gauge(
            grid,
            top + height // 2,
            left + 1,
            width - 2,
            percent,
            f"{snapshot.score}/{snapshot.win_score}",
            "white_on_red",
        )

    def _draw_level(self, grid, snapshot, top, left, width, height):
        self._box(
            grid,
            top,
            left,
            width,
            height,
            title=f"Level {snapshot.level}",
            borders="sides",
        )
        self._gauge(
            grid,
            top + height // 2,
            left + 1,
            width - 2,
            snapshot.bump,
            f"{snapshot.bump}%",
            "black_on_cyan",
        )

    def _gauge(self, grid, row, col, width, percent, label, fill_style):
        start = col + max(0, (width - len(label)) // 2)
        for offset, filled in enumerate(gauge_cells(percent, width)):
            char = " "
            if start <= col + offset < start + len(label):
                char = label[col + offset - start]
            grid[row][col + offset] = (char, fill_style if filled else None)

    def _draw_sparkline(self, grid, snapshot, top, left, width, height):
        self._box(grid, top, left, width, height, title="You Win!")
        style = "bright_yellow" if snapshot.blink else "yellow"
        lines = sparkline_rows(snapshot.telemetry, width - 2, height - 2)
        for offset, line in enumerate(lines):
            self._text(grid, top + 1 + offset, left + 1, line, style)

    def _draw_timer(self, grid, snapshot, top, left, width, height):
        self._box(grid, top, left, width, height, "Timer", borders="sides")
        self._text(
            grid,
            top + height // 2,
            left + 2,
            f"{snapshot.win_time}",
            "yellow",
            limit=left + width - 1,
        )

    # pylint: enable=too-many-arguments,too-many-positional-arguments
