"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional, TYPE_CHECKING

import blessed
from wcwidth import wcwidth

from .constants import EditorConstants
from .theme import Theme

if TYPE_CHECKING:
    from .model import EditorState


def text_width(s: str) -> int:
    """Screen columns taken by ``s``; control characters count as zero."""
    return sum(max(0, wcwidth(ch)) for ch in s)


def fit_to_width(s: str, width: int) -> str:
    """Truncate or pad ``s`` with spaces to exactly ``width`` screen columns.

    A wide character that would only partly fit is dropped.
    """
    out = []
    used = 0
    for ch in s:
        w = max(0, wcwidth(ch))
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out) + " " * (width - used)


def prompt_cursor_column(help_line: str, cols: int) -> int:
    """Column just after the prompt text, kept on screen."""
    return min(text_width(help_line), max(0, cols - 1))


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, theme: Optional[Theme] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.theme = theme or Theme.from_name("pink")
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')  # type: ignore
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.clear, end='')
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def _fmt(self, fg: str, bg: str = "") -> str:
        return str(getattr(self.term, self.theme.style(fg, bg)))

    def draw_title(self, title: str):
        """Show the editor title centred on an otherwise blank screen."""
        x = max(0, (self.width - text_width(title)) // 2)
        y = max(0, self.height // 2 - 2)
        print(self._fmt(self.theme.fg) + self.term.clear, end='')
        print(self.term.move(y, x) + self.term.bold + title + self.term.normal, end='', flush=True)

    def render_line(self, state: 'EditorState', line_index: int) -> str:
        """Compose one text-area row: coloured visible slice or a tilde past the end."""
        width = state.text_area_width()
        if line_index > state.index_of_last_line():
            return self._fmt(self.theme.tilde_fg) + EditorConstants.TILDE[:width]
        out = []
        for text, kind in state.get_styled_slice(line_index, width):
            out.append(self._fmt(self.theme.color_for(kind)) + text)
        out.append(self._fmt(self.theme.fg))
        return ''.join(out)

    def draw_frame(self, state: 'EditorState'):
        """Draw a complete frame: text area, status bar, help line and cursor."""
        cols, rows = state.screen_size
        print(self.term.hide_cursor, end='')
        for y in range(state.text_area_height()):
            line = self.render_line(state, state.row_offset + y)
            print(self.term.move(y, 0) + self._fmt(self.theme.fg) + self.term.clear_eol + line, end='')

        if rows >= EditorConstants.FOOTER_ROWS:
            status_y = rows - 2
            help_y = rows - 1
            print(self.term.move(status_y, 0)
                  + self._fmt(self.theme.status_fg, self.theme.status_bg) + self.term.bold
                  + fit_to_width(state.status_line(), cols) + self.term.normal, end='')
            print(self.term.move(help_y, 0) + self._fmt(self.theme.fg)
                  + fit_to_width(state.help_line(), cols), end='')

        # Position cursor: at the end of the prompt while prompting, else in the text
        if state.prompt_buffer is not None and rows >= 1:
            print(self.term.move(rows - 1, prompt_cursor_column(state.help_line(), cols)), end='')
        else:
            x, y = state.cursor_screen_position()
            print(self.term.move(y, x), end='')
        print(self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including the footer."""
        return self.term.height

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.term.width, self.term.height)
