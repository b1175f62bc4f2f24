"""Document, cursor and viewport state for the editor."""

from typing import Iterator, Optional

from wcwidth import wcwidth

from .buffer import TextBuffer
from .constants import EditorConstants
from .lexer import FileType, Lexer, Token, TokenCache, TokenKind, lexer_for_file_type

ScreenSize = tuple[int, int]  # (columns, rows)


class EditorState:
    """The in-memory model of one open document.

    Owns the text buffer, the cursor (``cx`` in characters within the line,
    ``cy`` as a line index), the scroll offsets, the token cache and the
    session metadata shown in the footer. Every cursor-affecting operation
    finishes with ``ensure_cursor_visible`` and every content mutation drops
    the token cache.
    """

    def __init__(self, screen_size: ScreenSize = (80, 24),
                 tab_width: int = EditorConstants.DEFAULT_TAB_WIDTH):
        self.buffer = TextBuffer()
        self.cx = 0
        self.cy = 0
        self.row_offset = 0
        self.col_offset = 0
        self.screen_size = screen_size
        self.tab_width = tab_width
        self.filename: Optional[str] = None
        self.file_type = FileType.UNKNOWN
        self.lexer: Lexer = lexer_for_file_type(self.file_type)
        self.token_cache = TokenCache()
        self.dirty = False
        self.quit_count = 0
        self.prompt_buffer: Optional[str] = None
        self.help_message = EditorConstants.DEFAULT_HELP_MESSAGE

    # --- Document lifecycle ---

    def load_document(self, contents: str, filename: Optional[str] = None):
        """Replace the document wholesale and reset cursor, scroll and session state."""
        self.buffer = TextBuffer(contents)
        self.cx = 0
        self.cy = 0
        self.row_offset = 0
        self.col_offset = 0
        self.set_filename(filename)
        self.dirty = False
        self.quit_count = 0
        self.prompt_buffer = None
        self.help_message = EditorConstants.DEFAULT_HELP_MESSAGE
        self.ensure_cursor_visible()

    def set_filename(self, filename: Optional[str]):
        """Record the filename and re-select the lexer for its type."""
        self.filename = filename
        self.file_type = FileType.from_filename(filename)
        self.lexer = lexer_for_file_type(self.file_type)
        self.token_cache.invalidate()

    def save_to_string(self) -> str:
        return self.buffer.text

    @property
    def display_filename(self) -> str:
        return self.filename or EditorConstants.NO_FILENAME

    def is_dirty(self) -> bool:
        return self.dirty

    def clear_dirty(self):
        """Mark the document saved. Also abandons any pending quit confirmation."""
        self.dirty = False
        self.quit_count = 0

    def reset_quit_count(self):
        self.quit_count = 0

    def _content_changed(self):
        self.dirty = True
        self.token_cache.invalidate()

    # --- Buffer accessors ---

    def line_count(self) -> int:
        return self.buffer.line_count()

    def index_of_last_line(self) -> int:
        return self.buffer.last_line_index()

    def line_as_string(self, line_index: int) -> str:
        return self.buffer.line_text(line_index)

    def line_len(self, line_index: int) -> int:
        return self.buffer.line_length_excluding_trailing_newline(line_index)

    def current_line_len(self) -> int:
        return self.line_len(self.cy)

    def char_count(self) -> int:
        return self.buffer.total_char_count()

    def _cursor_index(self) -> int:
        return self.buffer.absolute_index_of(self.cy, self.cx)

    # --- Editing ---

    def insert_char(self, c: str):
        if c == "\n":
            self.insert_newline()
            return
        self.buffer.insert(self._cursor_index(), c)
        self.cx += 1
        self._content_changed()
        self.ensure_cursor_visible()

    def insert_newline(self):
        self.buffer.insert(self._cursor_index(), "\n")
        self.cy += 1
        self.cx = 0
        self._content_changed()
        self.ensure_cursor_visible()

    def delete_char(self) -> bool:
        """Delete the character under the cursor.

        At the end of a line this removes the separator and joins the next
        line onto this one. At the end of the buffer, or at the end of the
        last line, nothing happens. Returns True if the text changed.
        """
        index = self._cursor_index()
        if index >= self.buffer.total_char_count():
            return False
        if self.cx == self.current_line_len() and self.cy >= self.index_of_last_line():
            return False
        self.buffer.remove(index, index + 1)
        self._content_changed()
        self.ensure_cursor_visible()
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor, merging lines at column 0."""
        if self.cx > 0:
            self.cx -= 1
            return self.delete_char()
        if self.cy > 0:
            self.cy -= 1
            self.cx = self.current_line_len()
            return self.delete_char()
        return False

    # --- Cursor movement ---

    def cursor_pos(self) -> tuple[int, int]:
        return (self.cx, self.cy)

    def set_cursor(self, cx: int, cy: int):
        """Move the cursor directly, clamped into the document."""
        self.cy = max(0, min(cy, self.index_of_last_line()))
        self.cx = max(0, min(cx, self.current_line_len()))
        self.ensure_cursor_visible()

    def cursor_left(self):
        if self.cx > 0:
            self.cx -= 1
        elif self.cy > 0:
            self.cy -= 1
            self.cx = self.current_line_len()
        self.ensure_cursor_visible()

    def cursor_right(self):
        if self.cx < self.current_line_len():
            self.cx += 1
        elif self.cy < self.index_of_last_line():
            self.cy += 1
            self.cx = 0
        self.ensure_cursor_visible()

    def cursor_up(self):
        if self.cy > 0:
            self.cy -= 1
            self.cx = min(self.cx, self.current_line_len())
        self.ensure_cursor_visible()

    def cursor_down(self):
        if self.cy < self.index_of_last_line():
            self.cy += 1
            self.cx = min(self.cx, self.current_line_len())
        self.ensure_cursor_visible()

    # --- Display columns ---

    def display_width(self, ch: str) -> int:
        """Screen columns taken by one character."""
        if ch == "\t":
            return self.tab_width
        if ch in ("\n", "\r"):
            return 0
        width = wcwidth(ch)
        return width if width > 0 else 0

    def cx_to_screen_col(self, line_index: int, cx: int) -> int:
        line = self.buffer.line_text(line_index)
        return sum(self.display_width(ch) for ch in line[:cx])

    def display_width_of_line(self, line_index: int) -> int:
        return self.cx_to_screen_col(line_index, self.line_len(line_index))

    # --- Viewport ---

    def set_screen_size(self, screen_size: ScreenSize):
        self.screen_size = screen_size
        self.ensure_cursor_visible()

    def text_area_height(self) -> int:
        _cols, rows = self.screen_size
        return max(0, rows - EditorConstants.FOOTER_ROWS)

    def text_area_width(self) -> int:
        cols, _rows = self.screen_size
        return max(0, cols)

    def ensure_cursor_visible(self):
        """Scroll so that the cursor's line and display column are on screen."""
        height = self.text_area_height()
        if height == 0:
            self.row_offset = self.cy
        elif self.cy < self.row_offset:
            self.row_offset = self.cy
        elif self.cy >= self.row_offset + height:
            self.row_offset = self.cy + 1 - height

        width = self.text_area_width()
        screen_col = self.cx_to_screen_col(self.cy, self.cx)
        if width == 0:
            self.col_offset = screen_col
        elif screen_col < self.col_offset:
            self.col_offset = screen_col
        elif screen_col >= self.col_offset + width:
            self.col_offset = screen_col + 1 - width

    def _visible_chars(self, line_index: int, max_cols: int) -> Iterator[tuple[int, str]]:
        """Yield ``(char_index, rendered_text)`` for the on-screen part of a line.

        Characters left of ``col_offset`` are skipped; a wide character that
        straddles ``col_offset`` is skipped too, leaving a ragged left edge.
        A tab straddling it shows its remaining columns so text stays aligned
        with the cursor. A character that would only partly fit at the right
        edge is dropped. Tabs render as spaces.
        """
        col = 0
        used = 0
        for i, ch in enumerate(self.buffer.line_chars(line_index)):
            width = self.display_width(ch)
            if col < self.col_offset:
                col += width
                if ch == "\t" and col > self.col_offset:
                    remaining = min(col - self.col_offset, max_cols - used)
                    if remaining > 0:
                        used += remaining
                        yield i, " " * remaining
                continue
            if used + width > max_cols:
                break
            used += width
            col += width
            yield i, " " * width if ch == "\t" else ch

    def get_slice(self, line_index: int, max_cols: int) -> str:
        return "".join(text for _i, text in self._visible_chars(line_index, max_cols))

    def get_styled_slice(self, line_index: int, max_cols: int) -> list[tuple[str, TokenKind]]:
        """Like ``get_slice`` but split into runs of the same token kind."""
        tokens = self.tokens_for_line(line_index)
        runs: list[tuple[str, TokenKind]] = []
        token_pos = 0
        for i, text in self._visible_chars(line_index, max_cols):
            while token_pos < len(tokens) and tokens[token_pos].end <= i:
                token_pos += 1
            if token_pos < len(tokens) and tokens[token_pos].start <= i:
                kind = tokens[token_pos].kind
            else:
                kind = TokenKind.NORMAL
            if runs and runs[-1][1] == kind:
                runs[-1] = (runs[-1][0] + text, kind)
            else:
                runs.append((text, kind))
        return runs

    def cursor_screen_position(self) -> tuple[int, int]:
        """Cursor position relative to the top-left of the text area, as (x, y)."""
        screen_col = self.cx_to_screen_col(self.cy, self.cx)
        return (max(0, screen_col - self.col_offset), max(0, self.cy - self.row_offset))

    # --- Syntax tokens ---

    def tokens_for_line(self, line_index: int) -> list[Token]:
        return self.token_cache.tokens_for_line(self.buffer, self.lexer, line_index)

    # --- Footer strings ---

    def status_line(self) -> str:
        left = (f"{self.file_type.display_name}: {self.line_count()} lines, "
                f"{self.char_count()} chars")
        if self.dirty:
            left += " (modified)"
        if self.quit_count > 0:
            remaining = EditorConstants.QUIT_CONFIRM_COUNT - self.quit_count
            left += f" ({remaining} more quit(s) to discard)"
        return f"{left}    (col: {self.cx + 1}, row: {self.cy + 1})"

    def help_line(self) -> str:
        if self.prompt_buffer is not None:
            return EditorConstants.SAVE_PROMPT.format(self.prompt_buffer)
        return self.help_message
