"""Character-indexed text storage for the editor.

All offsets are counts of Unicode scalar values (Python ``str`` code points),
not bytes and not grapheme clusters. Combining marks and multi-codepoint
graphemes are not treated specially.
"""


class TextBuffer:
    """Mutable text with line-oriented accessors.

    Lines are separated by ``\\n``. A trailing separator starts a final empty
    line, so ``"ab\\n"`` has two lines (``"ab\\n"`` and ``""``) and the empty
    buffer has one empty line.
    """

    def __init__(self, text: str = ""):
        self._text = text
        self._line_starts: list[int] = []
        self._reindex()

    def _reindex(self):
        starts = [0]
        index = self._text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = self._text.find("\n", index + 1)
        self._line_starts = starts

    # --- Mutation ---

    def insert(self, index: int, text: str):
        """Splice ``text`` in before the character at ``index``."""
        if not 0 <= index <= len(self._text):
            raise IndexError(f"insert index {index} out of range")
        self._text = self._text[:index] + text + self._text[index:]
        self._reindex()

    def remove(self, start: int, end: int):
        """Remove characters in ``[start, end)``."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"remove range {start}..{end} out of range")
        self._text = self._text[:start] + self._text[end:]
        self._reindex()

    # --- Accessors ---

    def line_count(self) -> int:
        return len(self._line_starts)

    def last_line_index(self) -> int:
        return self.line_count() - 1

    def line_start(self, line_index: int) -> int:
        """Absolute character index of the first character of a line."""
        return self._line_starts[line_index]

    def line_text(self, line_index: int) -> str:
        """Text of a line, including its trailing newline if it has one."""
        start = self._line_starts[line_index]
        if line_index + 1 < len(self._line_starts):
            return self._text[start:self._line_starts[line_index + 1]]
        return self._text[start:]

    def line_length_excluding_trailing_newline(self, line_index: int) -> int:
        line = self.line_text(line_index)
        if line.endswith("\n"):
            return len(line) - 1
        return len(line)

    def line_chars(self, line_index: int) -> str:
        """Text of a line without its trailing newline."""
        line = self.line_text(line_index)
        return line[:-1] if line.endswith("\n") else line

    def total_char_count(self) -> int:
        return len(self._text)

    def absolute_index_of(self, cy: int, cx: int) -> int:
        return self._line_starts[cy] + cx

    @property
    def text(self) -> str:
        return self._text
