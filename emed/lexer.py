"""Per-line syntax tokenization and the token cache."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import TextBuffer


class TokenKind(Enum):
    """Language-agnostic token categories shared by every lexer."""
    NORMAL = "normal"
    KEYWORD = "keyword"
    TYPE = "type"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """One span of a line. ``start`` and ``length`` count characters."""
    start: int
    length: int
    kind: TokenKind

    @property
    def end(self) -> int:
        return self.start + self.length


class FileType(Enum):
    """File type inferred from the filename extension."""
    UNKNOWN = "unknown"
    TEXT = "text"
    RUST = "rust"
    C = "c"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_filename(cls, filename: Optional[str]) -> "FileType":
        """Infer the file type from an extension.

        ``.rs`` is Rust, ``.c``/``.h`` is C, any other extension is plain
        text, and no filename or no extension is unknown.
        """
        if not filename:
            return cls.UNKNOWN
        ext = os.path.splitext(os.path.basename(filename))[1]
        if not ext:
            return cls.UNKNOWN
        return _EXTENSIONS.get(ext, cls.TEXT)


_DISPLAY_NAMES = {
    FileType.UNKNOWN: "unknown",
    FileType.TEXT: "text",
    FileType.RUST: "Rust file",
    FileType.C: "C file",
}

_EXTENSIONS = {
    ".rs": FileType.RUST,
    ".c": FileType.C,
    ".h": FileType.C,
}


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_word_char(ch: str) -> bool:
    return ch == '_' or (ch.isascii() and ch.isalnum())


def is_number_start(chars: str, i: int) -> bool:
    """Return True if ``chars[i]`` starts a standalone number literal.

    A digit directly after a letter, digit or underscore belongs to an
    identifier (the "16" in "u16"), not to a number.
    """
    return _is_digit(chars[i]) and (i == 0 or not _is_word_char(chars[i - 1]))


def tokenize_numbers(line: str) -> list[Token]:
    """Split a line into Number runs and Normal runs that tile it exactly."""
    tokens: list[Token] = []
    length = len(line)
    i = 0
    while i < length:
        start = i
        if is_number_start(line, i):
            while i < length and _is_digit(line[i]):
                i += 1
            tokens.append(Token(start, i - start, TokenKind.NUMBER))
        else:
            i += 1
            while i < length and not is_number_start(line, i):
                i += 1
            tokens.append(Token(start, i - start, TokenKind.NORMAL))
    return tokens


class Lexer(ABC):
    """Turns one line of text into tokens.

    ``in_comment`` is the carry state for constructs spanning lines
    (block comments). The returned flag is the carry for the next line.
    """

    @abstractmethod
    def tokenize_line(self, line: str, in_comment: bool) -> tuple[list[Token], bool]:
        pass


class PlainLexer(Lexer):
    def tokenize_line(self, line, in_comment):
        return tokenize_numbers(line), False


class RustLexer(Lexer):
    # Numbers only for now; keywords, strings and comments would refine
    # the Normal spans produced here.
    def tokenize_line(self, line, in_comment):
        return tokenize_numbers(line), False


_LEXERS: dict[FileType, Lexer] = {
    FileType.RUST: RustLexer(),
}
_DEFAULT_LEXER = PlainLexer()


def lexer_for_file_type(file_type: FileType) -> Lexer:
    """Pick the lexer for a file type; unrecognized types get the plain lexer."""
    return _LEXERS.get(file_type, _DEFAULT_LEXER)


class TokenCache:
    """Lazily computed tokens, one slot per line.

    Any buffer mutation must call ``invalidate``; the whole cache is dropped
    because a single edit can shift the index of every following line.

    Lines are tokenized independently with carry ``False``, so a block
    comment spanning lines is not highlighted as one.
    """

    def __init__(self):
        self._lines: dict[int, list[Token]] = {}

    def invalidate(self):
        self._lines.clear()

    def get(self, line_index: int) -> Optional[list[Token]]:
        return self._lines.get(line_index)

    def __contains__(self, line_index: int) -> bool:
        return line_index in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def tokens_for_line(self, buffer: "TextBuffer", lexer: Lexer, line_index: int) -> list[Token]:
        tokens = self._lines.get(line_index)
        if tokens is None:
            tokens, _carry = lexer.tokenize_line(buffer.line_chars(line_index), False)
            self._lines[line_index] = tokens
        return tokens
