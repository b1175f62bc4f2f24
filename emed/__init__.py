"""emed - A small terminal text editor core."""

from .buffer import TextBuffer
from .commands import ApplyResult, KeyDispatcher, Session, SessionMode
from .keyboard import InputKey, KeyType
from .lexer import FileType, Token, TokenCache, TokenKind, lexer_for_file_type
from .model import EditorState

__all__ = [
    'ApplyResult',
    'EditorState',
    'FileType',
    'InputKey',
    'KeyDispatcher',
    'KeyType',
    'Session',
    'SessionMode',
    'TextBuffer',
    'Token',
    'TokenCache',
    'TokenKind',
    'lexer_for_file_type',
]
