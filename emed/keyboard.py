"""Keyboard input: the abstract key alphabet and curtsies-token translation."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Kinds of abstract input keys."""
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    CTRL = "ctrl"


@dataclass(frozen=True)
class InputKey:
    """One abstract key press.

    ``value`` is the character for CHAR keys and the lowercase letter for
    CTRL keys; it is empty for the named keys.
    """
    key_type: KeyType
    value: str = ""

    @classmethod
    def char(cls, c: str) -> "InputKey":
        return cls(KeyType.CHAR, c)

    @classmethod
    def ctrl(cls, c: str) -> "InputKey":
        return cls(KeyType.CTRL, c.lower())

    def is_ctrl(self, c: str) -> bool:
        return self.key_type == KeyType.CTRL and self.value == c


_SPECIALS = {
    'left': KeyType.LEFT,
    'right': KeyType.RIGHT,
    'up': KeyType.UP,
    'down': KeyType.DOWN,
    'enter': KeyType.ENTER,
    'return': KeyType.ENTER,
    'backspace': KeyType.BACKSPACE,
    'delete': KeyType.DELETE,
    'del': KeyType.DELETE,
}


class KeyboardHandler:
    """Translates curtsies key names into ``InputKey`` values."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[InputKey]:
        """Read the next key and translate it; None for untranslatable keys."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> Optional[InputKey]:
        """Parse a curtsies key token into an InputKey.

        Args:
            key: Key token such as ``'a'``, ``'<LEFT>'`` or ``'<Ctrl-x>'``

        Returns:
            The InputKey, or None for keys outside the editor's alphabet
            (escape, function keys, Alt combinations)
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<SPACE>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            lower = key_str[1:-1].lower().replace('+', '-')
            parts = lower.split('-')
            base = parts[-1]
            mods = set(parts[:-1])

            if not mods:
                if base in ('space', 'spacebar', 'spc'):
                    return InputKey.char(' ')
                if base == 'tab':
                    return InputKey.char('\t')
                if base in _SPECIALS:
                    return InputKey(_SPECIALS[base])
                return None
            if mods == {'ctrl'} and len(base) == 1:
                # Terminals deliver Enter as Ctrl-J or Ctrl-M
                if base in ('j', 'm'):
                    return InputKey(KeyType.ENTER)
                return InputKey.ctrl(base)
            return None

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return InputKey(KeyType.ENTER)
            if o == 9:
                return InputKey.char('\t')
            if o in (8, 127):
                return InputKey(KeyType.BACKSPACE)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return InputKey.ctrl(chr(ord('a') + o - 1))
            if o < 32:
                return None
            return InputKey.char(key_str)

        return None
