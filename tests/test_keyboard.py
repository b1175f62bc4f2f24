"""Test translation of curtsies key names into editor keys."""

from unittest.mock import Mock

import pytest

from emed.keyboard import InputKey, KeyboardHandler, KeyType


@pytest.fixture
def handler():
    return KeyboardHandler(Mock())


@pytest.mark.parametrize("token, expected", [
    ('<LEFT>', InputKey(KeyType.LEFT)),
    ('<RIGHT>', InputKey(KeyType.RIGHT)),
    ('<UP>', InputKey(KeyType.UP)),
    ('<DOWN>', InputKey(KeyType.DOWN)),
    ('<BACKSPACE>', InputKey(KeyType.BACKSPACE)),
    ('<DELETE>', InputKey(KeyType.DELETE)),
    ('<SPACE>', InputKey.char(' ')),
    ('<TAB>', InputKey.char('\t')),
    ('<Ctrl-x>', InputKey.ctrl('x')),
    ('<Ctrl-j>', InputKey(KeyType.ENTER)),
    ('<Ctrl-m>', InputKey(KeyType.ENTER)),
    ('a', InputKey.char('a')),
    ('Z', InputKey.char('Z')),
    ('世', InputKey.char('世')),
    ('\n', InputKey(KeyType.ENTER)),
    ('\r', InputKey(KeyType.ENTER)),
    ('\t', InputKey.char('\t')),
    ('\x7f', InputKey(KeyType.BACKSPACE)),
    ('\x08', InputKey(KeyType.BACKSPACE)),
    ('\x18', InputKey.ctrl('x')),
    ('\x11', InputKey.ctrl('q')),
])
def test_parse_key(handler, token, expected):
    assert handler.parse_key(token) == expected


@pytest.mark.parametrize("token", ['<ESC>', '<F1>', '<Esc+a>', '\x1b', '<PAGEUP>', 'ab'])
def test_keys_outside_alphabet(handler, token):
    assert handler.parse_key(token) is None


def test_get_key_event_reads_from_terminal():
    terminal = Mock()
    terminal.get_key.return_value = '<UP>'
    handler = KeyboardHandler(terminal)
    assert handler.get_key_event(timeout=0) == InputKey(KeyType.UP)
    terminal.get_key.assert_called_once_with(0)


def test_get_key_event_timeout():
    terminal = Mock()
    terminal.get_key.return_value = None
    assert KeyboardHandler(terminal).get_key_event(timeout=0) is None


def test_input_key_helpers():
    assert InputKey.ctrl('X') == InputKey(KeyType.CTRL, 'x')
    assert InputKey.ctrl('g').is_ctrl('g')
    assert not InputKey.char('g').is_ctrl('g')
