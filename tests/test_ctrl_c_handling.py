"""Test that Ctrl-C reaches the editor as a key, not as an interrupt."""

import os
import signal
import unittest
from unittest.mock import Mock, patch

from emed.commands import SessionMode
from emed.config import EditorSettings
from emed.editor import Editor


def create_editor():
    terminal = Mock()
    terminal.screen_size = (80, 24)
    return Editor(settings=EditorSettings(), terminal=terminal)


class TestCtrlCHandling(unittest.TestCase):
    """SIGINT from the terminal is turned into a Ctrl-C key press."""

    def test_sigint_handler_writes_marker_to_pipe(self):
        editor = create_editor()
        try:
            editor._handle_sigint(signal.SIGINT, None)
            self.assertTrue(editor._ctrl_c_pressed)
            self.assertEqual(os.read(editor._resize_pipe_r, 1), b'C')
        finally:
            os.close(editor._resize_pipe_r)
            os.close(editor._resize_pipe_w)

    def test_chord_quit_via_sigint_asks_for_confirmation(self):
        """C-x then a SIGINT counts as one press of the quit chord."""
        editor = create_editor()
        editor.terminal.get_key.side_effect = ['x', '<Ctrl-x>', None]
        seen = {}

        def interrupt():
            editor._handle_sigint(signal.SIGINT, None)
            return ([editor._resize_pipe_r], [], [])

        def record_then_quit():
            seen['help'] = editor.state.help_message
            seen['mode'] = editor.session.mode
            editor.running = False
            return ([0], [], [])

        steps = iter([
            lambda: ([0], [], []),  # 'x' dirties the document
            lambda: ([0], [], []),  # C-x arms the chord
            interrupt,  # Ctrl-C completes C-x C-c
            record_then_quit,
        ])
        with patch('emed.editor.select.select', side_effect=lambda *a: next(steps)()):
            editor.run()

        self.assertEqual(editor.state.quit_count, 1)
        self.assertEqual(seen['help'],
                         "WARNING: Unsaved changes! Quit 2 more time(s), or C-x C-s to save.")
        self.assertEqual(seen['mode'], SessionMode.NORMAL)
        self.assertTrue(editor.state.is_dirty())

    def test_sigint_handler_restored_after_run(self):
        editor = create_editor()
        editor.terminal.get_key.return_value = '<Ctrl-q>'
        before = signal.getsignal(signal.SIGINT)
        with patch('emed.editor.select.select', return_value=([0], [], [])):
            editor.run()
        self.assertEqual(signal.getsignal(signal.SIGINT), before)


if __name__ == '__main__':
    unittest.main()
