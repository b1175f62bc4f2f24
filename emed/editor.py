"""Main editor controller: the read, translate, apply, redraw loop."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import ApplyResult, Session
from .config import EditorSettings, load_settings_file
from .constants import EditorConstants
from .keyboard import InputKey, KeyboardHandler
from .model import EditorState
from .storage import read_file
from .terminal import TerminalInterface
from .theme import Theme

logger = logging.getLogger(__name__)


class Editor:
    """Terminal text editor application controller."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or load_settings_file()
        self.terminal = terminal or TerminalInterface(theme=Theme.from_name(self.settings.theme))
        self.keyboard = KeyboardHandler(self.terminal)
        self.state = EditorState(self.terminal.screen_size, tab_width=self.settings.tab_width)
        self.session = Session(self.state)
        self.running = False
        # Set by the SIGINT handler; the loop turns it into a Ctrl-C key
        self._ctrl_c_pressed = False
        # Create pipe for resize and interrupt signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty document that will be saved under
        ``filename``.

        Args:
            filename: Path to file to load

        Raises:
            OSError, UnicodeDecodeError: If an existing file cannot be read
        """
        try:
            contents = read_file(filename)
        except FileNotFoundError:
            logger.info(f"{filename} does not exist, starting a new document")
            contents = ""
        self.session.load_document(contents, filename)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as the Ctrl-C key."""
        del signum, frame  # Unused
        # The terminal stays in cbreak mode, so Ctrl-C arrives as a signal
        self._ctrl_c_pressed = True
        os.write(self._resize_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def handle_key_event(self, key: Optional[InputKey]) -> bool:
        """Apply one translated key.

        Returns:
            True if there was a key to apply
        """
        if key is None:
            return False
        if self.session.handle_key(key) == ApplyResult.QUIT:
            self.running = False
        return True

    def _handle_pipe(self):
        """Drain the signal pipe and act on what it reported."""
        os.read(self._resize_pipe_r, 1024)
        if self._ctrl_c_pressed:
            self._ctrl_c_pressed = False
            self.handle_key_event(InputKey.ctrl('c'))
        self.state.set_screen_size(self.terminal.screen_size)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        old_settings = None
        try:
            # Disable IXON/IXOFF so Ctrl-S and Ctrl-Q reach the editor
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError) as e:
                logger.debug(f"Could not disable flow control: {e}")

            self.terminal.draw_title(EditorConstants.TITLE.format(EditorConstants.VERSION))
            self.state.set_screen_size(self.terminal.screen_size)
            self.terminal.draw_frame(self.state)

            while self.running:
                ready, _, _ = select.select([sys.stdin, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    self._handle_pipe()
                    if self.running:
                        self.terminal.draw_frame(self.state)
                    continue
                key = self.keyboard.get_key_event(timeout=0)
                if self.handle_key_event(key) and self.running:
                    self.terminal.draw_frame(self.state)
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.debug(f"Could not restore terminal settings: {e}")
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
