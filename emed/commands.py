"""Command pattern implementation and the key-driven session state machine."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import InputKey, KeyType
from .storage import describe_save_error, write_file_atomic

if TYPE_CHECKING:
    from .model import EditorState

logger = logging.getLogger(__name__)


class ApplyResult(Enum):
    """Outcome of applying one command."""
    CONTINUE = "continue"  # Nothing in the document changed
    CHANGED = "changed"  # Document content changed
    QUIT = "quit"  # The session should terminate


class SessionMode(Enum):
    """Input states of a session."""
    NORMAL = "normal"
    CHORD_ARMED = "chord_armed"  # Previous key was the C-x prefix
    PROMPT_INPUT = "prompt_input"  # Typing a filename for save-as


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, session: 'Session') -> ApplyResult:
        """Execute the command.

        Args:
            session: Session whose state the command mutates

        Returns:
            ApplyResult.CHANGED if the document was modified
        """
        pass


@dataclass(frozen=True)
class NoOpCommand(EditorCommand):
    def execute(self, session):
        return ApplyResult.CONTINUE


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, session: 'Session') -> ApplyResult:
        """Movement commands don't modify the document."""
        self._move(session.state)
        return ApplyResult.CONTINUE

    @abstractmethod
    def _move(self, state: 'EditorState'):
        """Perform the movement."""
        pass


@dataclass(frozen=True)
class MoveLeftCommand(MovementCommand):
    def _move(self, state):
        state.cursor_left()


@dataclass(frozen=True)
class MoveRightCommand(MovementCommand):
    def _move(self, state):
        state.cursor_right()


@dataclass(frozen=True)
class MoveUpCommand(MovementCommand):
    def _move(self, state):
        state.cursor_up()


@dataclass(frozen=True)
class MoveDownCommand(MovementCommand):
    def _move(self, state):
        state.cursor_down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, session: 'Session') -> ApplyResult:
        if self._edit(session.state):
            return ApplyResult.CHANGED
        return ApplyResult.CONTINUE

    @abstractmethod
    def _edit(self, state: 'EditorState') -> bool:
        """Perform the edit; return True if the text changed."""
        pass


@dataclass(frozen=True)
class InsertCharCommand(EditCommand):
    char: str

    def _edit(self, state):
        # Filter out control characters
        if ord(self.char[0]) < 32 and self.char != '\t':
            return False
        state.insert_char(self.char)
        return True


@dataclass(frozen=True)
class InsertNewlineCommand(EditCommand):
    def _edit(self, state):
        state.insert_newline()
        return True


@dataclass(frozen=True)
class DeleteCharCommand(EditCommand):
    def _edit(self, state):
        return state.delete_char()


@dataclass(frozen=True)
class BackspaceCommand(EditCommand):
    def _edit(self, state):
        return state.backspace()


class SystemCommand(EditorCommand):
    """Base class for session-level commands like save and quit."""

    def execute(self, session: 'Session') -> ApplyResult:
        self._execute_system(session)
        return ApplyResult.CONTINUE

    @abstractmethod
    def _execute_system(self, session: 'Session'):
        """Perform the system action."""
        pass


@dataclass(frozen=True)
class QuitCommand(EditorCommand):
    """Quit, asking for confirmation by repeated presses if the document is dirty."""

    def execute(self, session):
        state = session.state
        if not state.is_dirty():
            return ApplyResult.QUIT
        state.quit_count += 1
        if state.quit_count >= EditorConstants.QUIT_CONFIRM_COUNT:
            logger.info("Quitting with unsaved changes")
            return ApplyResult.QUIT
        remaining = EditorConstants.QUIT_CONFIRM_COUNT - state.quit_count
        state.help_message = EditorConstants.QUIT_WARNING_MESSAGE.format(remaining)
        return ApplyResult.CONTINUE


@dataclass(frozen=True)
class SaveFileCommand(SystemCommand):
    def _execute_system(self, session):
        if session.state.filename:
            session.save(session.state.filename)
        else:
            session.enter_prompt()


@dataclass(frozen=True)
class PromptSaveAsCommand(SystemCommand):
    def _execute_system(self, session):
        session.enter_prompt()


KeySpec = Tuple[KeyType, str]


def _key_spec(key: InputKey) -> KeySpec:
    return (key.key_type, key.value)


class KeyDispatcher:
    """Translates keys into commands, including the two-key C-x chords.

    Ctrl-Q always quits and Ctrl-X always arms the chord prefix. While the
    prefix is armed the next key is looked up in the chord table (unknown
    completions are NoOp) and the prefix is cleared either way.
    """

    QUIT_KEY = InputKey.ctrl('q')
    CHORD_PREFIX = InputKey.ctrl('x')

    def __init__(self):
        self._commands: Dict[KeySpec, EditorCommand] = {}
        self._chords: Dict[KeySpec, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register(InputKey(KeyType.LEFT), MoveLeftCommand())
        self.register(InputKey(KeyType.RIGHT), MoveRightCommand())
        self.register(InputKey(KeyType.UP), MoveUpCommand())
        self.register(InputKey(KeyType.DOWN), MoveDownCommand())

        # Editing commands
        self.register(InputKey(KeyType.ENTER), InsertNewlineCommand())
        self.register(InputKey(KeyType.BACKSPACE), BackspaceCommand())
        self.register(InputKey(KeyType.DELETE), DeleteCharCommand())

        # C-x chords
        self.register_chord(InputKey.ctrl('c'), QuitCommand())
        self.register_chord(InputKey.ctrl('s'), SaveFileCommand())

    def register(self, key: InputKey, command: EditorCommand):
        """Register a command for a single key."""
        self._commands[_key_spec(key)] = command

    def register_chord(self, key: InputKey, command: EditorCommand):
        """Register a command for the key that completes a C-x chord."""
        self._chords[_key_spec(key)] = command

    def command_from_key(self, key: InputKey, mode: SessionMode) -> Tuple[EditorCommand, SessionMode]:
        """Translate one key given the current mode.

        Returns:
            The command to apply and the mode to continue in
        """
        if mode == SessionMode.PROMPT_INPUT:
            raise ValueError("prompt input keys are not dispatched as commands")

        if key == self.QUIT_KEY:
            return QuitCommand(), SessionMode.NORMAL

        if key == self.CHORD_PREFIX:
            return NoOpCommand(), SessionMode.CHORD_ARMED

        if mode == SessionMode.CHORD_ARMED:
            return self._chords.get(_key_spec(key), NoOpCommand()), SessionMode.NORMAL

        command = self._commands.get(_key_spec(key))
        if command is not None:
            return command, SessionMode.NORMAL

        # Handle regular text input
        if key.key_type == KeyType.CHAR:
            return InsertCharCommand(key.value), SessionMode.NORMAL

        return NoOpCommand(), SessionMode.NORMAL


Writer = Callable[[str, str], Optional[int]]


class Session:
    """Drives an EditorState from abstract keys.

    Holds the input mode (normal, chord armed, or prompting for a filename)
    and applies commands, including the dirty-quit confirmation and saving
    through ``writer`` (called as ``writer(filename, content)``, raising
    ``OSError`` on failure).
    """

    def __init__(self, state: 'EditorState', writer: Writer = write_file_atomic,
                 dispatcher: Optional[KeyDispatcher] = None):
        self.state = state
        self.writer = writer
        self.dispatcher = dispatcher or KeyDispatcher()
        self._mode = SessionMode.NORMAL

    @property
    def mode(self) -> SessionMode:
        return self._mode

    def load_document(self, contents: str, filename: Optional[str] = None):
        self.state.load_document(contents, filename)
        self._mode = SessionMode.NORMAL
        logger.debug(f"Loaded {self.state.display_filename} ({self.state.file_type.display_name})")

    def handle_key(self, key: InputKey) -> ApplyResult:
        """Apply one key press to completion."""
        if self._mode == SessionMode.PROMPT_INPUT:
            return self._handle_prompt_key(key)
        command, self._mode = self.dispatcher.command_from_key(key, self._mode)
        return self.apply_command(command)

    def apply_command(self, command: EditorCommand) -> ApplyResult:
        # A pending quit confirmation is abandoned by any real command
        if not isinstance(command, (QuitCommand, NoOpCommand)) and self.state.quit_count > 0:
            self.state.reset_quit_count()
            self.state.help_message = EditorConstants.DEFAULT_HELP_MESSAGE
        return command.execute(self)

    def enter_prompt(self):
        self._mode = SessionMode.PROMPT_INPUT
        self.state.prompt_buffer = ""

    def _leave_prompt(self) -> str:
        text = self.state.prompt_buffer or ""
        self.state.prompt_buffer = None
        self._mode = SessionMode.NORMAL
        return text

    def save(self, filename: str) -> bool:
        """Persist the document under ``filename``.

        On failure the dirty flag is left alone and the help line shows
        the error.

        Returns:
            True if the save succeeded
        """
        content = self.state.save_to_string()
        try:
            self.writer(filename, content)
        except OSError as e:
            logger.warning(f"Could not save {filename}: {e}")
            self.state.help_message = describe_save_error(filename, e)
            return False
        self.state.clear_dirty()
        self.state.help_message = EditorConstants.SAVED_MESSAGE.format(
            len(content.encode('utf-8')), filename)
        return True

    def _handle_prompt_key(self, key: InputKey) -> ApplyResult:
        """Handle keypress during the save-as prompt."""
        if key.key_type == KeyType.ENTER:
            filename = self._leave_prompt().strip()
            if not filename:
                self.state.help_message = EditorConstants.SAVE_CANCELLED_MESSAGE
                return ApplyResult.CONTINUE
            if self.save(filename):
                if filename != self.state.filename:
                    self.state.set_filename(filename)
            return ApplyResult.CONTINUE
        if key.is_ctrl('g'):
            self._leave_prompt()
            self.state.help_message = EditorConstants.SAVE_CANCELLED_MESSAGE
        elif key.key_type == KeyType.CHAR:
            if ord(key.value[0]) >= 32:
                self.state.prompt_buffer += key.value
        elif key.key_type == KeyType.BACKSPACE:
            self.state.prompt_buffer = self.state.prompt_buffer[:-1]
        return ApplyResult.CONTINUE
