"""Constants and configuration for the emed editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    VERSION = "0.0.1"

    # Layout
    DEFAULT_TAB_WIDTH = 4
    FOOTER_ROWS = 2  # Status bar + help line
    TILDE = "~"  # Marker for rows past the end of the buffer
    NO_FILENAME = "-"

    # Quit confirmation
    QUIT_CONFIRM_COUNT = 3

    # Help line messages
    DEFAULT_HELP_MESSAGE = "HELP: C-x C-s to Save, C-x C-c to Quit"
    QUIT_WARNING_MESSAGE = "WARNING: Unsaved changes! Quit {} more time(s), or C-x C-s to save."
    SAVE_PROMPT = "Save as: {}"
    SAVE_CANCELLED_MESSAGE = "Save cancelled"
    SAVED_MESSAGE = "{} bytes written to {}"

    # Terminal
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe on SIGINT (Ctrl-C)
    TITLE = "EMED editor version {}"
