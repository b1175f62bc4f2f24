"""emed CLI entry point.

Allows running via `python -m emed` and provides the console script
defined in `pyproject.toml`.

Set EMED_LOG_FILE to write debug logs to a file; nothing is logged to the
terminal, which belongs to the editor UI.
"""

from __future__ import annotations

import logging
import os
import sys

from .version import get_version_string

LOG_FILE_ENV = "EMED_LOG_FILE"


def configure_logging() -> None:
    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.getLogger("emed").addHandler(logging.NullHandler())
        logging.getLogger("emed").propagate = False


def main() -> None:
    # Very small arg parsing: version flag and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        try:
            editor.load_file(args[0])
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error loading file: {e}", file=sys.stderr)
            sys.exit(1)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
