# TIMESHEET/editor.py
import logging
import os
import shlex
import subprocess
import tempfile
from typing import Iterable, Optional

from reti.STORAGE.errors import EditorError
from reti.STORAGE.model import Day

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"

EDIT_TEMPLATE = (
    "# Lines starting with '#' will be ignored\n"
    "# Default date is today!\n"
    "# Date         Parts w/o and w/ factor (0.5)  Comment\n"
    "# 2016-04-25   08:00-12:00  13:00-17:00-0.5   # comment\n"
)


def build_edit_text(days: Iterable[Day], today: Optional[Day] = None) -> str:
    """
    Legacy lines for `days`.  With no days, today's line is offered
    instead, preceded by a short help comment when today is empty.
    """
    lines = [d.as_legacy() for d in days]
    if lines:
        return "\n".join(lines)
    today = today or Day.today()
    if today.parts:
        return today.as_legacy()
    return EDIT_TEMPLATE + today.as_legacy() + " "


def resolve_editor(editor: Optional[str] = None) -> str:
    return editor or os.environ.get("EDITOR") or DEFAULT_EDITOR


def run_editor(text: str, editor: Optional[str] = None) -> str:
    """
    Opens `text` in an external editor and returns the edited content.

    Blocks until the editor exits.  Raises EditorError when the editor
    cannot be started, exits with a non-zero status, or the file cannot
    be read back.
    """
    command = shlex.split(resolve_editor(editor))
    with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", prefix="reti-", suffix=".txt",
            delete=False) as f:
        f.write(text + "\n")
        path = f.name

    try:
        logger.debug("Running editor: %s %s", command, path)
        try:
            status = subprocess.run(command + [path]).returncode
        except OSError as e:
            raise EditorError(f"Unable to start editor '{command[0]}': {e}") from e
        if status != 0:
            raise EditorError(f"Editor exited with status {status}.")
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise EditorError(f"Unable to read edited file: {e}") from e
    finally:
        os.remove(path)
