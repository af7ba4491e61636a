"""Output path validation."""

from __future__ import annotations

import os
from pathlib import Path

from deswitcher.errors import PathIssue, PathValidationError

_MESSAGES = {
    PathIssue.IS_DIRECTORY: "Path is a directory",
    PathIssue.PARENT_MISSING: "Parent directory does not exist",
    PathIssue.EMPTY_FILENAME: "File name is empty",
}
_HINTS = {
    PathIssue.IS_DIRECTORY: "Append a file name to the directory.",
    PathIssue.PARENT_MISSING: "Create the directory first or choose an existing one.",
    PathIssue.EMPTY_FILENAME: "Enter a file name such as switch.sh.",
}


def _reject(issue: PathIssue, path: str) -> PathValidationError:
    return PathValidationError(
        f"{_MESSAGES[issue]}: {path}" if path else _MESSAGES[issue],
        hint=_HINTS[issue],
        reason=issue,
    )


def validate_output_path(path: str) -> str:
    """Check that ``path`` can name a new script file.

    Write permission is not checked and nothing is created. The path is
    returned unchanged on success.
    """
    if path and Path(path).is_dir():
        raise _reject(PathIssue.IS_DIRECTORY, path)

    parent, filename = os.path.split(path)
    if parent and not Path(parent).exists():
        raise _reject(PathIssue.PARENT_MISSING, path)
    if not filename:
        raise _reject(PathIssue.EMPTY_FILENAME, path)
    return path


def validation_message(error: PathValidationError) -> str:
    return _MESSAGES[error.reason]
