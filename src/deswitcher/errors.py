"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    WRITE_ERROR = 5
    VALIDATION_ERROR = 7


class PathIssue(str, Enum):
    IS_DIRECTORY = "is-directory"
    PARENT_MISSING = "parent-missing"
    EMPTY_FILENAME = "empty-filename"


@dataclass
class DeSwitcherError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class PathValidationError(DeSwitcherError):
    code: ExitCode = ExitCode.VALIDATION_ERROR
    reason: PathIssue = PathIssue.EMPTY_FILENAME


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
