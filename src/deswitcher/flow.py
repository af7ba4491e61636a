"""Two-step selection/path-entry state machine."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from deswitcher.errors import DeSwitcherError, ExitCode, PathValidationError
from deswitcher.paths import validate_output_path, validation_message
from deswitcher.script import finalize_script, generate_script
from deswitcher.selection import SelectionState

logger = py_logging.getLogger(__name__)


class FlowState(str, Enum):
    SELECTING = "selecting"
    ENTERING_PATH = "entering-path"
    DONE = "done"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({FlowState.DONE, FlowState.CANCELLED})


@dataclass
class PathBuffer:
    text: str = ""
    cursor: int = 0

    def reset(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def insert(self, char: str) -> None:
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += len(char)

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete(self) -> None:
        if self.cursor >= len(self.text):
            return
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.text)


@dataclass(frozen=True)
class FlowResult:
    path: str
    script: str


class InputFlow:
    """Sequences selection, live preview and path entry for one session.

    Every action is only legal in one state; calling it in any other state is
    a no-op that returns False.
    """

    def __init__(self, selection: SelectionState) -> None:
        self.selection = selection
        self.state = FlowState.SELECTING
        self.error: str | None = None
        self.buffer = PathBuffer()
        self.selection.refresh_output_path()

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def _in(self, state: FlowState) -> bool:
        return self.state is state

    def preview(self) -> str:
        return generate_script(
            self.selection.current_profile,
            self.selection.current_target(),
            self.selection.current_package_manager(),
        )

    def next_target(self) -> bool:
        if not self._in(FlowState.SELECTING):
            return False
        self.selection.advance_target()
        self.selection.refresh_output_path()
        return True

    def previous_target(self) -> bool:
        if not self._in(FlowState.SELECTING):
            return False
        self.selection.retreat_target()
        self.selection.refresh_output_path()
        return True

    def cycle_package_manager(self) -> bool:
        if not self._in(FlowState.SELECTING):
            return False
        self.selection.cycle_package_manager()
        return True

    def confirm(self) -> bool:
        if self._in(FlowState.SELECTING):
            self.error = None
            self.buffer.reset(self.selection.refresh_output_path())
            self.state = FlowState.ENTERING_PATH
            logger.debug(
                "Selection confirmed target=%s package_manager=%s",
                self.selection.current_target(),
                self.selection.current_package_manager(),
            )
            return True
        if self._in(FlowState.ENTERING_PATH):
            return self._submit_path()
        return False

    def _submit_path(self) -> bool:
        try:
            path = validate_output_path(self.buffer.text)
        except PathValidationError as exc:
            self.error = f"{validation_message(exc)}. {exc.hint}"
            logger.debug("Output path rejected reason=%s path=%r", exc.reason.value, self.buffer.text)
            return True
        self.selection.output_path = path
        self.error = None
        self.state = FlowState.DONE
        logger.info("Output path accepted: %s", path)
        return True

    def cancel(self) -> bool:
        if self._in(FlowState.SELECTING):
            self.state = FlowState.CANCELLED
            logger.info("Selection cancelled; no script will be written")
            return True
        if self._in(FlowState.ENTERING_PATH):
            self.selection.refresh_output_path()
            self.buffer.reset("")
            self.error = None
            self.state = FlowState.SELECTING
            return True
        return False

    def _edit(self, operation: Callable[..., None], *args: str) -> bool:
        if not self._in(FlowState.ENTERING_PATH):
            return False
        operation(*args)
        return True

    def insert_char(self, char: str) -> bool:
        if not char:
            return False
        return self._edit(self.buffer.insert, char)

    def backspace(self) -> bool:
        return self._edit(self.buffer.backspace)

    def delete(self) -> bool:
        return self._edit(self.buffer.delete)

    def cursor_left(self) -> bool:
        return self._edit(self.buffer.move_left)

    def cursor_right(self) -> bool:
        return self._edit(self.buffer.move_right)

    def cursor_home(self) -> bool:
        return self._edit(self.buffer.move_home)

    def cursor_end(self) -> bool:
        return self._edit(self.buffer.move_end)

    def result(self) -> FlowResult:
        if not self._in(FlowState.DONE):
            raise DeSwitcherError(
                "Script requested before the selection flow completed.",
                code=ExitCode.RUNTIME_ERROR,
            )
        path = self.selection.output_path
        return FlowResult(path=path, script=finalize_script(self.preview(), path))
