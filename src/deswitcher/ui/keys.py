"""Key event translation for the input flow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from deswitcher.flow import FlowState, InputFlow


@dataclass(frozen=True)
class KeyPress:
    key: str
    text: str = ""
    ctrl: bool = False


_SELECTING_KEYS: dict[str, Callable[[InputFlow], bool]] = {
    "escape": InputFlow.cancel,
    "down": InputFlow.next_target,
    "up": InputFlow.previous_target,
    "tab": InputFlow.cycle_package_manager,
    "enter": InputFlow.confirm,
}
_SELECTING_CHARS: dict[str, Callable[[InputFlow], bool]] = {
    "q": InputFlow.cancel,
    "j": InputFlow.next_target,
    "k": InputFlow.previous_target,
}
_ENTERING_KEYS: dict[str, Callable[[InputFlow], bool]] = {
    "escape": InputFlow.cancel,
    "enter": InputFlow.confirm,
    "backspace": InputFlow.backspace,
    "delete": InputFlow.delete,
    "left": InputFlow.cursor_left,
    "right": InputFlow.cursor_right,
    "home": InputFlow.cursor_home,
    "end": InputFlow.cursor_end,
}


def dispatch_key(flow: InputFlow, press: KeyPress) -> bool:
    """Apply a key press to the flow; returns False when it was ignored."""
    if flow.state is FlowState.SELECTING:
        if press.ctrl:
            if press.text.lower() == "p":
                return flow.cycle_package_manager()
            return False
        action = _SELECTING_KEYS.get(press.key) or _SELECTING_CHARS.get(press.text)
        return action(flow) if action else False

    if flow.state is FlowState.ENTERING_PATH:
        action = _ENTERING_KEYS.get(press.key)
        if action is not None:
            return action(flow)
        if press.ctrl or not press.text.isprintable():
            return False
        return flow.insert_char(press.text)

    return False


HELP_LINES = {
    FlowState.SELECTING: (
        "Use j/k or Up/Down to select a target DE.",
        "Press Ctrl+P or Tab to change the package manager.",
        "Press Enter to choose where to save the script.",
        "Press q/Esc to quit without action.",
    ),
    FlowState.ENTERING_PATH: (
        "Edit the output path, then press Enter to write the script.",
        "Press Esc to go back to the selection.",
    ),
}
