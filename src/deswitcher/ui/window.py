"""PySide6 front end for the selection flow."""

from __future__ import annotations

import logging as py_logging
import sys

from deswitcher.errors import DeSwitcherError, ExitCode
from deswitcher.flow import FlowState, InputFlow
from deswitcher.script import preview_lines
from deswitcher.session import SessionContext
from deswitcher.ui.keys import HELP_LINES, KeyPress, dispatch_key

logger = py_logging.getLogger(__name__)

WINDOW_TITLE = "DE Switcher | Quickly switch desktop environments using eos-packagelist"
_CURSOR = "█"


def render_path_line(flow: InputFlow) -> str:
    text, cursor = flow.buffer.text, flow.buffer.cursor
    return text[:cursor] + _CURSOR + text[cursor:]


def run_window(flow: InputFlow, context: SessionContext, *, preview_limit: int = 30) -> FlowState:
    """Show the window until the flow reaches a terminal state.

    Closing the window without finishing counts as a cancel.
    """
    try:
        from PySide6.QtCore import Qt
        from PySide6.QtGui import QColor, QFont
        from PySide6.QtWidgets import (
            QApplication,
            QGridLayout,
            QGroupBox,
            QLabel,
            QListWidget,
            QListWidgetItem,
            QMainWindow,
            QPlainTextEdit,
            QVBoxLayout,
            QWidget,
        )
    except ImportError as exc:
        raise DeSwitcherError(
            "PySide6 is not installed; the interactive window cannot open.",
            code=ExitCode.RUNTIME_ERROR,
            hint="Run `pip install PySide6`, or use --target/--output for the non-interactive mode.",
        ) from exc

    named_keys = {
        Qt.Key_Up: "up",
        Qt.Key_Down: "down",
        Qt.Key_Tab: "tab",
        Qt.Key_Return: "enter",
        Qt.Key_Enter: "enter",
        Qt.Key_Escape: "escape",
        Qt.Key_Backspace: "backspace",
        Qt.Key_Delete: "delete",
        Qt.Key_Left: "left",
        Qt.Key_Right: "right",
        Qt.Key_Home: "home",
        Qt.Key_End: "end",
    }

    class SwitcherWindow(QMainWindow):  # pragma: no cover
        def __init__(self) -> None:
            super().__init__()
            self.setWindowTitle(WINDOW_TITLE)
            self.resize(960, 720)

            central = QWidget(self)
            grid = QGridLayout(central)

            self.profile_list = QListWidget()
            self.profile_list.setFocusPolicy(Qt.NoFocus)
            for profile in flow.selection.available_profiles:
                item = QListWidgetItem(profile)
                if profile == context.current_profile:
                    item.setForeground(QColor("darkGoldenrod"))
                self.profile_list.addItem(item)
            targets = QGroupBox("Available DE Profiles (Target DE)")
            QVBoxLayout(targets).addWidget(self.profile_list)

            self.info_label = QLabel()
            self.info_label.setWordWrap(True)
            info = QGroupBox("Info")
            QVBoxLayout(info).addWidget(self.info_label)

            self.package_label = QLabel()
            self.package_label.setWordWrap(True)
            package = QGroupBox("Package Manager (Ctrl+P/Tab to cycle)")
            QVBoxLayout(package).addWidget(self.package_label)

            self.preview = QPlainTextEdit()
            self.preview.setReadOnly(True)
            self.preview.setFocusPolicy(Qt.NoFocus)
            self.preview.setFont(QFont("monospace"))
            self.preview_box = QGroupBox()
            QVBoxLayout(self.preview_box).addWidget(self.preview)

            self.path_label = QLabel()
            self.path_label.setFont(QFont("monospace"))
            self.error_label = QLabel()
            self.error_label.setStyleSheet("color: #c0392b;")
            path_box = QGroupBox("Output path")
            path_layout = QVBoxLayout(path_box)
            path_layout.addWidget(self.path_label)
            path_layout.addWidget(self.error_label)

            grid.addWidget(targets, 0, 0, 2, 1)
            grid.addWidget(info, 0, 1)
            grid.addWidget(package, 1, 1)
            grid.addWidget(self.preview_box, 2, 0, 1, 2)
            grid.addWidget(path_box, 3, 0, 1, 2)
            grid.setRowStretch(2, 1)
            self.setCentralWidget(central)
            self.setFocusPolicy(Qt.StrongFocus)
            self.refresh()

        def refresh(self) -> None:
            selection = flow.selection
            self.profile_list.setCurrentRow(selection.target_index)
            help_text = "\n".join(HELP_LINES.get(flow.state, ()))
            self.info_label.setText(
                f"Current DE: {context.raw_desktop}\nProfile: {context.current_profile}\n\n{help_text}"
            )
            manager = selection.current_package_manager()
            self.package_label.setText(
                f"Selected: {manager}\n\nNote: {manager} is used for installation commands, "
                f"e.g., `{manager} -S ...`"
            )
            self.preview_box.setTitle(f"Script Preview for: {selection.current_target()}")
            self.preview.setPlainText(preview_lines(flow.preview(), preview_limit))
            if flow.state is FlowState.ENTERING_PATH:
                self.path_label.setText(render_path_line(flow))
            else:
                self.path_label.setText(selection.output_path)
            self.error_label.setText(flow.error or "")

        def keyPressEvent(self, event) -> None:  # noqa: N802
            key = event.key()
            ctrl = bool(event.modifiers() & Qt.ControlModifier)
            text = event.text()
            if ctrl and Qt.Key_A <= key <= Qt.Key_Z:
                # Qt reports Ctrl+letter as a control character.
                text = chr(int(key)).lower()
            press = KeyPress(key=named_keys.get(key, "char"), text=text, ctrl=ctrl)
            if not dispatch_key(flow, press):
                super().keyPressEvent(event)
                return
            if flow.finished:
                self.close()
                return
            self.refresh()

        def focusNextPrevChild(self, forward: bool) -> bool:  # noqa: N802
            # Tab cycles the package manager instead of moving focus.
            return False

        def closeEvent(self, event) -> None:  # noqa: N802
            if not flow.finished:
                flow.cancel()
                if flow.state is FlowState.SELECTING:
                    flow.cancel()
            super().closeEvent(event)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = SwitcherWindow()
    window.show()
    logger.debug("Interactive window opened")
    app.exec()
    logger.debug("Interactive window closed state=%s", flow.state.value)
    return flow.state
