from __future__ import annotations

from pathlib import Path

import pytest

from deswitcher.errors import DeSwitcherError, ExitCode
from deswitcher.writer import next_steps_message, write_script


def test_write_script_writes_text(tmp_path: Path) -> None:
    target = tmp_path / "switch.sh"

    written = write_script(str(target), "#!/bin/bash\n")

    assert written == target
    assert target.read_text(encoding="utf-8") == "#!/bin/bash\n"


def test_write_script_wraps_os_errors(tmp_path: Path) -> None:
    with pytest.raises(DeSwitcherError) as excinfo:
        write_script(tmp_path / "missing" / "switch.sh", "#!/bin/bash\n")

    assert excinfo.value.code == ExitCode.WRITE_ERROR
    assert excinfo.value.hint


def test_next_steps_message_prefixes_bare_filenames() -> None:
    message = next_steps_message("de_switcher_KDE_to_GNOME.sh")

    assert "chmod +x de_switcher_KDE_to_GNOME.sh" in message
    assert "./de_switcher_KDE_to_GNOME.sh" in message
    assert "\t/srv/x.sh\n" in next_steps_message("/srv/x.sh")
