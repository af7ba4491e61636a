from __future__ import annotations

import subprocess
from pathlib import Path

from deswitcher.config import AppConfig
from deswitcher.flow import FlowState
from deswitcher.session import build_flow, discover_session, finish_session
from deswitcher.ui.keys import KeyPress, dispatch_key


def _runner(stdout: str):
    def runner(*args: object, **kwargs: object) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")

    return runner


def test_kde_to_gnome_with_yay(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    context = discover_session(
        environ={"XDG_CURRENT_DESKTOP": "KDE"},
        runner=_runner("KDE-Desktop\nGNOME-Desktop\n"),
    )
    config = AppConfig()
    flow = build_flow(context, config)

    for press in (KeyPress("down"), KeyPress("tab"), KeyPress("enter"), KeyPress("enter")):
        assert dispatch_key(flow, press) is True

    assert flow.state is FlowState.DONE
    code = finish_session(flow, config=config, config_path=tmp_path / "config.toml")

    script = (tmp_path / "de_switcher_KDE_to_GNOME.sh").read_text(encoding="utf-8")
    assert code == 0
    assert "# Target DE: GNOME-Desktop" in script
    assert "# Package Manager: yay" in script
    assert 'yay -S $(eos-packagelist --install "GNOME-Desktop")' in script
    assert "sudo systemctl enable gdm" in script
    assert "# bash de_switcher_KDE_to_GNOME.sh" in script


def test_unknown_desktop_skips_removal(tmp_path: Path) -> None:
    context = discover_session(environ={}, runner=_runner("KDE-Desktop\nGNOME-Desktop\n"))
    config = AppConfig(output_dir=str(tmp_path))
    flow = build_flow(context, config)

    dispatch_key(flow, KeyPress("enter"))
    dispatch_key(flow, KeyPress("enter"))
    result = flow.result()

    assert context.current_profile == "Unknown-Desktop"
    assert result.path == str(tmp_path / "de_switcher_from_Unknown_to_KDE.sh")
    assert "Skipping old DE removal" in result.script
    assert "-Rcs" not in result.script
    assert "/tmp/old_de_packages.txt" not in result.script


def test_path_entry_recovers_from_validation_errors(tmp_path: Path) -> None:
    context = discover_session(environ={"XDG_CURRENT_DESKTOP": "GNOME"}, runner=_runner(""))
    config = AppConfig(output_dir=str(tmp_path))
    flow = build_flow(context, config)
    dispatch_key(flow, KeyPress("enter"))

    for _ in range(len(flow.buffer.text)):
        dispatch_key(flow, KeyPress("backspace"))
    for char in str(tmp_path):
        dispatch_key(flow, KeyPress("char", text=char))
    dispatch_key(flow, KeyPress("enter"))
    assert flow.state is FlowState.ENTERING_PATH
    assert flow.error is not None

    for char in "/mine.sh":
        dispatch_key(flow, KeyPress("char", text=char))
    dispatch_key(flow, KeyPress("enter"))

    assert flow.state is FlowState.DONE
    assert flow.result().path == str(tmp_path / "mine.sh")
