from __future__ import annotations

import io
import subprocess
from contextlib import redirect_stderr
from pathlib import Path

import pytest

from deswitcher import cli
from deswitcher.errors import DeSwitcherError, ExitCode

_ENV = {"XDG_CURRENT_DESKTOP": "KDE"}


def _runner(*args: object, **kwargs: object) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(
        args=[], returncode=0, stdout="KDE-Desktop\nGNOME-Desktop\n", stderr=""
    )


def _main(argv: list[str], tmp_path: Path, **kwargs: object) -> int:
    base = ["--config", str(tmp_path / "config.toml"), "--log-file", str(tmp_path / "log.txt")]
    return cli.main(base + argv, environ=_ENV, runner=_runner, **kwargs)


def test_cli_help_includes_public_flags() -> None:
    help_text = cli.build_parser().format_help()

    for flag in ("--target", "--package-manager", "--output", "--stdout", "--list", "--config"):
        assert flag in help_text


def test_invalid_package_manager_returns_error_code(tmp_path: Path) -> None:
    with redirect_stderr(io.StringIO()):
        code = _main(["--package-manager", "apt"], tmp_path)

    assert code == ExitCode.INVALID_ARGS


def test_log_level_type_normalizes_values() -> None:
    namespace = cli.parse_args(["--log-level", "warning"])

    assert namespace.log_level == "WARN"


def test_no_flags_triggers_interactive_launcher(tmp_path: Path) -> None:
    seen = {}

    def fake_launcher(context, config, config_path) -> int:
        seen["context"] = context
        seen["config_path"] = config_path
        return 0

    code = _main([], tmp_path, interactive_launcher=fake_launcher)

    assert code == 0
    assert seen["context"].current_profile == "KDE-Desktop"
    assert seen["context"].available_profiles == ["KDE-Desktop", "GNOME-Desktop"]
    assert seen["config_path"] == tmp_path / "config.toml"


def test_interactive_error_is_reported_to_stderr(tmp_path: Path) -> None:
    def fake_launcher(context, config, config_path) -> int:
        raise DeSwitcherError(
            "PySide6 is not installed",
            code=ExitCode.RUNTIME_ERROR,
            hint="Install PySide6.",
        )

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main([], tmp_path, interactive_launcher=fake_launcher)

    assert code == ExitCode.RUNTIME_ERROR
    assert "Install PySide6." in stream.getvalue()


def test_unexpected_error_returns_runtime_error(tmp_path: Path) -> None:
    def fake_launcher(context, config, config_path) -> int:
        raise RuntimeError("boom")

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main([], tmp_path, interactive_launcher=fake_launcher)

    assert code == ExitCode.RUNTIME_ERROR
    assert "Unexpected runtime failure" in stream.getvalue()


def test_list_prints_available_profiles(tmp_path: Path, capsys) -> None:
    code = _main(["--list"], tmp_path)

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["KDE-Desktop", "GNOME-Desktop"]


def test_stdout_prints_finalized_script(tmp_path: Path, capsys) -> None:
    code = _main(["--target", "GNOME-Desktop", "--package-manager", "paru", "--stdout"], tmp_path)

    out = capsys.readouterr().out
    assert code == 0
    assert "# Target DE: GNOME-Desktop" in out
    assert "# Package Manager: paru" in out
    assert "# bash de_switcher_KDE_to_GNOME.sh" in out
    assert list(tmp_path.glob("*.sh")) == []


def test_output_writes_script(tmp_path: Path, capsys) -> None:
    target = tmp_path / "switch.sh"

    code = _main(["--target", "GNOME-Desktop", "--output", str(target)], tmp_path)

    assert code == 0
    text = target.read_text(encoding="utf-8")
    assert "sudo systemctl enable gdm" in text
    assert f"# bash {target}" in text
    assert "chmod +x" in capsys.readouterr().out


def test_unknown_target_is_a_validation_error(tmp_path: Path) -> None:
    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main(["--target", "Hyprland-Desktop", "--stdout"], tmp_path)

    assert code == ExitCode.VALIDATION_ERROR
    assert "Unknown target profile" in stream.getvalue()


@pytest.mark.parametrize("output", ["/definitely/not/a/real/dir/x.sh", "/tmp"])
def test_invalid_output_path_is_rejected(tmp_path: Path, output: str) -> None:
    with redirect_stderr(io.StringIO()):
        code = _main(["--target", "GNOME-Desktop", "--output", output], tmp_path)

    assert code == ExitCode.VALIDATION_ERROR


def test_list_survives_undecodable_listing_output(tmp_path: Path, capsys) -> None:
    def bytes_runner(*args: object, **kwargs: object) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(
            args=[], returncode=0, stdout=b"KDE-Desktop\n\xffGNOME-Desktop\n", stderr=b""
        )

    base = ["--config", str(tmp_path / "config.toml"), "--log-file", str(tmp_path / "log.txt")]
    code = cli.main(base + ["--list"], environ=_ENV, runner=bytes_runner)

    assert code == ExitCode.SUCCESS
    assert capsys.readouterr().out.splitlines() == ["KDE-Desktop", "\ufffdGNOME-Desktop"]
