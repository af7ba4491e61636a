"""XDG config loading/saving."""

from __future__ import annotations

import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from deswitcher.catalog import BASE_PACKAGE_MANAGER, PACKAGE_MANAGERS

DEFAULT_CONFIG_PATH = Path("~/.config/deswitcher/config.toml").expanduser()
DEFAULT_PREVIEW_LINES = 30
PREVIEW_LINES_MIN = 5
PREVIEW_LINES_MAX = 200


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    package_manager: str = BASE_PACKAGE_MANAGER
    output_dir: str = ""
    preview_lines: int = Field(default=DEFAULT_PREVIEW_LINES, ge=PREVIEW_LINES_MIN, le=PREVIEW_LINES_MAX)
    remember_package_manager: bool = True

    @field_validator("package_manager")
    @classmethod
    def _validate_package_manager(cls, value: str) -> str:
        if value not in PACKAGE_MANAGERS:
            raise ValueError(f"Invalid package manager: {value}")
        return value

    @field_validator("output_dir")
    @classmethod
    def _strip_output_dir(cls, value: str) -> str:
        return value.strip()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _sanitize(raw: dict) -> AppConfig:
    cfg = AppConfig()

    package_manager = raw.get("package_manager", cfg.package_manager)
    if isinstance(package_manager, str) and package_manager.strip() in PACKAGE_MANAGERS:
        cfg.package_manager = package_manager.strip()

    output_dir = raw.get("output_dir", cfg.output_dir)
    if isinstance(output_dir, str):
        cfg.output_dir = output_dir

    preview_lines = raw.get("preview_lines", cfg.preview_lines)
    if (
        isinstance(preview_lines, int)
        and not isinstance(preview_lines, bool)
        and PREVIEW_LINES_MIN <= preview_lines <= PREVIEW_LINES_MAX
    ):
        cfg.preview_lines = preview_lines

    remember = raw.get("remember_package_manager", cfg.remember_package_manager)
    if isinstance(remember, bool):
        cfg.remember_package_manager = remember

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return AppConfig()
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"package_manager = {_toml_scalar(config.package_manager)}",
        f"output_dir = {_toml_scalar(config.output_dir)}",
        f"preview_lines = {_toml_scalar(config.preview_lines)}",
        f"remember_package_manager = {_toml_scalar(config.remember_package_manager)}",
    ]
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved


def remember_package_manager(
    config: AppConfig,
    package_manager: str,
    path: str | Path | None = None,
) -> bool:
    if not config.remember_package_manager or config.package_manager == package_manager:
        return False
    config.package_manager = package_manager
    save_config(config, path)
    return True
