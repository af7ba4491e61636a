"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import subprocess
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from .catalog import PACKAGE_MANAGERS
from .config import AppConfig, load_config
from .errors import DeSwitcherError, ExitCode, user_facing_error
from .logging import configure_logging, default_log_path, normalize_level
from .paths import validate_output_path
from .profiles import default_script_filename
from .script import finalize_script, generate_script
from .session import SessionContext, build_flow, discover_session, finish_session
from .writer import next_steps_message, write_script

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

InteractiveLauncher = Callable[[SessionContext, AppConfig, Path | None], int]


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deswitcher",
        description="Generate a reviewable script that switches the desktop environment.",
    )
    parser.add_argument("--target", default=None, help="Target DE profile, e.g. GNOME-Desktop")
    parser.add_argument("--package-manager", choices=PACKAGE_MANAGERS, default=None)
    parser.add_argument("--output", default=None, help="Script path to write")
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the script instead of writing it",
    )
    parser.add_argument("--list", action="store_true", help="List available DE profiles and exit")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def is_interactive(namespace: argparse.Namespace) -> bool:
    return not (namespace.target or namespace.output or namespace.stdout or namespace.list)


def launch_window(context: SessionContext, config: AppConfig, config_path: Path | None) -> int:
    from deswitcher.ui.window import run_window

    flow = build_flow(context, config)
    run_window(flow, context, preview_limit=config.preview_lines)
    return finish_session(flow, config=config, config_path=config_path)


def run_batch_flow(namespace: argparse.Namespace, context: SessionContext, config: AppConfig) -> int:
    if namespace.list:
        for profile in context.available_profiles:
            print(profile)
        return int(ExitCode.SUCCESS)

    selection = build_flow(context, config).selection
    if namespace.target:
        selection.select_target(namespace.target)
    target = selection.current_target()
    package_manager = selection.current_package_manager()
    script = generate_script(context.current_profile, target, package_manager)

    if namespace.stdout:
        filename = namespace.output or default_script_filename(context.current_profile, target)
        sys.stdout.write(finalize_script(script, filename))
        return int(ExitCode.SUCCESS)

    path = validate_output_path(namespace.output or selection.refresh_output_path())
    written = write_script(path, finalize_script(script, path))
    print(next_steps_message(written))
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    interactive_launcher: InteractiveLauncher | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(level="WARN", log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        config = load_config(namespace.config)
        if namespace.package_manager:
            config.package_manager = namespace.package_manager
        context = discover_session(environ=environ, runner=runner)

        if is_interactive(namespace):
            launcher = interactive_launcher or launch_window
            logger.debug("Starting interactive flow")
            return launcher(context, config, namespace.config)

        logger.debug("Starting non-interactive flow")
        return run_batch_flow(namespace, context, config)
    except DeSwitcherError as exc:
        logger.error(
            "Handled DeSwitcherError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=namespace.log_level == "DEBUG",
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
