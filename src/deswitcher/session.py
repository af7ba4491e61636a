"""Session bootstrap and completion around the input flow."""

from __future__ import annotations

import logging as py_logging
import subprocess
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from deswitcher.config import AppConfig, remember_package_manager
from deswitcher.errors import DeSwitcherError, ExitCode
from deswitcher.flow import FlowState, InputFlow
from deswitcher.profiles import list_available_profiles, read_desktop_session, resolve_profile
from deswitcher.selection import SelectionState
from deswitcher.writer import next_steps_message, write_script

logger = py_logging.getLogger(__name__)


@dataclass
class SessionContext:
    raw_desktop: str
    current_profile: str
    available_profiles: list[str]


def discover_session(
    *,
    environ: Mapping[str, str] | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> SessionContext:
    raw_desktop = read_desktop_session(environ)
    current_profile = resolve_profile(raw_desktop)
    available = list_available_profiles(runner=runner)
    logger.info(
        "Current desktop raw=%s profile=%s available=%s",
        raw_desktop,
        current_profile,
        len(available),
    )
    return SessionContext(
        raw_desktop=raw_desktop,
        current_profile=current_profile,
        available_profiles=available,
    )


def build_flow(context: SessionContext, config: AppConfig) -> InputFlow:
    selection = SelectionState.with_package_manager(
        context.current_profile,
        context.available_profiles,
        config.package_manager,
        output_dir=config.output_dir,
    )
    return InputFlow(selection)


def finish_session(
    flow: InputFlow,
    *,
    config: AppConfig,
    config_path: str | Path | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Write the script for a completed flow and report the next steps."""
    out = stdout or sys.stdout
    if flow.state is FlowState.CANCELLED:
        print("No script written.", file=out)
        return int(ExitCode.SUCCESS)
    if flow.state is not FlowState.DONE:
        raise DeSwitcherError(
            "Session ended before a script path was confirmed.",
            code=ExitCode.RUNTIME_ERROR,
        )

    result = flow.result()
    written = write_script(result.path, result.script)
    print(next_steps_message(written), file=out)
    try:
        remember_package_manager(config, flow.selection.current_package_manager(), config_path)
    except OSError as exc:
        logger.warning("Could not persist package manager preference: %s", exc)
    return int(ExitCode.SUCCESS)
