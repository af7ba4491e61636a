"""Script file output."""

from __future__ import annotations

import logging as py_logging
from pathlib import Path

from deswitcher.errors import DeSwitcherError, ExitCode

logger = py_logging.getLogger(__name__)


def write_script(path: str | Path, script: str) -> Path:
    target = Path(path)
    try:
        target.write_text(script, encoding="utf-8")
    except OSError as exc:
        logger.error("Writing script failed path=%s: %s", target, exc)
        raise DeSwitcherError(
            f"Could not write script file {target}: {exc.strerror or exc}",
            code=ExitCode.WRITE_ERROR,
            hint="Choose a writable location and run the selection again.",
        ) from exc
    logger.info("Script written to %s", target)
    return target


def next_steps_message(path: str | Path) -> str:
    target = str(path)
    runnable = target if Path(target).is_absolute() or "/" in target else f"./{target}"
    return (
        f"Script successfully written to {target}\n\n"
        "NEXT STEP: REVIEW AND RUN:\n"
        f"\tchmod +x {target}\n"
        f"\t{runnable}\n"
    )
