"""Desktop profile resolution and discovery."""

from __future__ import annotations

import logging as py_logging
import os
import subprocess
from collections.abc import Callable, Mapping

from deswitcher.catalog import (
    PACKAGELIST_TOOL,
    PROFILE_DISPLAY_MANAGERS,
    UNKNOWN_PROFILE,
    profile_names,
)

logger = py_logging.getLogger(__name__)

DESKTOP_ENV_VAR = "XDG_CURRENT_DESKTOP"
UNKNOWN_DESKTOP = "Unknown"

_SPECIAL_RAW_NAMES = {
    "COSMIC": "COSMIC-Desktop",
    "I3": "i3-Window-Manager",
}
_PROFILE_SUFFIXES = ("-Desktop", "-Window-Manager")


def resolve_profile(raw_desktop: str) -> str:
    """Map a raw desktop session name to a catalog profile.

    Matching is a case-sensitive prefix test of the uppercased raw value
    against the catalog names, so "KDE" resolves to "KDE-Desktop". Empty input
    and names that match nothing resolve to the unknown sentinel.
    """
    normalized = raw_desktop.strip().upper()
    if not normalized:
        return UNKNOWN_PROFILE
    if normalized in _SPECIAL_RAW_NAMES:
        return _SPECIAL_RAW_NAMES[normalized]
    for profile, _ in PROFILE_DISPLAY_MANAGERS:
        if profile.startswith(normalized):
            return profile
    return UNKNOWN_PROFILE


def filename_fragment(profile: str) -> str:
    fragment = profile
    for suffix in _PROFILE_SUFFIXES:
        fragment = fragment.replace(suffix, "")
    return fragment


def default_script_filename(current_profile: str, target_profile: str) -> str:
    source = filename_fragment(current_profile)
    target = filename_fragment(target_profile)
    if source == UNKNOWN_DESKTOP:
        return f"de_switcher_from_Unknown_to_{target}.sh"
    return f"de_switcher_{source}_to_{target}.sh"


def read_desktop_session(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    raw = env.get(DESKTOP_ENV_VAR, "")
    # Values like "ubuntu:GNOME" list the most specific session last.
    session = raw.split(":")[-1].strip()
    if not session:
        logger.info("%s is not set; treating current desktop as unknown", DESKTOP_ENV_VAR)
        return UNKNOWN_DESKTOP
    return session


def _is_profile_line(line: str) -> bool:
    return line.endswith(_PROFILE_SUFFIXES) or "i3" in line


def _decode_process_output(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


def parse_profile_listing(stdout: str) -> list[str]:
    profiles: list[str] = []
    for raw_line in stdout.splitlines():
        line = raw_line.strip()
        if line and _is_profile_line(line):
            profiles.append(line)
    return profiles


def list_available_profiles(
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> list[str]:
    """Ask eos-packagelist for installable profiles, falling back to the catalog."""
    command = [PACKAGELIST_TOOL, "--list"]
    logger.debug("Listing desktop profiles using %s", " ".join(command))
    try:
        result = runner(command, capture_output=True, text=False, check=False)
    except OSError as exc:
        logger.warning("Profile listing failed (%s); using built-in catalog", exc)
        return profile_names()

    if result.returncode != 0:
        stderr = _decode_process_output(result.stderr).strip()
        logger.warning(
            "Profile listing exited with %s (%s); using built-in catalog",
            result.returncode,
            stderr or "no stderr",
        )
        return profile_names()

    profiles = parse_profile_listing(_decode_process_output(result.stdout))
    if not profiles:
        logger.warning("Profile listing returned no desktop profiles; using built-in catalog")
        return profile_names()
    logger.debug("Discovered %s desktop profiles", len(profiles))
    return profiles
