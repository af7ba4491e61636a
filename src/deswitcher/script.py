"""Switch script synthesis.

Everything here is plain string composition. ``generate_script`` is pure: the
same (current, target, package manager) triple always yields the same text.
The only variable part is the placeholder filename in the review hint, which
callers replace through ``finalize_script`` once the real path is known.
"""

from __future__ import annotations

from deswitcher.catalog import (
    PACKAGELIST_TOOL,
    UNKNOWN_PROFILE,
    display_manager_for,
    install_group_for,
    needs_sudo,
)

SCRIPT_FILENAME_PLACEHOLDER = "de_switch_script.sh"
GENERATOR_NAME = "deswitcher"
REMOVAL_LIST_PATH = "/tmp/old_de_packages.txt"  # nosec B108


def package_command(package_manager: str) -> str:
    if needs_sudo(package_manager):
        return f"sudo {package_manager}"
    return package_manager


def removal_is_active(current_profile: str, target_profile: str) -> bool:
    return bool(current_profile) and current_profile not in (UNKNOWN_PROFILE, target_profile)


def _header(target_profile: str, package_manager: str) -> list[str]:
    return [
        "#!/bin/bash",
        "# ----------------------------------------------------",
        f"# Generated by {GENERATOR_NAME}",
        f"# Target DE: {target_profile}",
        f"# Package Manager: {package_manager}",
        "#",
        "# REVIEW THIS SCRIPT BEFORE RUNNING:",
        f"# bash {SCRIPT_FILENAME_PLACEHOLDER}",
        "# ----------------------------------------------------",
    ]


def _removal_step(current_profile: str, target_profile: str, package_manager: str) -> list[str]:
    lines = [
        "# 1. REMOVE CURRENT DE PACKAGES",
        f"# This assumes the current DE profile is one of the recognized {PACKAGELIST_TOOL} profiles.",
    ]
    if not removal_is_active(current_profile, target_profile):
        lines.extend(
            [
                f"# Skipped: current DE profile ({current_profile}) is unknown or matches the target.",
                f'echo "Skipping old DE removal (Current DE profile: {current_profile} '
                'is Unknown or matches target)."',
            ]
        )
        return lines

    lines.extend(
        [
            "# CAUTION: This operation removes package dependencies recursively.",
            "",
            f'CURRENT_DE_PROFILE="{current_profile}"',
            'echo "Creating package list for removal: $CURRENT_DE_PROFILE..."',
            "",
            f"# {PACKAGELIST_TOOL} runs as user",
            f'{PACKAGELIST_TOOL} "$CURRENT_DE_PROFILE" > {REMOVAL_LIST_PATH}',
            "",
            'echo "Removing old DE packages (may prompt for password)..."',
            "# -Rcs: Remove, cascade, remove dependencies only required by package(s) being removed",
            f"{package_command(package_manager)} -Rcs - < {REMOVAL_LIST_PATH}",
            f"rm {REMOVAL_LIST_PATH}",
        ]
    )
    return lines


def _install_step(target_profile: str, package_manager: str) -> list[str]:
    command = package_command(package_manager)
    lines = ["# 2. INSTALL NEW DE PACKAGES"]
    group = install_group_for(target_profile)
    if group is not None:
        lines.extend(
            [
                f'echo "Installing special package group: {group}"',
                f"{command} -S {group}",
            ]
        )
    else:
        lines.extend(
            [
                f'echo "Installing packages for {target_profile} using {PACKAGELIST_TOOL}..."',
                f'{command} -S $({PACKAGELIST_TOOL} --install "{target_profile}")',
            ]
        )
    return lines


def _display_manager_step(target_profile: str) -> list[str]:
    display_manager = display_manager_for(target_profile)
    return [
        "# 3. ENABLE THE APPROPRIATE DISPLAY MANAGER",
        f'echo "Enabling Display Manager: {display_manager}"',
        "",
        "# Disable any currently enabled display-manager service",
        "sudo systemctl disable --force $(systemctl list-units --type=service --state=enabled "
        "--no-pager | grep \"display-manager\" | awk '{print $1}') 2>/dev/null",
        "",
        "# Enable the new display manager",
        f"sudo systemctl enable {display_manager}",
    ]


def _completion_step() -> list[str]:
    return [
        "# 4. Final message and reboot",
        'echo ""',
        'echo "!!! Installation and configuration complete. !!!"',
        'echo "!!! You MUST reboot now to finish the switch. !!!"',
        "",
        "# Prompt for reboot",
        'read -r -p "Do you want to reboot now? [y/N]: " response',
        'case "$response" in',
        "    [yY][eE][sS]|[yY])",
        "        sudo reboot",
        "        ;;",
        "    *)",
        '        echo "Please reboot manually to complete the switch."',
        "        ;;",
        "esac",
    ]


def generate_script(current_profile: str, target_profile: str, package_manager: str) -> str:
    announce = (
        f'echo "Preparing to switch from {current_profile} to {target_profile} '
        f'using {package_manager}..."'
    )
    sections = [
        _header(target_profile, package_manager) + [announce],
        _removal_step(current_profile, target_profile, package_manager),
        _install_step(target_profile, package_manager),
        _display_manager_step(target_profile),
        _completion_step(),
    ]
    return "\n\n".join("\n".join(section) for section in sections) + "\n"


def finalize_script(script: str, filename: str) -> str:
    return script.replace(SCRIPT_FILENAME_PLACEHOLDER, filename)


def preview_lines(script: str, limit: int) -> str:
    return "\n".join(script.splitlines()[:limit])
