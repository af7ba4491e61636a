"""Target profile and package manager selection state."""

from __future__ import annotations

import os
from dataclasses import dataclass

from deswitcher.catalog import PACKAGE_MANAGERS
from deswitcher.errors import DeSwitcherError, ExitCode
from deswitcher.profiles import default_script_filename


@dataclass
class SelectionState:
    current_profile: str
    available_profiles: list[str]
    target_index: int = 0
    package_manager_index: int = 0
    output_dir: str = ""
    output_path: str = ""

    def __post_init__(self) -> None:
        if not self.available_profiles:
            raise DeSwitcherError(
                "No desktop profiles are available for selection.",
                code=ExitCode.RUNTIME_ERROR,
                hint="Check eos-packagelist or the built-in profile catalog.",
            )
        self.target_index %= len(self.available_profiles)
        self.package_manager_index %= len(PACKAGE_MANAGERS)
        if not self.output_path:
            self.refresh_output_path()

    @classmethod
    def with_package_manager(
        cls,
        current_profile: str,
        available_profiles: list[str],
        package_manager: str,
        **kwargs: object,
    ) -> SelectionState:
        index = PACKAGE_MANAGERS.index(package_manager) if package_manager in PACKAGE_MANAGERS else 0
        return cls(
            current_profile=current_profile,
            available_profiles=list(available_profiles),
            package_manager_index=index,
            **kwargs,
        )

    def advance_target(self) -> None:
        self.target_index = (self.target_index + 1) % len(self.available_profiles)

    def retreat_target(self) -> None:
        self.target_index = (self.target_index - 1) % len(self.available_profiles)

    def select_target(self, profile: str) -> None:
        if profile not in self.available_profiles:
            raise DeSwitcherError(
                f"Unknown target profile: {profile}",
                code=ExitCode.VALIDATION_ERROR,
                hint=f"Use one of: {', '.join(self.available_profiles)}.",
            )
        self.target_index = self.available_profiles.index(profile)

    def cycle_package_manager(self) -> None:
        self.package_manager_index = (self.package_manager_index + 1) % len(PACKAGE_MANAGERS)

    def current_target(self) -> str:
        return self.available_profiles[self.target_index]

    def current_package_manager(self) -> str:
        return PACKAGE_MANAGERS[self.package_manager_index]

    def default_output_path(self) -> str:
        filename = default_script_filename(self.current_profile, self.current_target())
        if not self.output_dir:
            return filename
        return os.path.join(os.path.expanduser(self.output_dir), filename)

    def refresh_output_path(self) -> str:
        self.output_path = self.default_output_path()
        return self.output_path
