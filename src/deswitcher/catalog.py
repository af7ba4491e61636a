"""Static desktop profile catalog."""

from __future__ import annotations

from types import MappingProxyType

UNKNOWN_PROFILE = "Unknown-Desktop"
DEFAULT_DISPLAY_MANAGER = "lightdm"
BASE_PACKAGE_MANAGER = "pacman"
PACKAGELIST_TOOL = "eos-packagelist"

# Order is the fallback enumeration order of selectable targets.
PROFILE_DISPLAY_MANAGERS: tuple[tuple[str, str], ...] = (
    ("KDE-Desktop", "sddm"),
    ("GNOME-Desktop", "gdm"),
    ("XFCE4-Desktop", "lightdm"),
    ("Cinnamon-Desktop", "lightdm"),
    ("MATE-Desktop", "lightdm"),
    ("Budgie-Desktop", "lightdm"),
    ("LXQT-Desktop", "sddm"),
    ("LXDE-Desktop", "lightdm"),
    ("i3-Window-Manager", "lightdm"),
    ("COSMIC-Desktop", "cosmic-greeter"),
)

INSTALL_GROUP_OVERRIDES = MappingProxyType(
    {
        "COSMIC-Desktop": "cosmic",
        "i3-Window-Manager": "i3-gaps",
    }
)

PACKAGE_MANAGERS: tuple[str, ...] = (BASE_PACKAGE_MANAGER, "yay", "paru")

_DISPLAY_MANAGER_BY_PROFILE = MappingProxyType(dict(PROFILE_DISPLAY_MANAGERS))


def profile_names() -> list[str]:
    return [profile for profile, _ in PROFILE_DISPLAY_MANAGERS]


def display_manager_for(profile: str) -> str:
    return _DISPLAY_MANAGER_BY_PROFILE.get(profile, DEFAULT_DISPLAY_MANAGER)


def install_group_for(profile: str) -> str | None:
    return INSTALL_GROUP_OVERRIDES.get(profile)


def needs_sudo(package_manager: str) -> bool:
    """AUR helpers escalate on their own; only the base manager needs sudo."""
    return package_manager == BASE_PACKAGE_MANAGER
