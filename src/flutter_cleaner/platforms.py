"""Platform-specific locations and trash helpers."""

import logging
import os
import subprocess
import sys

from flutter_cleaner.paths import get_home_directory, is_directory, resolve_canonical

log = logging.getLogger(__name__)

# Directories under $HOME that commonly hold projects
DEFAULT_ROOT_NAMES = ["Developer", "Projects", "Documents"]


def is_macos() -> bool:
    return sys.platform == "darwin"


def is_linux() -> bool:
    return sys.platform.startswith("linux")


def is_windows() -> bool:
    return sys.platform == "win32"


def get_platform_name() -> str:
    """Human-friendly platform name."""
    if is_macos():
        return "macOS"
    if is_linux():
        return "Linux"
    if is_windows():
        return "Windows"
    return sys.platform


# =============================================================================
# Global cache locations
# =============================================================================


def get_pub_cache_path() -> str | None:
    """Dart/Flutter pub cache, honouring PUB_CACHE."""
    override = os.environ.get("PUB_CACHE")
    if override:
        return resolve_canonical(override)

    home = get_home_directory()
    if not home:
        return None

    if is_windows():
        return resolve_canonical(os.path.join(home, "AppData", "Local", "Pub", "Cache"))
    return resolve_canonical(os.path.join(home, ".pub-cache"))


def get_gradle_cache_path() -> str | None:
    """Gradle global cache."""
    home = get_home_directory()
    if not home:
        return None
    return resolve_canonical(os.path.join(home, ".gradle", "caches"))


def get_xcode_derived_data_path() -> str | None:
    """Xcode DerivedData (macOS only)."""
    if not is_macos():
        return None
    home = get_home_directory()
    if not home:
        return None
    return resolve_canonical(
        os.path.join(home, "Library", "Developer", "Xcode", "DerivedData")
    )


def get_cocoapods_cache_path() -> str | None:
    """CocoaPods download cache (macOS only)."""
    if not is_macos():
        return None
    home = get_home_directory()
    if not home:
        return None
    return resolve_canonical(os.path.join(home, "Library", "Caches", "CocoaPods"))


def get_default_scan_roots() -> list[str]:
    """Existing default project directories under $HOME."""
    home = get_home_directory()
    if not home:
        return []

    roots = []
    for name in DEFAULT_ROOT_NAMES:
        full_path = os.path.join(home, name)
        if is_directory(full_path):
            roots.append(full_path)
    return roots


# =============================================================================
# Trash
# =============================================================================


class TrashHelper:
    """Moves a path to the platform's recoverable trash."""

    name = "trash"

    def command(self, path: str) -> list[str]:
        raise NotImplementedError

    def move_to_trash(self, path: str) -> bool:
        """
        Run the platform helper for a path.

        Returns:
            True only if the helper ran and exited successfully
        """
        try:
            result = subprocess.run(
                self.command(path),
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log.debug("%s unavailable: %s", self.name, e)
            return False

        if result.returncode != 0:
            log.debug("%s failed for %s: %s", self.name, path, result.stderr.strip())
            return False
        return True


class MacTrash(TrashHelper):
    """Finder via osascript."""

    name = "osascript"

    def command(self, path: str) -> list[str]:
        escaped = path.replace("\\", "\\\\").replace('"', '\\"')
        return [
            "osascript",
            "-e",
            f'tell application "Finder" to move POSIX file "{escaped}" to trash',
        ]


class LinuxTrash(TrashHelper):
    """GIO trash (GNOME and most freedesktop environments)."""

    name = "gio"

    def command(self, path: str) -> list[str]:
        return ["gio", "trash", path]


class WindowsTrash(TrashHelper):
    """Recycle Bin through Microsoft.VisualBasic.FileIO."""

    name = "powershell"

    def command(self, path: str) -> list[str]:
        escaped = path.replace("'", "''")
        method = "DeleteDirectory" if os.path.isdir(path) else "DeleteFile"
        script = (
            "Add-Type -AssemblyName Microsoft.VisualBasic; "
            f"[Microsoft.VisualBasic.FileIO.FileSystem]::{method}("
            f"'{escaped}', 'OnlyErrorDialogs', 'SendToRecycleBin')"
        )
        return ["powershell", "-NoProfile", "-Command", script]


def get_trash_helper() -> TrashHelper | None:
    """Trash helper for the current OS, or None if there is none."""
    if is_macos():
        return MacTrash()
    if is_linux():
        return LinuxTrash()
    if is_windows():
        return WindowsTrash()
    return None
