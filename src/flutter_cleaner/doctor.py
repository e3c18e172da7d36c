"""Environment report for the doctor command."""

import logging
import platform
import subprocess

from flutter_cleaner import platforms
from flutter_cleaner.paths import get_home_directory
from flutter_cleaner.targets import calculate_size

log = logging.getLogger(__name__)

CACHE_LOCATIONS = [
    ("pubCache", "Pub Cache", platforms.get_pub_cache_path, False),
    ("gradleCache", "Gradle Cache", platforms.get_gradle_cache_path, False),
    ("xcodeDerivedData", "Xcode DerivedData", platforms.get_xcode_derived_data_path, True),
    ("cocoaPodsCache", "CocoaPods Cache", platforms.get_cocoapods_cache_path, True),
]


def get_tool_version(executable: str) -> str:
    """First line of ``<executable> --version``, or 'Not found'."""
    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
        )
    except (FileNotFoundError, OSError):
        return "Not found"

    if result.returncode != 0:
        return "Not found"

    # dart prints its version on stderr in older releases
    output = (result.stdout or result.stderr).strip()
    return output.splitlines()[0] if output else "Not found"


def gather_info() -> dict:
    """
    Collect platform, tooling and cache location information.

    Returns:
        Dict with JSON-friendly values
    """
    info: dict = {
        "platform": platforms.get_platform_name(),
        "operatingSystem": platform.system(),
        "operatingSystemVersion": platform.release(),
        "homeDirectory": get_home_directory(),
        "flutterVersion": get_tool_version("flutter"),
        "dartVersion": get_tool_version("dart"),
    }

    caches: dict = {}
    for key, _label, resolver, macos_only in CACHE_LOCATIONS:
        cache_path = resolver()
        if cache_path is None:
            if macos_only and not platforms.is_macos():
                caches[key] = "Not available (macOS only)"
            else:
                caches[key] = "Not found"
            continue
        caches[key] = cache_path
        caches[f"{key}Size"] = calculate_size(cache_path)

    info["cacheLocations"] = caches
    info["defaultScanRoots"] = platforms.get_default_scan_roots()
    return info
