"""Version helpers.

``__version__`` is the single source of truth; ``pyproject.toml`` reads it
dynamically, so there is nothing to keep in sync and nothing mutated at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
import platform
import sys


__version__ = "1.0.0"


@dataclass(frozen=True)
class VersionInfo:
    package_version: str
    python: str
    platform: str


def get_version_info() -> VersionInfo:
    return VersionInfo(
        package_version=__version__,
        python=sys.version.split()[0],
        platform=f"{platform.system()} {platform.release()} ({platform.machine()})",
    )
