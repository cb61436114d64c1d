"""Built-in jiggle pattern files.

Patterns shipped with the package live in ``resources/patterns`` as
``<name>.dat``. Extra directories can be searched by setting
``SMU_JIGGLE_PATTERNS_DIR`` (``os.pathsep``-separated); those take precedence
over the built-ins so a site can override a pattern without touching the
install.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import os

from smu_jiggle.jiggle import JigglePattern


ENV_PATTERNS_DIR = "SMU_JIGGLE_PATTERNS_DIR"
PATTERN_SUFFIX = ".dat"


def builtin_patterns_root() -> Path:
    return Path(__file__).resolve().parent / "resources" / "patterns"


def pattern_search_path() -> list[Path]:
    """Directories searched for named patterns, in priority order."""
    roots: list[Path] = []
    env = (os.environ.get(ENV_PATTERNS_DIR) or "").strip()
    if env:
        roots.extend(Path(p).expanduser() for p in env.split(os.pathsep) if p.strip())
    roots.append(builtin_patterns_root())
    return roots


def list_builtin_patterns() -> list[str]:
    """Sorted names of all patterns on the search path."""
    names: set[str] = set()
    for root in pattern_search_path():
        if root.is_dir():
            names.update(p.stem for p in root.glob(f"*{PATTERN_SUFFIX}"))
    return sorted(names)


def builtin_pattern_path(name: str) -> Path:
    """Resolve a pattern name (with or without ``.dat``) to a file."""
    stem = str(name).strip()
    if stem.endswith(PATTERN_SUFFIX):
        stem = stem[: -len(PATTERN_SUFFIX)]
    for root in pattern_search_path():
        p = root / f"{stem}{PATTERN_SUFFIX}"
        if p.is_file():
            return p
    raise FileNotFoundError(f"no jiggle pattern named {name!r} (known: {', '.join(list_builtin_patterns())})")


def load_builtin_pattern(name: str, **kwargs: Any) -> JigglePattern:
    return JigglePattern.from_file(builtin_pattern_path(name), **kwargs)
