from __future__ import annotations

from pathlib import Path
from typing import Any

import logging

import yaml
from astropy.coordinates import Angle
from pydantic import ValidationError

from smu_jiggle.jiggle import JiggleError, JiggleOptions, JigglePattern
from smu_jiggle.library import builtin_pattern_path
from smu_jiggle.schema import JiggleConfig, find_unknown_keys


log = logging.getLogger(__name__)


class JiggleConfigError(JiggleError):
    """Raised when a jiggle config file is not a valid mapping or fails the schema."""


def _norm_path_str(p: str) -> str:
    """Normalize path separators to forward slashes for cross-platform YAML."""
    return str(p).replace("\\", "/")


def resolve_path(p: str | Path, *, base_dir: Path) -> Path:
    pp = Path(_norm_path_str(str(p))).expanduser()
    return pp if pp.is_absolute() else (base_dir / pp).resolve()


def config_from_dict(raw: dict[str, Any], *, base_dir: Path | None = None) -> JiggleConfig:
    """Validate a config mapping; relative ``pattern_file`` resolves against ``base_dir``."""
    try:
        cfg = JiggleConfig.model_validate(raw)
    except ValidationError as e:
        raise JiggleConfigError(f"invalid jiggle config: {e}") from e

    unknown = find_unknown_keys(raw)
    if unknown:
        log.warning("Unknown jiggle config keys: %s", ", ".join(unknown))

    if cfg.pattern_file and base_dir is not None:
        cfg.pattern_file = str(resolve_path(cfg.pattern_file, base_dir=base_dir))
    return cfg


def load_config(cfg_path: str | Path) -> JiggleConfig:
    """Load YAML config + resolve relative paths.

    Adds ``config_path`` and ``config_dir`` (absolute). ``OSError`` from
    reading the file propagates.
    """
    cfg_path = Path(cfg_path).expanduser().resolve()
    cfg_dir = cfg_path.parent
    try:
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise JiggleConfigError(f"cannot parse {cfg_path}: {e}") from e
    if not isinstance(raw, dict):
        raise JiggleConfigError(f"{cfg_path}: top level must be a mapping, got {type(raw).__name__}")

    raw["config_path"] = str(cfg_path)
    raw["config_dir"] = str(cfg_dir)
    return config_from_dict(raw, base_dir=cfg_dir)


def pattern_from_config(cfg: JiggleConfig) -> JigglePattern:
    """Build a configured :class:`JigglePattern` from a validated config."""
    path = Path(cfg.pattern_file) if cfg.pattern_file else builtin_pattern_path(str(cfg.pattern))
    jig = JigglePattern.from_file(path, options=JiggleOptions(with_metadata=cfg.with_metadata))
    jig.scale = cfg.scale
    if cfg.with_metadata:
        jig.system = cfg.system
        jig.posang = Angle(cfg.posang_deg, unit="deg")
    log.debug("Configured %r from %s", jig, cfg.config_path or "<dict>")
    return jig
