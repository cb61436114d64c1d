"""Pydantic schema for jiggle config files (YAML).

A config names a pattern (built-in name or file) and the metadata to apply::

    pattern_file: patterns/smu_3x3.dat
    scale: 3.0
    system: AZEL
    posang_deg: 45.0

Notes
-----
- Extra keys are allowed (forward compatibility); `find_unknown_keys()`
  reports them so typos are visible.
"""


from __future__ import annotations


from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from smu_jiggle.coords import CoordinateSystem


class JiggleConfig(BaseModel):
    """Schema for a jiggle config (after load_config).

    load_config() injects ``config_path``/``config_dir`` and resolves
    ``pattern_file`` to an absolute path.
    """

    model_config = ConfigDict(extra="allow")

    # exactly one of these
    pattern: Optional[str] = None
    pattern_file: Optional[str] = None

    scale: float = 1.0
    system: CoordinateSystem = CoordinateSystem.TRACKING
    posang_deg: float = 0.0
    with_metadata: bool = True

    config_path: Optional[str] = None
    config_dir: Optional[str] = None

    @field_validator("system", mode="before")
    @classmethod
    def _parse_system(cls, v: Any) -> Any:
        # Accept lower-case names ("azel") like the setter does.
        if v is None:
            return CoordinateSystem.TRACKING
        return CoordinateSystem.parse(v)

    @model_validator(mode="after")
    def _one_pattern_source(self) -> "JiggleConfig":
        if bool(self.pattern) == bool(self.pattern_file):
            raise ValueError("exactly one of 'pattern' or 'pattern_file' must be set")
        return self


_TOP_KEYS = set(JiggleConfig.model_fields)


def find_unknown_keys(cfg: Dict[str, Any]) -> List[str]:
    """Return unknown top-level keys, sorted."""
    return sorted(str(k) for k in cfg.keys() if str(k) not in _TOP_KEYS)
