from __future__ import annotations

from pathlib import Path

import pytest

from smu_jiggle.library import (
    ENV_PATTERNS_DIR,
    builtin_pattern_path,
    builtin_patterns_root,
    list_builtin_patterns,
    load_builtin_pattern,
)


@pytest.fixture(autouse=True)
def _no_user_patterns(monkeypatch):
    monkeypatch.delenv(ENV_PATTERNS_DIR, raising=False)


def test_builtin_patterns_are_shipped():
    assert builtin_patterns_root().is_dir()
    names = list_builtin_patterns()
    for n in ("smu_3x3", "smu_4x4", "smu_5pt", "smu_7pt"):
        assert n in names
    assert names == sorted(names)


def test_every_builtin_pattern_loads():
    for name in list_builtin_patterns():
        jig = load_builtin_pattern(name)
        assert jig.npts() > 0, name
        jig.extent()


def test_builtin_3x3():
    jig = load_builtin_pattern("smu_3x3")
    assert jig.npts() == 9
    assert jig.name == "smu_3x3.dat"
    assert jig.has_origin() is True
    jig.scale = 3
    assert jig.extent() == (-3.0, 3.0, -3.0, 3.0)


def test_builtin_4x4_has_no_centre():
    jig = load_builtin_pattern("smu_4x4.dat")
    assert jig.npts() == 16
    assert jig.has_origin() is False
    assert jig.extent() == (-1.5, 1.5, -1.5, 1.5)


def test_builtin_5pt_and_7pt():
    assert load_builtin_pattern("smu_5pt").npts() == 5
    hexa = load_builtin_pattern("smu_7pt")
    assert hexa.npts() == 7
    assert hexa.has_origin() is True


def test_unknown_pattern_raises():
    with pytest.raises(FileNotFoundError):
        builtin_pattern_path("no_such_pattern")


def test_user_directory_overrides_builtin(tmp_path: Path, monkeypatch):
    (tmp_path / "smu_3x3.dat").write_text("0 0\n", encoding="utf-8")
    (tmp_path / "site_line.dat").write_text("-1 0\n0 0\n1 0\n", encoding="utf-8")
    monkeypatch.setenv(ENV_PATTERNS_DIR, str(tmp_path))

    assert builtin_pattern_path("smu_3x3") == tmp_path / "smu_3x3.dat"
    assert load_builtin_pattern("smu_3x3").npts() == 1
    assert "site_line" in list_builtin_patterns()
    assert load_builtin_pattern("site_line").extent() == (-1.0, 1.0, 0.0, 0.0)
