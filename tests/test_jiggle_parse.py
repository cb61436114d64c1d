from __future__ import annotations

from pathlib import Path

import pytest

from smu_jiggle.jiggle import JigglePattern, PatternParseError, parse_pattern_text


GRID_3X3 = "\n".join(
    [
        "-1 -1",
        "-1 0",
        "-1 1",
        "0 -1",
        "0 0",
        "0 1",
        "1 -1",
        "1 0",
        "1 1",
    ]
)


def test_parse_grid_counts_every_data_line():
    pts = parse_pattern_text(GRID_3X3)
    assert len(pts) == 9
    assert pts[0] == (-1.0, -1.0)
    assert pts[4] == (0.0, 0.0)
    assert pts[-1] == (1.0, 1.0)


def test_lines_without_digits_are_skipped_and_order_kept():
    text = """
    # jiggle pattern for testing
    ! another comment style

      2.5   -3
    ----
    -0.25 7e-1
    \t
    4 4
    4 4
    """
    pts = parse_pattern_text(text)
    # duplicates are not removed
    assert pts == [(2.5, -3.0), (-0.25, 0.7), (4.0, 4.0), (4.0, 4.0)]


def test_crlf_and_tabs_are_whitespace():
    pts = parse_pattern_text("1\t2\r\n-3   +4\r\n")
    assert pts == [(1.0, 2.0), (-3.0, 4.0)]


def test_empty_text_gives_empty_pattern():
    assert parse_pattern_text("") == []
    assert parse_pattern_text("# nothing here\n\n") == []


@pytest.mark.parametrize("line", ["1 2 3", "5", "x1 2", "1 2,"])
def test_malformed_data_line_raises(line):
    text = f"0 0\n{line}\n1 1\n"
    with pytest.raises(PatternParseError) as e:
        parse_pattern_text(text)
    assert e.value.lineno == 2
    assert e.value.line == line
    assert "malformed pattern line 2" in str(e.value)


def test_comment_containing_digit_is_a_data_line():
    # The format has no comment marker: any digit makes a line data.
    with pytest.raises(PatternParseError):
        parse_pattern_text("# version 2 of the pattern\n0 0\n")


def test_import_text_replaces_points():
    jig = JigglePattern.from_text("1 1\n2 2\n")
    assert jig.npts() == 2
    jig.import_text("5 6\n")
    assert jig.pattern() == [(5.0, 6.0)]


def test_from_file_round_trip_and_filename(tmp_path: Path):
    p = tmp_path / "smu_test.dat"
    p.write_text("# header line\n\n" + GRID_3X3 + "\n\n# trailer\n", encoding="utf-8")

    jig = JigglePattern(p)
    assert jig.npts() == 9
    assert jig.pattern() == parse_pattern_text(GRID_3X3)
    assert jig.filename == str(p)
    assert jig.name == "smu_test.dat"


def test_non_utf8_comment_is_ignored(tmp_path: Path):
    p = tmp_path / "latin1.dat"
    p.write_bytes(b"# offsets \xb5 arcsec\n0 0\n1 1\n")
    jig = JigglePattern(p)
    assert jig.pattern() == [(0.0, 0.0), (1.0, 1.0)]


def test_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(OSError):
        JigglePattern(tmp_path / "does_not_exist.dat")


def test_malformed_file_raises_parse_error(tmp_path: Path):
    p = tmp_path / "bad.dat"
    p.write_text("0 0\n1 2 3\n", encoding="utf-8")
    with pytest.raises(PatternParseError):
        JigglePattern.from_file(p)
