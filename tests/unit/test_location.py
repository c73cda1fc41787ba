"""
Unit tests for location resolution.
"""

import pytest

from frontdiag.compiler.location import LocationMeta, coerce_line, resolve_location


class TestResolveLocation:
    """Tests for picking the reported (file, line)."""

    def test_absent_meta_uses_fallback_file_and_line_zero(self):
        assert resolve_location(None, "b.ex") == ("b.ex", 0)

    def test_bare_line(self):
        assert resolve_location(7, "b.ex") == ("b.ex", 7)

    def test_mapping_with_line(self):
        assert resolve_location({"line": 12}, "b.ex") == ("b.ex", 12)

    def test_mapping_without_line(self):
        assert resolve_location({"column": 4}, "b.ex") == ("b.ex", 0)

    def test_override_pair_wins_over_line(self):
        meta = {"line": 12, "file": ("lib/macro.ex", 3)}
        assert resolve_location(meta, "b.ex") == ("lib/macro.ex", 3)

    def test_override_with_file_line_key(self):
        meta = {"line": 12, "file": "lib/macro.ex", "file_line": 9}
        assert resolve_location(meta, "b.ex") == ("lib/macro.ex", 9)

    def test_override_without_line_is_used_verbatim(self):
        assert resolve_location({"line": 12, "file": "lib/macro.ex"}, "b.ex") == ("lib/macro.ex", 0)

    def test_keyword_pairs(self):
        meta = [("line", 4), ("counter", 1)]
        assert resolve_location(meta, "b.ex") == ("b.ex", 4)

    def test_keyword_pairs_first_occurrence_wins(self):
        meta = [("line", 4), ("line", 9)]
        assert resolve_location(meta, "b.ex") == ("b.ex", 4)

    def test_location_meta_value(self):
        assert resolve_location(LocationMeta(line=2), "b.ex") == ("b.ex", 2)
        assert resolve_location(LocationMeta(line=2, file="c.ex", file_line=5), "b.ex") == ("c.ex", 5)

    def test_unsupported_meta(self):
        with pytest.raises(TypeError):
            resolve_location(3.5, "b.ex")


class TestLocationMeta:
    """Tests for LocationMeta construction."""

    def test_override_absent_without_file(self):
        assert LocationMeta(line=3).override is None

    def test_from_keywords_pair_file(self):
        meta = LocationMeta.from_keywords({"file": ("x.ex", 8)})
        assert meta.file == "x.ex"
        assert meta.file_line == 8
        assert meta.override == ("x.ex", 8)


class TestCoerceLine:
    """Tests for line normalization."""

    def test_none_is_zero(self):
        assert coerce_line(None) == 0

    def test_integer_kept(self):
        assert coerce_line(42) == 42

    def test_position_tuple(self):
        assert coerce_line((5, 10, None)) == 5

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            coerce_line(-1)

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            coerce_line(True)

    def test_string_rejected(self):
        with pytest.raises(TypeError):
            coerce_line("3")
