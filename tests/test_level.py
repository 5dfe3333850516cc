"""Tests for level.py - level_data envelope."""

import json
import os
import tempfile
import pytest

from levelconv.level import (
    LevelData, make_level_data, get_level_info,
    level_path_for, write_level, read_level,
)
from levelconv.sections import Section, SECTION_VOLUME


def make_section(x=0, y=0, z=0, value=1):
    return Section(x=x, y=y, z=z, blocks=(value,) * SECTION_VOLUME)


class TestLevelData:
    """Test LevelData dataclass."""

    def test_default_envelope(self):
        """Test an empty level carries the fixed envelope."""
        level = LevelData()

        assert level.to_dict() == {
            "type": "level_data",
            "sections": [],
            "entities": [],
            "players": [],
        }

    def test_key_order(self):
        """Test serialized keys are in envelope order."""
        parsed = json.loads(make_level_data([make_section()]).to_json())
        assert list(parsed.keys()) == ["type", "sections", "entities", "players"]

    def test_compact_json(self):
        """Test default output is compact."""
        json_str = LevelData().to_json()
        assert json_str == '{"type":"level_data","sections":[],"entities":[],"players":[]}'

    def test_indented_json(self):
        """Test indent produces multi-line output."""
        json_str = LevelData().to_json(indent=2)
        assert "\n" in json_str
        assert json.loads(json_str)["type"] == "level_data"

    def test_deterministic(self):
        """Test serializing twice yields identical text."""
        sections = [make_section(0, 0, 0, 1), make_section(16, 0, 0, 2)]
        assert make_level_data(sections).to_json() == make_level_data(sections).to_json()

    def test_roundtrip(self):
        """Test JSON serialization roundtrip."""
        original = make_level_data([make_section(0, 16, 0, 4)])
        restored = LevelData.from_json(original.to_json())

        assert restored == original

    def test_roundtrip_nested(self):
        """Test nested layout loads back to flat sections."""
        original = make_level_data([make_section(0, 0, 0, 9)])
        restored = LevelData.from_json(original.to_json(layout="nested"))

        assert restored.sections == original.sections

    def test_make_level_data_copies_list(self):
        """Test the envelope does not alias the caller's list."""
        sections = [make_section()]
        level = make_level_data(sections)
        sections.append(make_section(16, 0, 0))

        assert len(level.sections) == 1


class TestLevelValidation:
    """Test LevelData.validate."""

    def test_valid(self):
        """Test aligned, unique sections pass."""
        level = make_level_data([make_section(0, 0, 0), make_section(0, 0, 16)])
        assert level.validate() == []

    def test_wrong_type(self):
        """Test the type field is checked."""
        level = LevelData(type="chunk_data")
        assert any("Invalid type" in e for e in level.validate())

    def test_misaligned_origin(self):
        """Test origins must be multiples of 16."""
        level = make_level_data([make_section(8, 0, 0)])
        assert any("not a multiple of 16" in e for e in level.validate())

    def test_duplicate_origin(self):
        """Test overlapping sections are reported."""
        level = make_level_data([make_section(), make_section()])
        assert any("Duplicate section" in e for e in level.validate())


class TestLevelInfo:
    """Test get_level_info."""

    def test_info(self):
        """Test counts, bounds and block histogram."""
        level = make_level_data([make_section(0, 0, 0, 1), make_section(16, 32, 0, -1)])
        info = get_level_info(level)

        assert info["section_count"] == 2
        assert info["bounds"] == {"min": (0, 0, 0), "max": (32, 48, 16)}
        assert info["block_counts"] == {-1: SECTION_VOLUME, 1: SECTION_VOLUME}

    def test_info_empty(self):
        """Test an empty level has no bounds."""
        info = get_level_info(LevelData())
        assert info["section_count"] == 0
        assert info["bounds"] is None


class TestLevelFiles:
    """Test level file I/O."""

    def test_level_path_for(self):
        """Test input.json maps to input.level.json."""
        assert str(level_path_for("data/level_data.json")) == os.path.join("data", "level_data.level.json")

    def test_write_read(self):
        """Test write then read returns the same level."""
        level = make_level_data([make_section(0, 0, 0, 3)])

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "nested", "out.level.json")
            written = write_level(path, level)

            assert os.path.exists(written)
            assert read_level(written) == level


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
