"""Tests for sections.py - 16x16x16 partitioning."""

import numpy as np
import pytest

from levelconv.sections import (
    Section, SECTION_VOLUME, local_index, section_grid, sectionize,
)
from levelconv.volume import DenseVolume, FlatVolume, pad_volume


def reconstruct(sections, shape):
    """Place section blocks back at absolute coordinates."""
    volume = np.full(shape, -100, dtype=np.int64)
    hits = np.zeros(shape, dtype=np.int64)
    for s in sections:
        block = np.array(s.blocks).reshape(16, 16, 16)
        volume[s.x:s.x + 16, s.y:s.y + 16, s.z:s.z + 16] = block
        hits[s.x:s.x + 16, s.y:s.y + 16, s.z:s.z + 16] += 1
    return volume, hits


class TestSection:
    """Test the Section dataclass."""

    def test_local_index(self):
        """Test x outer, y middle, z inner ordering."""
        assert local_index(0, 0, 1) == 1
        assert local_index(0, 1, 0) == 16
        assert local_index(1, 0, 0) == 256
        assert local_index(1, 2, 3) == 291

    def test_wrong_block_count(self):
        """Test sections must hold exactly 4096 blocks."""
        with pytest.raises(ValueError, match="expected 4096"):
            Section(x=0, y=0, z=0, blocks=(0,) * 10)

    def test_nested_blocks(self):
        """Test nested lists agree with block_at."""
        section = Section(x=0, y=16, z=0, blocks=tuple(range(SECTION_VOLUME)))
        nested = section.nested_blocks()

        assert len(nested) == 16
        assert len(nested[0]) == 16
        assert len(nested[0][0]) == 16
        assert nested[1][2][3] == section.block_at(1, 2, 3) == 291

    def test_to_dict_layouts(self):
        """Test flat and nested serialization."""
        section = Section(x=16, y=0, z=32, blocks=(7,) * SECTION_VOLUME)

        flat = section.to_dict()
        assert list(flat.keys()) == ["x", "y", "z", "blocks"]
        assert len(flat["blocks"]) == SECTION_VOLUME

        nested = section.to_dict(layout="nested")
        assert len(nested["blocks"]) == 16
        assert nested["blocks"][15][15][15] == 7

        with pytest.raises(ValueError, match="Unknown block layout"):
            section.to_dict(layout="sparse")

    def test_from_dict_accepts_both_layouts(self):
        """Test flat and nested dictionaries load to the same section."""
        section = Section(x=0, y=0, z=16, blocks=tuple(range(SECTION_VOLUME)))

        assert Section.from_dict(section.to_dict()) == section
        assert Section.from_dict(section.to_dict(layout="nested")) == section


class TestSectionGrid:
    """Test section counts per axis."""

    def test_grid(self):
        """Test ceil(extent / 16) on each axis."""
        assert section_grid((16, 16, 16)) == (1, 1, 1)
        assert section_grid((17, 1, 1)) == (2, 1, 1)
        assert section_grid((2, 33, 48)) == (1, 3, 3)


class TestSectionizePadded:
    """Test partitioning of padded dense volumes."""

    def test_count_and_size(self):
        """Test one 4096-block section per 16^3 cell."""
        padded = pad_volume(np.zeros((20, 5, 40), dtype=np.int64))
        sections = sectionize(DenseVolume(padded, is_padded=True))

        assert len(sections) == (32 // 16) * (16 // 16) * (48 // 16)
        assert all(len(s.blocks) == SECTION_VOLUME for s in sections)

    def test_reconstructs_volume(self):
        """Test sections cover the volume exactly once and reproduce it."""
        np.random.seed(11)
        padded = np.random.randint(-1, 200, size=(32, 16, 48))
        sections = sectionize(DenseVolume(padded, is_padded=True))

        volume, hits = reconstruct(sections, padded.shape)
        assert np.array_equal(volume, padded)
        assert np.all(hits == 1)

    def test_emission_order(self):
        """Test sections are ordered by x, then y, then z."""
        padded = np.zeros((32, 32, 32), dtype=np.int64)
        origins = [(s.x, s.y, s.z) for s in sectionize(DenseVolume(padded, is_padded=True))]

        assert origins == [
            (0, 0, 0), (0, 0, 16), (0, 16, 0), (0, 16, 16),
            (16, 0, 0), (16, 0, 16), (16, 16, 0), (16, 16, 16),
        ]

    def test_unaligned_padded_source(self):
        """Test a source claiming padding must be 16-aligned."""
        source = DenseVolume(np.zeros((17, 16, 16)), is_padded=True)
        with pytest.raises(ValueError, match="multiples of 16"):
            sectionize(source)


class TestSectionizeUnpadded:
    """Test out-of-range fill for sources that are not padded."""

    def test_dense_out_of_range(self):
        """Test cells past the bound get the out-of-range value."""
        source = DenseVolume(np.arange(1, 18).reshape(17, 1, 1))
        sections = sectionize(source)

        assert [(s.x, s.y, s.z) for s in sections] == [(0, 0, 0), (16, 0, 0)]
        assert sections[0].block_at(15, 0, 0) == 16
        assert sections[1].block_at(0, 0, 0) == 17
        assert sections[1].block_at(1, 0, 0) == -1
        assert sections[1].blocks.count(-1) == SECTION_VOLUME - 1

    def test_custom_out_of_range(self):
        """Test the out-of-range value is configurable."""
        source = FlatVolume([5], (1, 1, 1))
        sections = sectionize(source, out_of_range=0)

        assert sections[0].blocks[0] == 5
        assert sum(sections[0].blocks) == 5

    def test_flat_reconstructs_prefix(self):
        """Test flat sources place cells at their spatial position."""
        size = (18, 3, 17)
        buffer = np.arange(np.prod(size))
        sections = sectionize(FlatVolume(buffer, size))

        assert len(sections) == 2 * 1 * 2
        volume, hits = reconstruct(sections, (32, 16, 32))
        assert np.all(hits == 1)
        assert np.array_equal(volume[:18, :3, :17], buffer.reshape(size))

        outside = np.ones((32, 16, 32), dtype=bool)
        outside[:18, :3, :17] = False
        assert np.all(volume[outside] == -1)

    def test_flat_short_buffer(self):
        """Test a buffer shorter than the size fills instead of crashing."""
        sections = sectionize(FlatVolume([1, 2], (1, 1, 4)))

        assert sections[0].blocks[:4] == (1, 2, -1, -1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
