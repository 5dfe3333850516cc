"""
Partitioning of voxel volumes into 16x16x16 sections.

Section layout:
- Origin (x, y, z) is a multiple of 16 on every axis
- blocks is a flat list of 4096 ids
- Local index = (lx * 16 + ly) * 16 + lz (x outer, y middle, z inner)

Sections are emitted in row-major order over the section grid: x, then y,
then z.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from levelconv.volume import SECTION_SIZE, VolumeSource

# Constants
SECTION_VOLUME = SECTION_SIZE ** 3
OUT_OF_RANGE_VALUE = -1
LAYOUTS = ("flat", "nested")


def local_index(lx: int, ly: int, lz: int) -> int:
    """Position of local cell (lx, ly, lz) in Section.blocks."""
    return (lx * SECTION_SIZE + ly) * SECTION_SIZE + lz


@dataclass
class Section:
    """One 16x16x16 cube of block ids."""
    x: int
    y: int
    z: int
    blocks: Tuple[int, ...]

    def __post_init__(self):
        if len(self.blocks) != SECTION_VOLUME:
            raise ValueError(
                f"Section at ({self.x}, {self.y}, {self.z}) has "
                f"{len(self.blocks)} blocks, expected {SECTION_VOLUME}"
            )

    def block_at(self, lx: int, ly: int, lz: int) -> int:
        return self.blocks[local_index(lx, ly, lz)]

    def nested_blocks(self) -> List[List[List[int]]]:
        """Blocks as nested lists indexed [lx][ly][lz]."""
        n = SECTION_SIZE
        return [
            [list(self.blocks[(lx * n + ly) * n:(lx * n + ly + 1) * n]) for ly in range(n)]
            for lx in range(n)
        ]

    def to_dict(self, layout: str = "flat") -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            layout: "flat" for a 4096-length list, "nested" for 16x16x16 lists
        """
        if layout == "flat":
            blocks = list(self.blocks)
        elif layout == "nested":
            blocks = self.nested_blocks()
        else:
            raise ValueError(f"Unknown block layout: {layout}, expected one of {LAYOUTS}")

        return {"x": self.x, "y": self.y, "z": self.z, "blocks": blocks}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Section":
        """Create Section from dictionary; accepts flat or nested blocks."""
        blocks = d["blocks"]
        if blocks and isinstance(blocks[0], list):
            blocks = [block for plane in blocks for row in plane for block in row]
        return cls(x=d["x"], y=d["y"], z=d["z"], blocks=tuple(blocks))


def section_grid(extents: Sequence[int]) -> Tuple[int, int, int]:
    """Number of sections per axis: ceil(extent / 16)."""
    x, y, z = ((int(n) + SECTION_SIZE - 1) // SECTION_SIZE for n in extents)
    return x, y, z


def iter_sections(
    source: VolumeSource,
    out_of_range: int = OUT_OF_RANGE_VALUE,
) -> Iterator[Section]:
    """
    Yield the sections covering a volume, in x, y, z scan order.

    Args:
        source: Volume to partition
        out_of_range: Id for cells beyond the volume bound

    Raises:
        ValueError: If a source claiming to be padded is not 16-aligned
    """
    if source.is_padded and any(n % SECTION_SIZE for n in source.extents):
        raise ValueError(f"Padded volume extents must be multiples of {SECTION_SIZE}, got {source.extents}")

    sections_x, sections_y, sections_z = section_grid(source.extents)

    for i in range(sections_x):
        for j in range(sections_y):
            for k in range(sections_z):
                origin = (i * SECTION_SIZE, j * SECTION_SIZE, k * SECTION_SIZE)
                window = source.read_window(origin, SECTION_SIZE, fill=out_of_range)
                yield Section(
                    x=origin[0],
                    y=origin[1],
                    z=origin[2],
                    blocks=tuple(window.reshape(-1).tolist()),
                )


def sectionize(
    source: VolumeSource,
    out_of_range: int = OUT_OF_RANGE_VALUE,
) -> List[Section]:
    """
    Partition a volume into 16x16x16 sections.

    Padded sources are read fully in range. For other sources, cells past
    the volume bound are set to ``out_of_range``.

    Example:
        >>> volume = DenseVolume(pad_volume(np.ones((17, 1, 1))), is_padded=True)
        >>> [(s.x, s.y, s.z) for s in sectionize(volume)]
        [(0, 0, 0), (16, 0, 0)]
    """
    return list(iter_sections(source, out_of_range))
