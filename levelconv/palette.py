"""
Paletted structure documents and palette-to-id resolution.

A structure document stores its blocks as a flat sequence of palette
indices plus an ordered palette of block names. Resolution maps every
index to a global block id through an external block dictionary; names
missing from the dictionary fall back to a default id.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from levelconv.errors import VolumeShapeError

# Constants
DEFAULT_BLOCK_ID = 0


@dataclass
class Structure:
    """
    Decoded structure document.

    Attributes:
        size: Declared (size_x, size_y, size_z)
        indices: Flat palette indices, index = (x * size_y + y) * size_z + z
        palette: Block names, position is the palette index
    """
    size: Tuple[int, int, int]
    indices: np.ndarray
    palette: Tuple[str, ...]

    @property
    def volume(self) -> int:
        size_x, size_y, size_z = self.size
        return size_x * size_y * size_z


def decode_structure(document: Dict[str, Any]) -> Structure:
    """
    Decode a schema-valid structure document.

    Only the first layer of ``structure.block_indices`` is used.
    """
    size_x, size_y, size_z = (int(n) for n in document["size"])
    structure = document["structure"]
    indices = np.asarray(structure["block_indices"][0], dtype=np.int64)
    palette = tuple(
        entry["name"] for entry in structure["palette"]["default"]["block_palette"]
    )
    return Structure(size=(size_x, size_y, size_z), indices=indices, palette=palette)


def check_structure(structure: Structure) -> List[str]:
    """
    Check that indices and palette agree with each other and the size.

    Rules:
    - one index per cell: len(indices) == size_x * size_y * size_z
    - no negative indices
    - the palette exactly covers the index range: len(palette) == max + 1

    Returns:
        List of problems (empty if consistent)
    """
    errors = []
    size_x, size_y, size_z = structure.size
    count = len(structure.indices)

    if count != structure.volume:
        errors.append(
            f"block index count {count} does not match size "
            f"{size_x}x{size_y}x{size_z} ({structure.volume})"
        )

    if count > 0:
        lowest = int(structure.indices.min())
        highest = int(structure.indices.max())
        if lowest < 0:
            errors.append(f"negative palette index: {lowest}")
        if len(structure.palette) != highest + 1:
            errors.append(
                f"palette has {len(structure.palette)} entries, "
                f"indices reference {highest + 1}"
            )

    return errors


def require_consistent(structure: Structure) -> None:
    """Raise VolumeShapeError if check_structure reports any problem."""
    errors = check_structure(structure)
    if errors:
        raise VolumeShapeError("input structure is not valid: " + "; ".join(errors))


def decode_block_dictionary(document: Dict[str, Any]) -> Dict[str, int]:
    """Decode a schema-valid block dictionary into {name: block id}."""
    return {str(name): int(block_id) for name, block_id in document.items()}


def unknown_block_names(structure: Structure, dictionary: Dict[str, int]) -> List[str]:
    """Palette names that the dictionary does not map, sorted."""
    return sorted({name for name in structure.palette if name not in dictionary})


def resolve_palette(
    structure: Structure,
    dictionary: Dict[str, int],
    default_id: int = DEFAULT_BLOCK_ID,
) -> np.ndarray:
    """
    Resolve every palette index to a global block id.

    Args:
        structure: Consistent structure (see check_structure)
        dictionary: Block name to global id mapping
        default_id: Id used for names absent from the dictionary

    Returns:
        Flat int64 array, same length and order as structure.indices
    """
    if len(structure.indices) == 0:
        return np.zeros(0, dtype=np.int64)

    if int(structure.indices.min()) < 0 or int(structure.indices.max()) >= len(structure.palette):
        raise VolumeShapeError("palette index out of range")

    lookup = np.array(
        [dictionary.get(name, default_id) for name in structure.palette],
        dtype=np.int64,
    )
    return lookup[structure.indices]
