"""
Voxel volumes: dense decoding, 16-alignment padding and read access.

Coordinate convention:
- Grid indices are [x, y, z]
- Dense volumes are numpy arrays with shape [size_x, size_y, size_z]
- Flat buffers are addressed as index = (x * size_y + y) * size_z + z
  (x outer, z inner)

Both volume kinds implement the VolumeSource interface so the sectionizer
only needs one implementation.
"""

from typing import Any, List, Sequence, Tuple

import numpy as np

from levelconv.errors import VolumeShapeError

# Constants
SECTION_SIZE = 16
PADDING_VALUE = -1

Extents = Tuple[int, int, int]


def check_rectangular(nested: Sequence[Sequence[Sequence[Any]]]) -> bool:
    """
    Check that a nested [x][y][z] list is a non-empty rectangular volume.

    Every plane must hold the same number of rows and every row the same
    number of cells. Zero-length extents are rejected.
    """
    if len(nested) == 0 or len(nested[0]) == 0 or len(nested[0][0]) == 0:
        return False

    size_y = len(nested[0])
    size_z = len(nested[0][0])

    for plane in nested:
        if len(plane) != size_y:
            return False
        for row in plane:
            if len(row) != size_z:
                return False

    return True


def decode_dense(document: List[List[List[int]]]) -> np.ndarray:
    """
    Decode a schema-valid nested array into a 3D int64 volume.

    Args:
        document: Nested [x][y][z] list of block ids

    Returns:
        Array with shape [size_x, size_y, size_z]

    Raises:
        VolumeShapeError: If the array is ragged or has an empty axis
    """
    if not check_rectangular(document):
        raise VolumeShapeError("input array is not valid: volume must be rectangular and non-empty")
    return np.array(document, dtype=np.int64)


def padded_extents(extents: Sequence[int], multiple: int = SECTION_SIZE) -> Extents:
    """Round each extent up to the next multiple of ``multiple``."""
    x, y, z = ((int(n) + multiple - 1) // multiple * multiple for n in extents)
    return x, y, z


def pad_volume(volume: np.ndarray, fill: int = PADDING_VALUE) -> np.ndarray:
    """
    Pad a dense volume so every axis is a multiple of 16.

    The original data occupies the zero-origin corner of the result; all
    newly introduced cells hold ``fill``.

    Args:
        volume: 3D array [size_x, size_y, size_z]
        fill: Value for padding cells

    Returns:
        New array with padded extents
    """
    volume = np.asarray(volume)
    if volume.ndim != 3:
        raise ValueError(f"Volume must be 3D, got shape {volume.shape}")

    padded = np.full(padded_extents(volume.shape), fill, dtype=np.int64)
    size_x, size_y, size_z = volume.shape
    padded[:size_x, :size_y, :size_z] = volume
    return padded


class VolumeSource:
    """
    Read access to a voxel volume, independent of its storage.

    Attributes:
        extents: (size_x, size_y, size_z)
        is_padded: True if every extent is guaranteed to be a multiple of 16
    """

    extents: Extents = (0, 0, 0)
    is_padded: bool = False

    def get(self, x: int, y: int, z: int, fill: int = PADDING_VALUE) -> int:
        """
        Block id at (x, y, z), or ``fill`` outside the volume.

        Subclasses must implement this.
        """
        raise NotImplementedError

    def contains(self, x: int, y: int, z: int) -> bool:
        size_x, size_y, size_z = self.extents
        return 0 <= x < size_x and 0 <= y < size_y and 0 <= z < size_z

    def read_window(
        self,
        origin: Sequence[int],
        size: int = SECTION_SIZE,
        fill: int = PADDING_VALUE,
    ) -> np.ndarray:
        """
        Read a size^3 cube starting at ``origin``.

        This per-cell default is the reference implementation for custom
        sources that only provide get(). DenseVolume and FlatVolume override
        it with numpy slicing.

        Cells outside the volume hold ``fill``.

        Returns:
            int64 array with shape [size, size, size], indexed [x, y, z]
        """
        x0, y0, z0 = origin
        window = np.empty((size, size, size), dtype=np.int64)
        for lx in range(size):
            for ly in range(size):
                for lz in range(size):
                    window[lx, ly, lz] = self.get(x0 + lx, y0 + ly, z0 + lz, fill)
        return window


class DenseVolume(VolumeSource):
    """Volume backed by a 3D numpy array."""

    def __init__(self, array: np.ndarray, is_padded: bool = False):
        array = np.asarray(array, dtype=np.int64)
        if array.ndim != 3:
            raise ValueError(f"Volume must be 3D, got shape {array.shape}")
        self.array = array
        self.extents = tuple(int(n) for n in array.shape)
        self.is_padded = is_padded

    def get(self, x: int, y: int, z: int, fill: int = PADDING_VALUE) -> int:
        if not self.contains(x, y, z):
            return fill
        return int(self.array[x, y, z])

    def read_window(
        self,
        origin: Sequence[int],
        size: int = SECTION_SIZE,
        fill: int = PADDING_VALUE,
    ) -> np.ndarray:
        x0, y0, z0 = origin
        size_x, size_y, size_z = self.extents

        window = np.full((size, size, size), fill, dtype=np.int64)
        x1 = min(x0 + size, size_x)
        y1 = min(y0 + size, size_y)
        z1 = min(z0 + size, size_z)
        if x1 > x0 and y1 > y0 and z1 > z0:
            window[:x1 - x0, :y1 - y0, :z1 - z0] = self.array[x0:x1, y0:y1, z0:z1]
        return window


class FlatVolume(VolumeSource):
    """
    Volume backed by a flat buffer with declared extents.

    The buffer is never reshaped; cells are read through computed offsets.
    Offsets at or beyond the end of the buffer read as the fill value, so a
    short buffer degrades to fill cells rather than raising or wrapping.
    """

    def __init__(self, buffer: Sequence[int], extents: Sequence[int]):
        self.buffer = np.asarray(buffer, dtype=np.int64).reshape(-1)
        self.extents = tuple(int(n) for n in extents)
        self.is_padded = False

    def offset(self, x: int, y: int, z: int) -> int:
        _, size_y, size_z = self.extents
        return (x * size_y + y) * size_z + z

    def get(self, x: int, y: int, z: int, fill: int = PADDING_VALUE) -> int:
        if not self.contains(x, y, z):
            return fill
        offset = self.offset(x, y, z)
        if offset >= len(self.buffer):
            return fill
        return int(self.buffer[offset])

    def read_window(
        self,
        origin: Sequence[int],
        size: int = SECTION_SIZE,
        fill: int = PADDING_VALUE,
    ) -> np.ndarray:
        size_x, size_y, size_z = self.extents
        local = np.indices((size, size, size))
        gx = local[0] + origin[0]
        gy = local[1] + origin[1]
        gz = local[2] + origin[2]

        offsets = (gx * size_y + gy) * size_z + gz
        inside = (gx < size_x) & (gy < size_y) & (gz < size_z)
        inside &= offsets < len(self.buffer)

        window = np.full((size, size, size), fill, dtype=np.int64)
        window[inside] = self.buffer[offsets[inside]]
        return window
