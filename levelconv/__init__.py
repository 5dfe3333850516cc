"""
levelconv - Convert voxel exports into chunked level data.

Two input encodings are supported:
- dense: nested [x][y][z] array of block ids
- structure: flat palette indices + block palette, resolved through a
  block name -> id dictionary

Both produce a level_data envelope holding 16x16x16 sections:
- type: "level_data"
- sections: [{"x", "y", "z", "blocks"}, ...]
- entities, players: always empty
"""

__version__ = "0.1.0"

from levelconv.config import ConversionConfig
from levelconv.errors import ConversionError, SchemaError, VolumeShapeError
from levelconv.level import LevelData, make_level_data, read_level, write_level
from levelconv.pipeline_dense import build_dense, convert_dense
from levelconv.pipeline_structure import build_structure, convert_structure
from levelconv.sections import Section, sectionize

__all__ = [
    "ConversionConfig",
    "ConversionError",
    "SchemaError",
    "VolumeShapeError",
    "LevelData",
    "make_level_data",
    "read_level",
    "write_level",
    "build_dense",
    "convert_dense",
    "build_structure",
    "convert_structure",
    "Section",
    "sectionize",
]
