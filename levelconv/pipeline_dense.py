"""
Dense array to level_data pipeline.

Converts a nested [x][y][z] array of block ids into 16x16x16 sections.

Steps: schema check -> decode -> pad to 16-aligned extents -> sectionize
-> wrap in level_data envelope.
"""

from pathlib import Path
from typing import Optional, Union

from levelconv.config import ConversionConfig
from levelconv.level import LevelData, level_path_for, make_level_data, write_level
from levelconv.schema import DENSE_VOLUME_SCHEMA, load_json, require_valid
from levelconv.sections import iter_sections
from levelconv.volume import DenseVolume, decode_dense, pad_volume


def convert_dense(
    raw: Union[bytes, str],
    config: Optional[ConversionConfig] = None,
    verbose: bool = False,
) -> LevelData:
    """
    Convert a dense voxel document to level data.

    Args:
        raw: UTF-8 JSON text of a 3-level nested integer array
        config: Sentinel values; defaults to ConversionConfig()
        verbose: Print one line per created section

    Returns:
        LevelData with one section per 16^3 cell of the padded volume

    Raises:
        SchemaError: If the document is not a nested integer array
        VolumeShapeError: If the array is ragged or empty
    """
    config = config or ConversionConfig()
    config.validate()

    document = load_json(raw, "input file")
    require_valid(document, DENSE_VOLUME_SCHEMA, "input file")

    volume = decode_dense(document)
    padded = pad_volume(volume, fill=config.padding_value)
    source = DenseVolume(padded, is_padded=True)

    sections = []
    for section in iter_sections(source, out_of_range=config.out_of_range_value):
        if verbose:
            print(f"Creating section at ({section.x}, {section.y}, {section.z})")
        sections.append(section)

    return make_level_data(sections)


def build_dense(
    input_json: str,
    output_json: Optional[str] = None,
    config: Optional[ConversionConfig] = None,
    verbose: bool = False,
) -> str:
    """
    Build a level_data file from a dense voxel JSON file.

    Args:
        input_json: Path to input .json file
        output_json: Output path (default: <input>.level.json)
        config: Sentinel values and output options
        verbose: Print one line per created section

    Returns:
        Path to created level file

    Example:
        >>> build_dense("level_data.json")
        'level_data.level.json'
    """
    config = config or ConversionConfig()
    input_path = Path(input_json)

    if input_path.suffix != ".json":
        raise ValueError("input file must be a json file")

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_json}")

    print(f"Loading dense volume: {input_json}")
    level = convert_dense(input_path.read_bytes(), config, verbose=verbose)
    print(f"Converted {len(level.sections)} sections")

    output_path = write_level(
        output_json or level_path_for(input_path),
        level,
        indent=config.indent,
        layout=config.block_layout,
    )
    print(f"Created: {output_path}")

    return str(output_path)
