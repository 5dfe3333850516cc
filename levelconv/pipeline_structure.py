"""
Structure document to level_data pipeline.

Converts a paletted structure (flat palette indices + block palette) into
16x16x16 sections, resolving block names through a block dictionary.

Steps: schema check (structure and dictionary) -> decode -> count checks
-> palette resolution -> sectionize the flat id buffer -> wrap in
level_data envelope.

The flat buffer is not padded first; section cells beyond the declared
size are filled with the out-of-range value.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from levelconv.config import ConversionConfig
from levelconv.level import LevelData, level_path_for, make_level_data, write_level
from levelconv.palette import (
    Structure, decode_block_dictionary, decode_structure,
    require_consistent, resolve_palette, unknown_block_names,
)
from levelconv.schema import BLOCK_DICTIONARY_SCHEMA, STRUCTURE_SCHEMA, load_json, require_valid
from levelconv.sections import iter_sections
from levelconv.volume import FlatVolume


def load_structure(
    raw: Union[bytes, str],
    dictionary_raw: Union[bytes, str],
) -> Tuple[Structure, Dict[str, int]]:
    """
    Validate and decode a structure document and its block dictionary.

    Raises:
        SchemaError: If either document fails its schema
        VolumeShapeError: If indices, size and palette disagree
    """
    document = load_json(raw, "input file")
    require_valid(document, STRUCTURE_SCHEMA, "input file")

    dictionary_document = load_json(dictionary_raw, "block dictionary")
    require_valid(dictionary_document, BLOCK_DICTIONARY_SCHEMA, "block dictionary")

    structure = decode_structure(document)
    require_consistent(structure)

    return structure, decode_block_dictionary(dictionary_document)


def structure_to_level(
    structure: Structure,
    dictionary: Dict[str, int],
    config: Optional[ConversionConfig] = None,
    verbose: bool = False,
) -> LevelData:
    """
    Resolve a consistent structure and partition it into sections.

    Args:
        structure: Decoded structure (see load_structure)
        dictionary: Block name to global id mapping
        config: Sentinel values; defaults to ConversionConfig()
        verbose: Print one line per created section

    Returns:
        LevelData with ceil(size / 16) sections per axis
    """
    config = config or ConversionConfig()
    config.validate()

    block_ids = resolve_palette(structure, dictionary, default_id=config.default_block_id)
    source = FlatVolume(block_ids, structure.size)

    sections = []
    for section in iter_sections(source, out_of_range=config.out_of_range_value):
        if verbose:
            print(f"Creating section at ({section.x}, {section.y}, {section.z})")
        sections.append(section)

    return make_level_data(sections)


def convert_structure(
    raw: Union[bytes, str],
    dictionary_raw: Union[bytes, str],
    config: Optional[ConversionConfig] = None,
    verbose: bool = False,
) -> LevelData:
    """
    Convert a structure document to level data.

    Args:
        raw: UTF-8 JSON text of the structure document
        dictionary_raw: UTF-8 JSON text of the block dictionary
        config: Sentinel values; defaults to ConversionConfig()
        verbose: Print one line per created section

    Returns:
        LevelData

    Example:
        >>> level = convert_structure(structure_bytes, dictionary_bytes)
        >>> len(level.sections[0].blocks)
        4096
    """
    structure, dictionary = load_structure(raw, dictionary_raw)
    return structure_to_level(structure, dictionary, config, verbose=verbose)


def build_structure(
    input_json: str,
    dictionary_json: str,
    output_json: Optional[str] = None,
    config: Optional[ConversionConfig] = None,
    verbose: bool = False,
) -> str:
    """
    Build a level_data file from a structure JSON file.

    Args:
        input_json: Path to structure .json file
        dictionary_json: Path to block dictionary .json file
        output_json: Output path (default: <input>.level.json)
        config: Sentinel values and output options
        verbose: Print one line per created section

    Returns:
        Path to created level file
    """
    config = config or ConversionConfig()
    input_path = Path(input_json)
    dictionary_path = Path(dictionary_json)

    if input_path.suffix != ".json":
        raise ValueError("input file must be a json file")

    if dictionary_path.suffix != ".json":
        raise ValueError("block dictionary must be a json file")

    for path in (input_path, dictionary_path):
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

    print(f"Loading structure: {input_json}")
    structure, dictionary = load_structure(input_path.read_bytes(), dictionary_path.read_bytes())

    size_x, size_y, size_z = structure.size
    print(f"Structure size: {size_x}x{size_y}x{size_z}, palette: {len(structure.palette)} blocks")

    for name in unknown_block_names(structure, dictionary):
        print(f"Warning: unknown block {name}, using id {config.default_block_id}")

    level = structure_to_level(structure, dictionary, config, verbose=verbose)
    print(f"Converted {len(level.sections)} sections")

    output_path = write_level(
        output_json or level_path_for(input_path),
        level,
        indent=config.indent,
        layout=config.block_layout,
    )
    print(f"Created: {output_path}")

    return str(output_path)
