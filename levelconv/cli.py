#!/usr/bin/env python3
"""
levelconv CLI - Command-line interface for converting voxel exports to level data.

Usage:
    levelconv dense level_data.json
    levelconv structure house.json --dictionary blocks.json
    levelconv info level_data.level.json
"""

import argparse
import sys

from levelconv.config import ConversionConfig
from levelconv.palette import DEFAULT_BLOCK_ID
from levelconv.sections import LAYOUTS, OUT_OF_RANGE_VALUE
from levelconv.volume import PADDING_VALUE


def _config_from_args(args) -> ConversionConfig:
    return ConversionConfig(
        padding_value=args.padding_value,
        default_block_id=args.default_id,
        out_of_range_value=args.out_of_range_value,
        block_layout=args.layout,
        indent=args.indent,
    )


def cmd_dense(args):
    """Convert a dense voxel array to level data."""
    from levelconv.pipeline_dense import build_dense

    try:
        result = build_dense(
            input_json=args.input,
            output_json=args.output,
            config=_config_from_args(args),
            verbose=args.verbose,
        )
        print(f"Success: {result}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_structure(args):
    """Convert a paletted structure to level data."""
    from levelconv.pipeline_structure import build_structure

    try:
        result = build_structure(
            input_json=args.input,
            dictionary_json=args.dictionary,
            output_json=args.output,
            config=_config_from_args(args),
            verbose=args.verbose,
        )
        print(f"Success: {result}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_info(args):
    """Show information about a level data file."""
    from levelconv.level import get_level_info, read_level

    try:
        level = read_level(args.level_file)
        info = get_level_info(level)

        print(f"Type: {info['type']}")
        print(f"Sections: {info['section_count']}")
        if info["bounds"]:
            print(f"Bounds: {info['bounds']['min']} -> {info['bounds']['max']}")

        print(f"\nBlock ids: {len(info['block_counts'])}")
        for block_id, count in sorted(info["block_counts"].items(), key=lambda kv: -kv[1]):
            print(f"  {block_id}: {count}")

        errors = level.validate()
        if errors:
            print("\n✗ Validation failed:")
            for error in errors:
                print(f"  - {error}")
            return 1

        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _add_conversion_args(parser):
    parser.add_argument("--output", "-o", help="Output file (default: <input>.level.json)")
    parser.add_argument("--padding-value", type=int, default=PADDING_VALUE, help=f"Id for padding cells (default: {PADDING_VALUE})")
    parser.add_argument("--default-id", type=int, default=DEFAULT_BLOCK_ID, help=f"Id for unknown block names (default: {DEFAULT_BLOCK_ID})")
    parser.add_argument("--out-of-range-value", type=int, default=OUT_OF_RANGE_VALUE, help=f"Id for cells outside the volume (default: {OUT_OF_RANGE_VALUE})")
    parser.add_argument("--layout", choices=LAYOUTS, default="flat", help="Section block layout (default: flat)")
    parser.add_argument("--indent", type=int, help="Indent output JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print every created section")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="levelconv - Convert voxel exports into level data sections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  levelconv dense level_data.json
  levelconv structure house.json --dictionary blocks.json -o house.level.json
  levelconv info level_data.level.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # dense
    dense_parser = subparsers.add_parser(
        "dense",
        help="Convert a nested [x][y][z] block id array",
    )
    dense_parser.add_argument("input", help="Input .json file")
    _add_conversion_args(dense_parser)
    dense_parser.set_defaults(func=cmd_dense)

    # structure
    structure_parser = subparsers.add_parser(
        "structure",
        help="Convert a paletted structure document",
    )
    structure_parser.add_argument("input", help="Input structure .json file")
    structure_parser.add_argument("--dictionary", "-d", required=True, help="Block name to id dictionary (.json)")
    _add_conversion_args(structure_parser)
    structure_parser.set_defaults(func=cmd_structure)

    # info
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about a level data file",
    )
    info_parser.add_argument("level_file", help="Path to .level.json file")
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
