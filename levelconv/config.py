"""
Conversion settings shared by both pipelines.
"""

from dataclasses import dataclass
from typing import Optional

from levelconv.palette import DEFAULT_BLOCK_ID
from levelconv.schema import INT64_MAX, INT64_MIN
from levelconv.sections import LAYOUTS, OUT_OF_RANGE_VALUE
from levelconv.volume import PADDING_VALUE


@dataclass
class ConversionConfig:
    """
    Sentinel values and output options.

    Attributes:
        padding_value: Id for cells added when padding a dense volume
        default_block_id: Id for palette names missing from the dictionary
        out_of_range_value: Id for section cells beyond the volume bound
        block_layout: "flat" (4096 ids) or "nested" (16x16x16) section blocks
        indent: JSON indent for the written level, None for compact output
    """
    padding_value: int = PADDING_VALUE
    default_block_id: int = DEFAULT_BLOCK_ID
    out_of_range_value: int = OUT_OF_RANGE_VALUE
    block_layout: str = "flat"
    indent: Optional[int] = None

    def validate(self) -> None:
        if self.block_layout not in LAYOUTS:
            raise ValueError(f"Unknown block layout: {self.block_layout}, expected one of {LAYOUTS}")
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"Indent must be non-negative, got {self.indent}")
        for name in ("padding_value", "default_block_id", "out_of_range_value"):
            value = getattr(self, name)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ValueError(f"{name} must fit in int64, got {value}")
