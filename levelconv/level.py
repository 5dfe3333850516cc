"""
Level data envelope for converted sections.

Output format:
    {"type": "level_data", "sections": [...], "entities": [], "players": []}

Entities and players are always empty; they are filled by other tools.
Serialization is deterministic: fixed key order and no timestamps, so the
same input always produces byte-identical output.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from levelconv.sections import SECTION_SIZE, Section

LEVEL_TYPE = "level_data"


@dataclass
class LevelData:
    """Ordered sections wrapped in the level_data envelope."""
    sections: List[Section] = field(default_factory=list)
    type: str = LEVEL_TYPE
    entities: List[Any] = field(default_factory=list)
    players: List[Any] = field(default_factory=list)

    def to_dict(self, layout: str = "flat") -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "sections": [section.to_dict(layout) for section in self.sections],
            "entities": list(self.entities),
            "players": list(self.players),
        }

    def to_json(self, indent: Optional[int] = None, layout: str = "flat") -> str:
        """Serialize to JSON string (compact unless indent is given)."""
        separators = (",", ":") if indent is None else None
        return json.dumps(self.to_dict(layout), indent=indent, separators=separators)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LevelData":
        """Create LevelData from dictionary."""
        return cls(
            sections=[Section.from_dict(s) for s in d.get("sections", [])],
            type=d.get("type", LEVEL_TYPE),
            entities=list(d.get("entities", [])),
            players=list(d.get("players", [])),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "LevelData":
        """Create LevelData from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def validate(self) -> List[str]:
        """
        Validate envelope and section placement.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.type != LEVEL_TYPE:
            errors.append(f"Invalid type: {self.type}, expected '{LEVEL_TYPE}'")

        seen = set()
        for section in self.sections:
            origin = (section.x, section.y, section.z)
            if any(c % SECTION_SIZE for c in origin):
                errors.append(f"Section origin {origin} is not a multiple of {SECTION_SIZE}")
            if origin in seen:
                errors.append(f"Duplicate section at {origin}")
            seen.add(origin)

        return errors


def make_level_data(sections: List[Section]) -> LevelData:
    """Wrap an ordered section list in a level_data envelope."""
    return LevelData(sections=list(sections))


def get_level_info(level: LevelData) -> Dict[str, Any]:
    """
    Get summary information about a level.

    Returns:
        Dict with section count, covered bounds and block id histogram
    """
    info: Dict[str, Any] = {
        "type": level.type,
        "section_count": len(level.sections),
        "bounds": None,
        "block_counts": {},
        "entity_count": len(level.entities),
        "player_count": len(level.players),
    }

    if not level.sections:
        return info

    origins = np.array([(s.x, s.y, s.z) for s in level.sections])
    info["bounds"] = {
        "min": tuple(int(c) for c in origins.min(axis=0)),
        "max": tuple(int(c) + SECTION_SIZE for c in origins.max(axis=0)),
    }

    blocks = np.concatenate([np.asarray(s.blocks, dtype=np.int64) for s in level.sections])
    ids, counts = np.unique(blocks, return_counts=True)
    info["block_counts"] = {int(i): int(c) for i, c in zip(ids, counts)}

    return info


def level_path_for(input_path: Union[str, Path]) -> Path:
    """Default output path: input.json -> input.level.json"""
    input_path = Path(input_path)
    return input_path.with_name(input_path.name[:-len(".json")] + ".level.json")


def write_level(
    path: Union[str, Path],
    level: LevelData,
    indent: Optional[int] = None,
    layout: str = "flat",
) -> Path:
    """
    Serialize a level and write it to disk.

    The whole document is serialized before the file is opened, so a
    serialization failure never leaves a partial file behind.
    """
    path = Path(path)
    payload = level.to_json(indent=indent, layout=layout)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    return path


def read_level(path: Union[str, Path]) -> LevelData:
    """Read a level_data JSON file."""
    return LevelData.from_json(Path(path).read_text(encoding="utf-8"))
