"""
Level table for word grid generation.
Maps difficulty levels to grid sizes and describes the level catalogue.
"""

import re
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field


DEFAULT_LEVEL = 1

LEVEL_SIZES: Dict[int, int] = {1: 10, 2: 15, 3: 20}

LEVEL_NAMES: Dict[int, str] = {
    1: 'Легкий',
    2: 'Средний',
    3: 'Сложный'
}


LEVEL_PATTERN = re.compile(r"-?\d+", re.ASCII)


def parse_level(level: Any) -> Optional[int]:
    """Parse a level given as an int or an integer string; anything else is None."""
    if isinstance(level, bool):
        return None
    if isinstance(level, int):
        return level
    if isinstance(level, str) and LEVEL_PATTERN.fullmatch(level.strip()):
        return int(level.strip())
    return None


def grid_size_for_level(level: Any, level_sizes: Optional[Dict[int, int]] = None) -> int:
    """Get the grid size for a level, falling back to the default level's size."""
    sizes = level_sizes if level_sizes is not None else LEVEL_SIZES

    key = parse_level(level)
    if key is not None and key in sizes:
        return sizes[key]
    return sizes.get(DEFAULT_LEVEL, LEVEL_SIZES[DEFAULT_LEVEL])


@dataclass
class LevelInfo:
    """Describes one level of the game."""
    id: int
    name: str
    grid_size: int
    words: List[str] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.words)

    def to_dict(self) -> Dict[str, Any]:
        """Convert level description to dictionary representation."""
        return {
            'id': self.id,
            'name': self.name,
            'gridSize': self.grid_size,
            'wordCount': self.word_count,
            'words': list(self.words)
        }


def describe_levels(word_list, level_sizes: Optional[Dict[int, int]] = None) -> List[LevelInfo]:
    """Build the level catalogue for a word list."""
    sizes = level_sizes if level_sizes is not None else LEVEL_SIZES

    levels = []
    for level in sorted(sizes):
        levels.append(LevelInfo(
            id=level,
            name=LEVEL_NAMES.get(level, f"Уровень {level}"),
            grid_size=sizes[level],
            words=list(word_list.words_for_level(level))
        ))

    return levels
