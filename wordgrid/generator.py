"""
Word grid generation module.
Places level words into a square grid and fills the rest with random letters.
"""

import random
import logging
from typing import List, Tuple, Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum

from wordgrid.levels import LEVEL_SIZES, grid_size_for_level
from wordgrid.wordlist import WordList


DEFAULT_ALPHABET = 'АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ'

# Marks a cell nothing has been written to yet
BLANK = ' '

MAX_PLACEMENT_ATTEMPTS = 50

Grid = List[List[str]]
Cell = Tuple[int, int]


class Direction(Enum):
    """Directions a word can run in the grid."""
    EAST = "E"
    SOUTH = "S"
    WEST = "W"
    NORTH = "N"

    @property
    def delta(self) -> Tuple[int, int]:
        """Get the (dx, dy) step for this direction; x is the column, y the row."""
        deltas = {
            Direction.EAST: (1, 0),
            Direction.SOUTH: (0, 1),
            Direction.WEST: (-1, 0),
            Direction.NORTH: (0, -1)
        }
        return deltas[self]

    @classmethod
    def from_delta(cls, delta_row: int, delta_col: int) -> 'Direction':
        """Infer the direction of a line from its (row, col) extent."""
        if (delta_row == 0) == (delta_col == 0):
            raise ValueError(f"Not a horizontal or vertical line: ({delta_row}, {delta_col})")

        step = ((delta_col > 0) - (delta_col < 0), (delta_row > 0) - (delta_row < 0))
        for direction in cls:
            if direction.delta == step:
                return direction
        raise ValueError(f"Invalid direction delta: ({delta_row}, {delta_col})")


@dataclass
class Placement:
    """A word embedded in the grid, with inclusive (row, col) endpoints."""
    word: str
    start: Cell
    end: Cell
    found: bool = False

    @property
    def direction(self) -> Optional[Direction]:
        """Direction the word reads in, or None for a single letter."""
        if self.start == self.end:
            return None
        return Direction.from_delta(self.end[0] - self.start[0], self.end[1] - self.start[1])

    def coordinates(self) -> List[Cell]:
        """Get all cells occupied by this word, from start to end."""
        direction = self.direction
        if direction is None:
            return [self.start]

        dx, dy = direction.delta
        row, col = self.start
        return [(row + i * dy, col + i * dx) for i in range(len(self.word))]

    def matches(self, start: Cell, end: Cell) -> bool:
        """Check whether a selection covers this word, in either orientation."""
        selection = (tuple(start), tuple(end))
        return selection in ((self.start, self.end), (self.end, self.start))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'word': self.word,
            'start': list(self.start),
            'end': list(self.end),
            'found': self.found
        }


@dataclass
class GridResult:
    """A generated grid together with the words placed in it."""
    level: Any
    grid_size: int
    grid: Grid
    words: List[Placement]
    skipped_words: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response shape consumed by the game client."""
        return {
            'level': self.level,
            'gridSize': self.grid_size,
            'grid': [list(row) for row in self.grid],
            'words': [placement.to_dict() for placement in self.words]
        }


class GridGenerator:
    """Generator for level word grids.

    Holds only the shared word list and a random source; every call to
    generate() builds its own grid, so one instance can serve any number of
    requests.
    """

    def __init__(self, word_list: WordList, alphabet: str = DEFAULT_ALPHABET,
                 level_sizes: Optional[Dict[int, int]] = None,
                 max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
                 rng: Optional[random.Random] = None):
        """Initialize the grid generator.

        Args:
            word_list: Words to place, keyed by level
            alphabet: Letters used to fill cells no word occupies
            level_sizes: Level to grid size table
            max_attempts: Random placement attempts per word before it is dropped
            rng: Random source; pass a seeded random.Random for repeatable grids
        """
        if not alphabet or BLANK in alphabet:
            raise ValueError("Fill alphabet must be non-empty and must not contain the blank marker")

        self.word_list = word_list
        self.alphabet = alphabet
        self.level_sizes = dict(level_sizes) if level_sizes is not None else dict(LEVEL_SIZES)
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else random.Random()
        self.directions = list(Direction)

        self.logger = logging.getLogger(__name__)

    def generate(self, level: Any) -> GridResult:
        """Generate a grid for a level.

        Unknown levels use the default level's grid size and words. Words that
        cannot be placed are left out of the result.
        """
        size = grid_size_for_level(level, self.level_sizes)
        words = self.word_list.words_for_level(level)

        grid = [[BLANK for _ in range(size)] for _ in range(size)]
        placements = []
        skipped = []

        for word in words:
            placement = self.place_word(grid, word, size)
            if placement:
                placements.append(placement)
            else:
                skipped.append(word)
                self.logger.warning(f"Could not place word: {word}")

        self.fill_empty_cells(grid, size)

        self.logger.debug(f"Generated {size}x{size} grid for level {level} "
                          f"with {len(placements)}/{len(words)} words")

        return GridResult(
            level=level,
            grid_size=size,
            grid=grid,
            words=placements,
            skipped_words=skipped
        )

    def place_word(self, grid: Grid, word: str, size: int) -> Optional[Placement]:
        """Attempt to place a word at a random position and direction."""
        if not word:
            return None

        length = len(word)

        for attempt in range(self.max_attempts):
            direction = self.rng.choice(self.directions)
            dx, dy = direction.delta

            min_x, max_x = self._start_range(dx, length, size)
            min_y, max_y = self._start_range(dy, length, size)

            if min_x > max_x or min_y > max_y:
                continue

            start_x = self.rng.randint(min_x, max_x)
            start_y = self.rng.randint(min_y, max_y)

            if self.can_place_word(grid, word, start_x, start_y, direction, size):
                self.put_word(grid, word, start_x, start_y, direction)

                end_x = start_x + dx * (length - 1)
                end_y = start_y + dy * (length - 1)

                return Placement(
                    word=word,
                    start=(start_y, start_x),
                    end=(end_y, end_x)
                )

        return None

    @staticmethod
    def _start_range(step: int, length: int, size: int) -> Tuple[int, int]:
        """Get the inclusive range of start coordinates along one axis."""
        if step > 0:
            return 0, size - length
        elif step < 0:
            return length - 1, size - 1
        else:
            return 0, size - 1

    def can_place_word(self, grid: Grid, word: str, start_x: int, start_y: int,
                       direction: Direction, size: int) -> bool:
        """Check every cell on the word's path is blank or already holds its letter."""
        dx, dy = direction.delta
        x, y = start_x, start_y

        for letter in word:
            if not (0 <= x < size and 0 <= y < size):
                return False

            if grid[y][x] != BLANK and grid[y][x] != letter:
                return False

            x += dx
            y += dy

        return True

    def put_word(self, grid: Grid, word: str, start_x: int, start_y: int, direction: Direction):
        """Write a word into the grid."""
        dx, dy = direction.delta
        x, y = start_x, start_y

        for letter in word:
            grid[y][x] = letter
            x += dx
            y += dy

    def fill_empty_cells(self, grid: Grid, size: int):
        """Fill every blank cell with a random alphabet letter."""
        for y in range(size):
            for x in range(size):
                if grid[y][x] == BLANK:
                    grid[y][x] = self.rng.choice(self.alphabet)


def generate_grid(level: Any, word_list: WordList,
                  rng: Optional[random.Random] = None, **kwargs) -> GridResult:
    """Generate a grid for a level with a one-off generator."""
    generator = GridGenerator(word_list, rng=rng, **kwargs)
    return generator.generate(level)


def validate_grid(result: GridResult) -> Tuple[bool, List[str]]:
    """Validate a generated grid and its placements.

    Repeated words are placed once per occurrence in the word list and are not
    reported here; validate_word_list flags them in the source list.
    """
    issues = []
    size = result.grid_size

    if len(result.grid) != size:
        issues.append(f"Grid height mismatch: expected {size}, got {len(result.grid)}")

    for i, row in enumerate(result.grid):
        if len(row) != size:
            issues.append(f"Grid width mismatch at row {i}: expected {size}, got {len(row)}")

    for i, row in enumerate(result.grid):
        for j, cell in enumerate(row):
            if cell == BLANK or len(cell) != 1:
                issues.append(f"Cell ({i},{j}) is not filled")

    for placement in result.words:
        try:
            coordinates = placement.coordinates()
        except ValueError:
            issues.append(f"Word {placement.word} is not horizontal or vertical")
            continue

        if coordinates[-1] != placement.end:
            issues.append(f"Word {placement.word} length does not match its endpoints")
            continue

        actual_word = ""
        for row, col in coordinates:
            if not (0 <= row < len(result.grid) and 0 <= col < len(result.grid[row])):
                issues.append(f"Word {placement.word} extends outside grid bounds")
                break
            actual_word += result.grid[row][col]
        else:
            if actual_word != placement.word:
                issues.append(f"Word {placement.word} not found at specified location")

    return len(issues) == 0, issues


def answer_key(result: GridResult) -> Grid:
    """Get a grid showing only the placed words."""
    key = [['.' for _ in range(result.grid_size)] for _ in range(result.grid_size)]

    for placement in result.words:
        for i, (row, col) in enumerate(placement.coordinates()):
            key[row][col] = placement.word[i]

    return key


def find_word(grid: Grid, word: str) -> Optional[Placement]:
    """Find a word in a grid along any of the four directions."""
    word = word.upper()
    if not word:
        return None

    height = len(grid)
    for start_row in range(height):
        width = len(grid[start_row])
        for start_col in range(width):
            if grid[start_row][start_col] != word[0]:
                continue

            for direction in Direction:
                dx, dy = direction.delta
                end_row = start_row + dy * (len(word) - 1)
                end_col = start_col + dx * (len(word) - 1)

                if not (0 <= end_row < height and 0 <= end_col < width):
                    continue

                if all(grid[start_row + i * dy][start_col + i * dx] == word[i]
                       for i in range(len(word))):
                    return Placement(word=word, start=(start_row, start_col), end=(end_row, end_col))

    return None


def check_selection(result: GridResult, start: Cell, end: Cell) -> Optional[Placement]:
    """Mark the placed word a player selected from start to end as found."""
    for placement in result.words:
        if placement.matches(start, end):
            placement.found = True
            return placement
    return None


def grid_statistics(result: GridResult) -> Dict[str, Any]:
    """Get statistics about a generated grid."""
    total_cells = result.grid_size * result.grid_size
    word_cells = len({cell for placement in result.words for cell in placement.coordinates()})

    direction_counts = {}
    for placement in result.words:
        direction = placement.direction
        key = direction.value if direction else '-'
        direction_counts[key] = direction_counts.get(key, 0) + 1

    word_lengths = [len(placement.word) for placement in result.words]
    attempted = len(result.words) + len(result.skipped_words)

    return {
        'grid_size': f"{result.grid_size}x{result.grid_size}",
        'placed_words': len(result.words),
        'skipped_words': len(result.skipped_words),
        'placement_rate': len(result.words) / attempted if attempted else 1.0,
        'word_cell_density': word_cells / total_cells if total_cells else 0.0,
        'direction_distribution': direction_counts,
        'word_length_stats': {
            'min': min(word_lengths) if word_lengths else 0,
            'max': max(word_lengths) if word_lengths else 0,
            'avg': sum(word_lengths) / len(word_lengths) if word_lengths else 0
        }
    }
