"""
Word list module for word grid generation.
Handles loading, saving and validation of per-level word lists.
"""

import json
import os
import logging
from collections.abc import Mapping
from typing import Dict, List, Tuple, Iterable, Iterator, Any, Optional

import yaml

from wordgrid.levels import DEFAULT_LEVEL, LEVEL_SIZES, parse_level


class WordListError(ValueError):
    """Raised when a word list resource cannot be loaded or is malformed."""


def _normalize_level(key: Any) -> int:
    level = parse_level(key)
    if level is None:
        raise WordListError(f"Invalid level key: {key!r}")
    return level


def _normalize_word(word: Any) -> str:
    if not isinstance(word, str):
        raise WordListError(f"Word must be a string, got {type(word).__name__}: {word!r}")
    return word.strip().upper()


class WordList(Mapping):
    """Read-only mapping from level to an ordered tuple of uppercase words.

    Level keys may be given as integers or as their string form ("1", "2", "3").
    The list is built once and shared by every generation request.
    """

    def __init__(self, levels: Optional[Dict[Any, Iterable[str]]] = None):
        self._levels: Dict[int, Tuple[str, ...]] = {}

        for key, words in (levels or {}).items():
            if isinstance(words, str):
                raise WordListError(f"Words for level {key} must be a list, not a string")
            level = _normalize_level(key)
            self._levels[level] = tuple(
                w for w in (_normalize_word(word) for word in words) if w
            )

    def __getitem__(self, level: Any) -> Tuple[str, ...]:
        key = parse_level(level)
        if key is None or key not in self._levels:
            raise KeyError(level)
        return self._levels[key]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._levels))

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, level: Any) -> bool:
        return parse_level(level) in self._levels

    def __repr__(self) -> str:
        counts = ', '.join(f"{level}: {len(words)}" for level, words in sorted(self._levels.items()))
        return f"WordList({{{counts}}})"

    def words_for_level(self, level: Any) -> Tuple[str, ...]:
        """Get the words for a level.

        A level that is absent from the list (or not a level at all) falls
        back to the default level's words. Never raises.
        """
        if level in self:
            return self[level]
        return self._levels.get(DEFAULT_LEVEL, ())

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to the on-disk representation (string level keys)."""
        return {str(level): list(words) for level, words in sorted(self._levels.items())}


class WordlistLoader:
    """Loads and saves word lists in JSON or YAML format."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def load(self, path: str) -> WordList:
        """Load a word list from a file.

        Args:
            path: Path to a .json, .yaml or .yml file mapping level to words

        Returns:
            WordList loaded from the file
        """
        if not os.path.exists(path):
            raise WordListError(f"Word list file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.endswith('.yaml') or path.endswith('.yml'):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise WordListError(f"Could not parse word list {path}: {e}") from e

        if not isinstance(data, dict):
            raise WordListError(f"Word list {path} must map levels to word lists")

        word_list = WordList(data)
        self.logger.info(
            f"Loaded word list from {path}: "
            f"{sum(len(words) for words in word_list.values())} words in {len(word_list)} levels"
        )
        return word_list

    def save(self, word_list: WordList, path: str):
        """Save a word list to a JSON or YAML file."""
        data = word_list.to_dict()

        with open(path, 'w', encoding='utf-8') as f:
            if path.endswith('.yaml') or path.endswith('.yml'):
                yaml.safe_dump(data, f, allow_unicode=True, default_flow_style=False)
            else:
                json.dump(data, f, indent=2, ensure_ascii=False)

        self.logger.info(f"Saved word list to {path}")


def validate_word_list(word_list: WordList, alphabet: str,
                       level_sizes: Optional[Dict[int, int]] = None) -> Tuple[bool, List[str]]:
    """Validate a word list against an alphabet and the level table.

    Words that are longer than their level's grid, or that use letters outside
    the alphabet, are still accepted by the generator; they are reported here
    because they will never be placed or will stand out from the fill letters.
    """
    sizes = level_sizes if level_sizes is not None else LEVEL_SIZES
    issues = []
    letters = set(alphabet)

    for level in sorted(sizes):
        if level not in word_list:
            issues.append(f"Missing words for level {level}")

    for level, words in word_list.items():
        size = sizes.get(level)
        if size is None:
            issues.append(f"Level {level} has no grid size and falls back to level {DEFAULT_LEVEL}")
            size = sizes.get(DEFAULT_LEVEL, LEVEL_SIZES[DEFAULT_LEVEL])

        if not words:
            issues.append(f"Level {level} has no words")

        seen = set()
        for word in words:
            if word in seen:
                issues.append(f"Duplicate word in level {level}: {word}")
            seen.add(word)

            bad_letters = sorted(set(word) - letters)
            if bad_letters:
                issues.append(f"Word {word} in level {level} uses letters outside the alphabet: {''.join(bad_letters)}")

            if len(word) > size:
                issues.append(f"Word {word} in level {level} is longer than the {size}x{size} grid")

    return len(issues) == 0, issues


def create_sample_word_list() -> WordList:
    """Create a sample word list for all levels."""
    return WordList({
        1: ['КОТ', 'ДОМ', 'ЛЕС', 'САД', 'МИР', 'СОК', 'ЛУНА', 'РЕКА', 'ГОРА', 'СНЕГ'],
        2: ['ЯБЛОКО', 'КНИГА', 'ШКОЛА', 'ДЕРЕВО', 'СОЛНЦЕ', 'ОКНО', 'МОРЕ',
            'ДОРОГА', 'ЦВЕТОК', 'ЗИМА', 'ВЕСНА', 'ПТИЦА'],
        3: ['КОМПЬЮТЕР', 'БИБЛИОТЕКА', 'ПУТЕШЕСТВИЕ', 'ПРИКЛЮЧЕНИЕ', 'ВОДОПАД',
            'ГОРИЗОНТ', 'ЗЕМЛЕТРЯСЕНИЕ', 'ЭЛЕКТРИЧЕСТВО', 'ФОТОГРАФИЯ',
            'АРХИТЕКТУРА', 'МУЗЫКА', 'ХУДОЖНИК', 'ОБЛАКО', 'ЖУРНАЛ']
    })
