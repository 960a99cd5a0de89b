import json
import random

import pytest

from wordgrid.generator import Direction
from wordgrid.wordlist import WordList, create_sample_word_list


LATIN_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'


class ScriptedRandom:
    """Random source that replays scripted directions and start coordinates.

    Fill letters always come out as the first letter of the alphabet.
    """

    def __init__(self, directions=(), coordinates=()):
        self.directions = list(directions)
        self.coordinates = list(coordinates)
        self.choice_calls = 0
        self.randint_calls = 0

    def choice(self, seq):
        if seq and isinstance(seq[0], Direction):
            self.choice_calls += 1
            return self.directions.pop(0) if self.directions else seq[0]
        return seq[0]

    def randint(self, a, b):
        self.randint_calls += 1
        value = self.coordinates.pop(0) if self.coordinates else a
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def sample_words():
    return create_sample_word_list()


@pytest.fixture
def latin_words():
    return WordList({
        "1": ['CAT', 'DOG', 'BIRD', 'FISH', 'HORSE'],
        "2": ['APPLE', 'BREAD', 'CHEESE', 'PIZZA', 'PASTA', 'RICE'],
        "3": ['COMPUTER', 'KEYBOARD', 'MONITOR', 'PRINTER', 'NETWORK', 'DATABASE']
    })


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def wordlist_file(tmp_path, latin_words):
    path = tmp_path / "words.json"
    path.write_text(json.dumps(latin_words.to_dict()), encoding='utf-8')
    return str(path)
