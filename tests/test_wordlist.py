import json
import os

import pytest
import yaml

from wordgrid.generator import DEFAULT_ALPHABET
from wordgrid.levels import LEVEL_SIZES
from wordgrid.wordlist import (
    WordList,
    WordListError,
    WordlistLoader,
    create_sample_word_list,
    validate_word_list,
)


DATA_WORDS = os.path.join(os.path.dirname(__file__), os.pardir, "data", "words.json")


class TestWordList:

    def test_keys_and_words_are_normalized(self):
        word_list = WordList({"1": [' кот ', 'ДОМ', ''], 2: ['лес']})

        assert list(word_list) == [1, 2]
        assert word_list[1] == ('КОТ', 'ДОМ')
        assert word_list["2"] == ('ЛЕС',)
        assert "1" in word_list
        assert 3 not in word_list
        assert "abc" not in word_list

    def test_words_are_read_only(self):
        word_list = WordList({1: ['CAT']})

        assert isinstance(word_list[1], tuple)
        with pytest.raises(TypeError):
            word_list[1] = ('DOG',)

    def test_words_for_level_falls_back_to_level_one(self):
        word_list = WordList({1: ['CAT'], 2: ['HORSE']})

        assert word_list.words_for_level(2) == ('HORSE',)
        assert word_list.words_for_level(99) == ('CAT',)
        assert word_list.words_for_level("x") == ('CAT',)
        assert word_list.words_for_level(float("inf")) == ('CAT',)
        assert WordList({2: ['HORSE']}).words_for_level(5) == ()

    def test_missing_levels_raise_key_error(self):
        word_list = WordList({1: ['CAT']})

        assert word_list.get('abc') is None
        assert word_list.get(2.5) is None
        assert word_list.get(3, ()) == ()
        with pytest.raises(KeyError):
            word_list['abc']
        with pytest.raises(KeyError):
            word_list[3]

    @pytest.mark.parametrize("levels", [{"one": ['CAT']}, {2.5: ['CAT']}, {1: 'CAT'}, {1: ['CAT', 3]}])
    def test_malformed_levels(self, levels):
        with pytest.raises(WordListError):
            WordList(levels)

    def test_to_dict(self):
        assert WordList({2: ['b'], 1: ['a']}).to_dict() == {"1": ['A'], "2": ['B']}


class TestWordlistLoader:

    def test_load_json(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"1": ["кот"], "2": ["яблоко"]}, ensure_ascii=False), encoding='utf-8')

        word_list = WordlistLoader().load(str(path))

        assert word_list[1] == ('КОТ',)
        assert word_list[2] == ('ЯБЛОКО',)

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("1:\n  - cat\n  - dog\n3:\n  - keyboard\n", encoding='utf-8')

        word_list = WordlistLoader().load(str(path))

        assert word_list[1] == ('CAT', 'DOG')
        assert word_list[3] == ('KEYBOARD',)

    def test_save_round_trips(self, tmp_path):
        loader = WordlistLoader()
        sample = create_sample_word_list()

        for name in ("words.json", "words.yml"):
            path = str(tmp_path / name)
            loader.save(sample, path)
            assert loader.load(path).to_dict() == sample.to_dict()

        with open(tmp_path / "words.yml", encoding='utf-8') as f:
            assert 'КОТ' in f.read()

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordListError):
            WordlistLoader().load(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text("{not json", encoding='utf-8')

        with pytest.raises(WordListError):
            WordlistLoader().load(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text(yaml.safe_dump(['CAT', 'DOG']), encoding='utf-8')

        with pytest.raises(WordListError):
            WordlistLoader().load(str(path))

    def test_shipped_word_list_matches_sample(self):
        word_list = WordlistLoader().load(DATA_WORDS)
        assert word_list.to_dict() == create_sample_word_list().to_dict()


class TestValidateWordList:

    def test_sample_word_list_is_valid(self):
        valid, issues = validate_word_list(create_sample_word_list(), DEFAULT_ALPHABET, LEVEL_SIZES)
        assert valid, issues

    def test_reports_issues(self):
        word_list = WordList({
            1: ['CAT', 'CAT', 'КОТ', 'ABCDEFGHIJK'],
            2: [],
            7: ['DOG']
        })

        valid, issues = validate_word_list(word_list, 'ABCDEFGHIJKLMNOPQRSTUVWXYZ', LEVEL_SIZES)

        assert not valid
        assert "Missing words for level 3" in issues
        assert "Level 2 has no words" in issues
        assert "Duplicate word in level 1: CAT" in issues
        assert "Word КОТ in level 1 uses letters outside the alphabet: КОТ" in issues
        assert "Word ABCDEFGHIJK in level 1 is longer than the 10x10 grid" in issues
        assert "Level 7 has no grid size and falls back to level 1" in issues
