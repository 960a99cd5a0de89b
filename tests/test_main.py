import json
import logging
import os

import pytest
import yaml

import cli
import main
from wordgrid.generator import DEFAULT_ALPHABET


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoadConfig:

    def test_defaults(self):
        config = main.load_config()

        assert config['generator']['alphabet'] == DEFAULT_ALPHABET
        assert config['generator']['level_sizes'] == {1: 10, 2: 15, 3: 20}
        assert config['random_seed'] is None

    def test_defaults_are_not_shared(self):
        main.load_config()['export']['formats'].append('pdf')
        assert main.load_config()['export']['formats'] == ['json']

    def test_yaml_merges_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            'generator': {'alphabet': 'XYZ'},
            'export': {'formats': ['png']},
            'random_seed': 3
        }), encoding='utf-8')

        config = main.load_config(str(path))

        assert config['generator']['alphabet'] == 'XYZ'
        assert config['generator']['level_sizes'] == {1: 10, 2: 15, 3: 20}
        assert config['export']['formats'] == ['png']
        assert config['export']['output_dir'] == 'output'
        assert config['random_seed'] == 3

    def test_json_level_sizes_become_ints(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'generator': {'level_sizes': {"1": 8, "2": 12}}}), encoding='utf-8')

        config = main.load_config(str(path))

        assert config['generator']['level_sizes'] == {1: 8, 2: 12, 3: 20}


class TestCreateGrid:

    def make_config(self, tmp_path, wordlist_file, formats):
        config = main.load_config()
        config['wordlist']['path'] = wordlist_file
        config['generator']['alphabet'] = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
        config['export']['output_dir'] = str(tmp_path / "output")
        config['export']['formats'] = formats
        config['random_seed'] = 42
        return config

    def test_exports_requested_formats(self, tmp_path, wordlist_file):
        config = self.make_config(tmp_path, wordlist_file, ['json', 'png'])

        assert main.create_grid(config, 3)

        exported = sorted(os.path.splitext(name)[1] for name in os.listdir(tmp_path / "output"))
        assert exported == ['.json', '.png']

    def test_repeated_words_generate(self, tmp_path):
        path = tmp_path / "repeated.json"
        path.write_text(json.dumps({"1": ['CAT', 'CAT', 'DOG']}), encoding='utf-8')
        config = self.make_config(tmp_path, str(path), ['json'])
        config['random_seed'] = 1

        assert main.create_grid(config, 1)
        assert [os.path.splitext(name)[1] for name in os.listdir(tmp_path / "output")] == ['.json']

    def test_missing_word_list_fails(self, tmp_path):
        config = self.make_config(tmp_path, str(tmp_path / "missing.json"), ['json'])
        assert not main.create_grid(config, 1)


def test_main_prints_grid(tmp_path, wordlist_file, capsys):
    exit_code = main.main([
        '--wordlist', wordlist_file,
        '--alphabet', 'abcdefghijklmnopqrstuvwxyz',
        '--level', '99',
        '--seed', '5',
        '--print',
        '--output-dir', str(tmp_path / "output"),
        '--formats'
    ])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data['level'] == 99
    assert data['gridSize'] == 10
    assert {entry['word'] for entry in data['words']} <= {'CAT', 'DOG', 'BIRD', 'FISH', 'HORSE'}
    assert not os.path.exists(tmp_path / "output")


class TestCli:

    def test_sample_files_then_validate(self, tmp_path, capsys):
        data_dir = str(tmp_path / "data")
        assert cli.main(['sample-files', '--output-dir', data_dir]) == 0

        config_path = os.path.join(data_dir, "config.yaml")
        wordlist_path = os.path.join(data_dir, "words.json")
        assert main.load_config(config_path)['wordlist']['path'] == wordlist_path

        assert cli.main(['validate', wordlist_path, '--config', config_path]) == 0
        assert "Word list appears to be well-formed." in capsys.readouterr().out

    def test_validate_reports_issues(self, wordlist_file, capsys):
        assert cli.main(['validate', wordlist_file]) == 1
        assert "uses letters outside the alphabet" in capsys.readouterr().out

    def test_levels(self, wordlist_file, capsys):
        assert cli.main(['levels', wordlist_file]) == 0

        levels = json.loads(capsys.readouterr().out)
        assert [level['gridSize'] for level in levels] == [10, 15, 20]
        assert levels[0]['words'] == ['CAT', 'DOG', 'BIRD', 'FISH', 'HORSE']

    def test_benchmark(self, wordlist_file):
        results = cli.WordGridCLI().benchmark_generator(wordlist_file, iterations=3)

        assert sorted(results) == [1, 2, 3]
        assert all(0.0 <= stats['avg_placement_rate'] <= 1.0 for stats in results.values())

    def test_no_command(self):
        assert cli.main([]) == 1
