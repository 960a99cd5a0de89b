"""
Command-line interface module for the word grid generator.
Provides additional CLI utilities and commands.
"""

import sys
import argparse
import os
import json
import time
import yaml
from typing import Dict, Any, Optional
import logging

from wordgrid.levels import describe_levels
from wordgrid.wordlist import WordlistLoader, create_sample_word_list, validate_word_list
from wordgrid.generator import DEFAULT_ALPHABET, GridGenerator, grid_statistics

from main import load_config


class WordGridCLI:
    """Command-line interface for word grid operations."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def create_sample_files(self, output_dir: str = "data"):
        """Create sample configuration and word list files."""
        os.makedirs(output_dir, exist_ok=True)

        wordlist_path = os.path.join(output_dir, "words.json")

        sample_config = {
            'generator': {
                'alphabet': DEFAULT_ALPHABET,
                'level_sizes': {1: 10, 2: 15, 3: 20}
            },
            'wordlist': {
                'path': wordlist_path
            },
            'export': {
                'formats': ['json', 'png'],
                'output_dir': 'output',
                'font_path': None,
                'solution': False
            },
            'random_seed': None,
            'logging': {
                'level': 'INFO',
                'file': None
            }
        }

        config_path = os.path.join(output_dir, "config.yaml")
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(sample_config, f, allow_unicode=True, default_flow_style=False)

        print(f"Created sample configuration: {config_path}")

        WordlistLoader().save(create_sample_word_list(), wordlist_path)

        print(f"Created sample word list: {wordlist_path}")

        print("\nSample files created successfully!")
        print(f"You can now run: python main.py --config {config_path} --level 1")

    def validate_wordlist(self, wordlist_path: str, config_file: Optional[str] = None) -> bool:
        """Validate a word list file."""
        try:
            config = load_config(config_file)
            word_list = WordlistLoader().load(wordlist_path)

            print(f"Word List Validation Report: {wordlist_path}")
            for level, words in word_list.items():
                lengths = [len(word) for word in words]
                length_range = f"{min(lengths)}-{max(lengths)}" if lengths else "-"
                print(f"Level {level}: {len(words)} words, lengths {length_range}")

            valid, issues = validate_word_list(
                word_list,
                config['generator']['alphabet'],
                config['generator']['level_sizes']
            )

            if issues:
                print("\nPotential issues:")
                for issue in issues:
                    print(f"  - {issue}")
            else:
                print("\nWord list appears to be well-formed.")

            return valid

        except Exception as e:
            print(f"Error validating word list: {e}")
            return False

    def show_levels(self, wordlist_path: str, config_file: Optional[str] = None) -> bool:
        """Print the level catalogue as JSON."""
        try:
            config = load_config(config_file)
            word_list = WordlistLoader().load(wordlist_path)

            levels = describe_levels(word_list, config['generator']['level_sizes'])
            print(json.dumps([level.to_dict() for level in levels], ensure_ascii=False, indent=2))

            return True

        except Exception as e:
            print(f"Error describing levels: {e}")
            return False

    def benchmark_generator(self, wordlist_path: str, config_file: Optional[str] = None,
                            iterations: int = 10) -> Dict[str, Any]:
        """Benchmark grid generation for every level."""
        print(f"Running generator benchmark ({iterations} iterations)...")

        config = load_config(config_file)
        word_list = WordlistLoader().load(wordlist_path)
        level_sizes = config['generator']['level_sizes']

        generator = GridGenerator(
            word_list,
            alphabet=config['generator']['alphabet'],
            level_sizes=level_sizes
        )

        results = {}
        for level in sorted(level_sizes):
            times = []
            placement_rates = []

            for _ in range(iterations):
                start_time = time.time()
                result = generator.generate(level)
                times.append(time.time() - start_time)
                placement_rates.append(grid_statistics(result)['placement_rate'])

            results[level] = {
                'avg_time_ms': sum(times) / len(times) * 1000 if times else 0.0,
                'max_time_ms': max(times) * 1000 if times else 0.0,
                'avg_placement_rate': sum(placement_rates) / len(placement_rates) if placement_rates else 0.0,
                'min_placement_rate': min(placement_rates) if placement_rates else 0.0
            }

        print("\nBenchmark Results:")
        for level, stats in results.items():
            print(f"Level {level} ({level_sizes[level]}x{level_sizes[level]}): "
                  f"avg {stats['avg_time_ms']:.2f}ms, max {stats['max_time_ms']:.2f}ms, "
                  f"placed {stats['avg_placement_rate']:.1%} on average, "
                  f"{stats['min_placement_rate']:.1%} at worst")

        return results


def main(argv=None):
    """CLI entry point for utility functions."""
    parser = argparse.ArgumentParser(
        description="Word Grid Generator CLI Utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Available commands:
  sample-files    Create sample configuration and word list files
  validate        Validate a word list file
  levels          Print the level catalogue
  benchmark       Benchmark grid generation

Examples:
  python cli.py sample-files
  python cli.py validate data/words.json
  python cli.py levels data/words.json
  python cli.py benchmark data/words.json --iterations 100
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Sample files command
    sample_parser = subparsers.add_parser('sample-files', help='Create sample files')
    sample_parser.add_argument('--output-dir', default='data', help='Output directory')

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Validate word list')
    validate_parser.add_argument('wordlist', help='Word list file to validate')
    validate_parser.add_argument('--config', help='Configuration file')

    # Levels command
    levels_parser = subparsers.add_parser('levels', help='Print level catalogue')
    levels_parser.add_argument('wordlist', help='Word list file')
    levels_parser.add_argument('--config', help='Configuration file')

    # Benchmark command
    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark generator')
    benchmark_parser.add_argument('wordlist', help='Word list file')
    benchmark_parser.add_argument('--config', help='Configuration file')
    benchmark_parser.add_argument('--iterations', type=int, default=10, help='Grids per level')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Setup logging
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    cli = WordGridCLI()

    try:
        if args.command == 'sample-files':
            cli.create_sample_files(args.output_dir)

        elif args.command == 'validate':
            success = cli.validate_wordlist(args.wordlist, args.config)
            return 0 if success else 1

        elif args.command == 'levels':
            success = cli.show_levels(args.wordlist, args.config)
            return 0 if success else 1

        elif args.command == 'benchmark':
            cli.benchmark_generator(args.wordlist, args.config, args.iterations)

        else:
            print(f"Unknown command: {args.command}")
            return 1

        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
