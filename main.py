#!/usr/bin/env python3
"""
Word Grid Generator - Main Entry Point
Generates word-search grids for the levels of the game.
"""

import sys
import os
import argparse
import copy
import random
import yaml
import json
import logging
from typing import Dict, Any, Optional

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wordgrid.levels import LEVEL_SIZES
from wordgrid.wordlist import WordlistLoader
from wordgrid.generator import DEFAULT_ALPHABET, GridGenerator, validate_grid, grid_statistics
from wordgrid.export import ExportManager, SUPPORTED_FORMATS


DEFAULT_CONFIG = {
    'generator': {
        'alphabet': DEFAULT_ALPHABET,
        'level_sizes': dict(LEVEL_SIZES)
    },
    'wordlist': {
        'path': 'data/words.json'
    },
    'export': {
        'formats': ['json'],
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


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure structured logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from file or return defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.endswith('.yaml') or config_path.endswith('.yml'):
                user_config = yaml.safe_load(f) or {}
            else:
                user_config = json.load(f)

        # Merge configurations (deep merge for nested dicts)
        def merge_config(default, user):
            for key, value in user.items():
                if key in default and isinstance(default[key], dict) and isinstance(value, dict):
                    merge_config(default[key], value)
                else:
                    default[key] = value

        merge_config(config, user_config)

    # JSON configs can only carry string keys
    config['generator']['level_sizes'] = {
        int(level): int(size) for level, size in config['generator']['level_sizes'].items()
    }

    return config


def create_grid(config: Dict[str, Any], level: int, print_result: bool = False) -> bool:
    """Generate a grid for a level based on configuration."""
    logger = logging.getLogger(__name__)

    try:
        rng = random.Random(config['random_seed'])

        logger.info("Loading word list...")
        word_list = WordlistLoader().load(config['wordlist']['path'])

        generator = GridGenerator(
            word_list,
            alphabet=config['generator']['alphabet'],
            level_sizes=config['generator']['level_sizes'],
            rng=rng
        )

        logger.info(f"Generating grid for level {level}...")
        result = generator.generate(level)

        valid, issues = validate_grid(result)
        if not valid:
            for issue in issues:
                logger.error(issue)
            return False

        stats = grid_statistics(result)
        logger.info(f"Grid size: {stats['grid_size']}")
        logger.info(f"Placed words: {stats['placed_words']}, skipped: {stats['skipped_words']}")
        if result.skipped_words:
            logger.warning(f"Skipped words: {', '.join(result.skipped_words)}")

        if print_result:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

        formats = config['export']['formats']
        if formats:
            export_manager = ExportManager(
                config['export']['output_dir'],
                font_path=config['export'].get('font_path')
            )

            for export_format in formats:
                output_path = export_manager.export(
                    result, export_format, solution=config['export'].get('solution', False)
                )
                logger.info(f"Exported {export_format.upper()} to {output_path}")

        return True

    except Exception as e:
        logger.error(f"Error generating grid: {e}", exc_info=True)
        return False


def main(argv=None):
    """Main entry point for the word grid generator."""
    parser = argparse.ArgumentParser(
        description="Generate word-search grids for game levels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --level 2
  python main.py --config config.yaml --level 3 --formats json pdf
  python main.py --wordlist data/words.json --seed 42 --print --formats
        """
    )

    parser.add_argument('--config', help='Configuration file (YAML or JSON)')
    parser.add_argument('--level', type=int, default=1, help='Level to generate (1-3)')
    parser.add_argument('--wordlist', help='Word list file (JSON or YAML)')
    parser.add_argument('--alphabet', help='Letters used to fill empty cells')
    parser.add_argument('--output-dir', help='Output directory')
    parser.add_argument('--formats', nargs='*', choices=SUPPORTED_FORMATS,
                        help='Export formats (none to skip export)')
    parser.add_argument('--font', help='TrueType font for PDF and PNG export')
    parser.add_argument('--solution', action='store_true',
                        help='Highlight placed words in PDF and PNG export')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible grids')
    parser.add_argument('--print', dest='print_result', action='store_true',
                        help='Print the generated grid as JSON')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    parser.add_argument('--log-file', help='Log file path')

    args = parser.parse_args(argv)

    # Load configuration
    config = load_config(args.config)

    # Override config with command line arguments
    if args.wordlist:
        config['wordlist']['path'] = args.wordlist

    if args.alphabet:
        config['generator']['alphabet'] = args.alphabet.upper()

    if args.output_dir:
        config['export']['output_dir'] = args.output_dir

    if args.formats is not None:
        config['export']['formats'] = args.formats

    if args.font:
        config['export']['font_path'] = args.font

    if args.solution:
        config['export']['solution'] = True

    if args.seed is not None:
        config['random_seed'] = args.seed

    config['logging']['level'] = args.log_level
    if args.log_file:
        config['logging']['file'] = args.log_file

    # Setup logging
    setup_logging(config['logging']['level'], config['logging']['file'])

    success = create_grid(config, args.level, print_result=args.print_result)

    if success:
        print("Grid generation completed successfully!", file=sys.stderr)
        return 0
    else:
        print("Grid generation failed!", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
