"""CLI entrypoint for the WordTravel puzzle generator."""

from __future__ import annotations

import argparse
from pathlib import Path

from wordtravel.core.constants import PlacementStrategy
from wordtravel.core.exceptions import ConfigurationError
from wordtravel.data.dictionary import DictionaryConfig, WordDictionary
from wordtravel.engine.generator import GeneratorConfig, PuzzleGenerator
from wordtravel.engine.grid import find_first_accessible_cell
from wordtravel.utils.logger import configure_logging
from wordtravel.utils.pretty import print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a WordTravel puzzle and print its layout",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--word-rows", type=int, default=7, help="Number of word rows")
    parser.add_argument("--padding-top", type=int, default=1, help="Empty rows above the words")
    parser.add_argument("--padding-bottom", type=int, default=1, help="Empty rows below the words")
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in PlacementStrategy],
        default=PlacementStrategy.RANDOM.value,
        help="Rule tile placement strategy",
    )
    parser.add_argument(
        "--forbidden-ratio",
        type=float,
        default=0.0,
        help="Forbidden-match tiles per word row (default 0)",
    )
    parser.add_argument(
        "--min-tiles",
        type=int,
        default=1,
        help="Minimum rule tiles per word row",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=None,
        help="Directory with words_<length>.txt lists (defaults to the bundled lists)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = GeneratorConfig(
        word_rows=args.word_rows,
        forbidden_match_ratio=args.forbidden_ratio,
        min_rule_tiles_per_word=args.min_tiles,
        placement_strategy=PlacementStrategy(args.strategy),
        seed=args.seed,
    )
    try:
        generator = PuzzleGenerator(config)
        puzzle, grid = generator.generate(args.padding_top, args.padding_bottom)
    except ConfigurationError as exc:
        parser.error(str(exc))

    dictionary = WordDictionary(DictionaryConfig(path=args.dictionary))
    dictionary.initialize()

    print_puzzle_stats(grid, puzzle, seed=args.seed)
    start = find_first_accessible_cell(grid)
    if start is not None:
        print(f"Start cell: ({start.row}, {start.col})")
    print(f"Dictionary: {dictionary.get_word_count()} words, lengths {dictionary.get_available_lengths()}")


if __name__ == "__main__":  # pragma: no cover
    main()
