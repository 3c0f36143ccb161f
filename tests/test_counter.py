import unittest

from wordtravel.core.constants import TilePosition
from wordtravel.core.models import Cell, ForbiddenMatchTile, Grid, HardMatchTile, SoftMatchTile
from wordtravel.data.dictionary import WordDictionary
from wordtravel.engine.counter import count_valid_next_words


def row(*letters, tiles=None):
    tiles = tiles or {}
    return [Cell(letter, rule_tile=tiles.get(index)) for index, letter in enumerate(letters)]


class CountValidNextWordsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary.from_words(
            ["cat", "cot", "cut", "dog", "dig", "act", "tac", "frog"]
        )

    def test_soft_match_requires_letter(self) -> None:
        grid = Grid.from_cells([row("C", "A", "T", tiles={0: SoftMatchTile(1)}), row(None, None, None)])
        # cot, cut, act, tac; "cat" is already used
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 4)

    def test_hard_match_fixes_position(self) -> None:
        grid = Grid.from_cells(
            [
                row("C", "A", "T", tiles={0: HardMatchTile(1, 0, TilePosition.TOP)}),
                row(None, None, None, tiles={0: HardMatchTile(0, 0, TilePosition.BOTTOM)}),
            ]
        )
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 2)

    def test_forbidden_match_excludes_letter(self) -> None:
        grid = Grid.from_cells([row("D", "O", "G", tiles={0: ForbiddenMatchTile(1)}), row(None, None, None)])
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 5)

    def test_constraints_combine(self) -> None:
        grid = Grid.from_cells(
            [
                row("C", "O", "G", tiles={0: SoftMatchTile(1), 1: ForbiddenMatchTile(1)}),
                row(None, None, None),
            ]
        )
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 4)

    def test_used_words_are_excluded(self) -> None:
        grid = Grid.from_cells(
            [
                row("C", "O", "T", tiles={0: SoftMatchTile(2)}),
                row("A", "C", "T"),
                row(None, None, None),
            ]
        )
        # cat, cut, tac remain
        self.assertEqual(count_valid_next_words(grid, 2, self.dictionary), 3)

    def test_inaccessible_cells_define_word_length(self) -> None:
        grid = Grid.from_cells(
            [
                row("C", "A", "T", "S", "X", tiles={0: SoftMatchTile(1)}),
                [Cell(accessible=False), Cell(), Cell(), Cell(), Cell(accessible=False)],
            ]
        )
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 5)

    def test_complete_target_counts_zero(self) -> None:
        grid = Grid.from_cells([row("C", "A", "T", tiles={0: SoftMatchTile(1)}), row("A", "C", "T")])
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 0)

    def test_no_accessible_columns_counts_zero(self) -> None:
        grid = Grid.from_cells(
            [row("C", "A", "T", tiles={0: SoftMatchTile(1)}), [Cell(accessible=False)] * 3]
        )
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 0)

    def test_no_active_constraint_counts_zero(self) -> None:
        grid = Grid.from_cells([row("C", "A", "T"), row(None, None, None)])
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 0)

    def test_incomplete_source_is_not_a_constraint(self) -> None:
        grid = Grid.from_cells([row("C", None, "T", tiles={0: SoftMatchTile(1)}), row(None, None, None)])
        self.assertEqual(count_valid_next_words(grid, 1, self.dictionary), 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
