import unittest

from crossword_player.core.constants import Direction
from crossword_player.core.exceptions import PuzzleConfigError
from crossword_player.engine.grid import PlayGrid

from puzzle_fixtures import cat_cow_puzzle, lattice_puzzle, make_clue


class GridBuildTests(unittest.TestCase):
    def test_block_cells_are_not_editable(self) -> None:
        puzzle = lattice_puzzle()
        grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries)
        for x, y in ((1, 1), (3, 1), (1, 3), (3, 3)):
            self.assertFalse(grid.cell(x, y).is_editable)
            self.assertEqual(grid.value(x, y), "")
        self.assertTrue(grid.cell(2, 1).is_editable)
        self.assertTrue(grid.cell(4, 4).is_editable)

    def test_start_cells_carry_clue_numbers(self) -> None:
        puzzle = lattice_puzzle()
        grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries)
        self.assertEqual(grid.cell(0, 0).number, 1)
        self.assertEqual(grid.cell(2, 0).number, 2)
        self.assertEqual(grid.cell(0, 2).number, 4)
        self.assertIsNone(grid.cell(1, 0).number)

    def test_conflicting_start_numbers_keep_smaller(self) -> None:
        entries = [
            make_clue("3-across", 3, Direction.ACROSS, 0, 0, 2),
            make_clue("2-down", 2, Direction.DOWN, 0, 0, 2),
        ]
        grid = PlayGrid.build(2, 2, entries)
        self.assertEqual(grid.cell(0, 0).number, 2)

    def test_saved_values_round_trip_at_editable_cells(self) -> None:
        puzzle = lattice_puzzle()
        saved = [[chr(ord("A") + x + y) for y in range(puzzle.rows)] for x in range(puzzle.cols)]
        grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries, saved)
        for x in range(puzzle.cols):
            for y in range(puzzle.rows):
                expected = saved[x][y] if grid.cell(x, y).is_editable else ""
                self.assertEqual(grid.value(x, y), expected)

    def test_short_saved_state_fills_what_it_can(self) -> None:
        puzzle = cat_cow_puzzle()
        grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries, [["C"], ["A"]])
        self.assertEqual(grid.value(0, 0), "C")
        self.assertEqual(grid.value(1, 0), "A")
        self.assertEqual(grid.value(2, 0), "")

    def test_out_of_bounds_clue_is_config_error(self) -> None:
        entries = [make_clue("1-across", 1, Direction.ACROSS, 1, 0, 3)]
        with self.assertRaises(PuzzleConfigError):
            PlayGrid.build(3, 3, entries)

    def test_non_positive_dimensions_rejected(self) -> None:
        with self.assertRaises(PuzzleConfigError):
            PlayGrid.build(0, 3, [])


class GridMutationTests(unittest.TestCase):
    def setUp(self) -> None:
        puzzle = cat_cow_puzzle()
        self.grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries)
        self.moves = []
        self.grid.add_listener(self.moves.append)

    def test_set_value_notifies_once_and_clears_error(self) -> None:
        self.grid.cell(1, 0).is_error = True
        changed = self.grid.set_value(1, 0, "A")
        self.assertTrue(changed)
        self.assertFalse(self.grid.cell(1, 0).is_error)
        self.assertEqual(len(self.moves), 1)
        move = self.moves[0]
        self.assertEqual((move.x, move.y, move.value, move.previous_value), (1, 0, "A", ""))

    def test_set_value_without_change_is_silent(self) -> None:
        self.grid.set_value(1, 0, "")
        self.assertEqual(self.moves, [])

    def test_map_cells_routes_changes_through_set_value(self) -> None:
        self.grid.set_value(0, 0, "C")
        self.grid.set_value(0, 1, "O")
        self.moves.clear()
        changed = self.grid.map_cells(lambda cell, x, y: "" if x == 0 else None)
        self.assertEqual(changed, 2)
        self.assertEqual({(m.x, m.y) for m in self.moves}, {(0, 0), (0, 1)})

    def test_values_are_column_major(self) -> None:
        self.grid.set_value(2, 0, "T")
        values = self.grid.values()
        self.assertEqual(len(values), 3)
        self.assertEqual(values[2][0], "T")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
