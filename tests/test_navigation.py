import unittest

from crossword_player.core.constants import Direction
from crossword_player.core.models import Position, Puzzle
from crossword_player.engine.clue_index import ClueIndex
from crossword_player.engine.grid import PlayGrid
from crossword_player.engine.navigation import Navigator, SessionContext

from puzzle_fixtures import cat_cow_puzzle, lattice_puzzle, make_clue


def build_navigator(puzzle: Puzzle) -> Navigator:
    grid = PlayGrid.build(puzzle.rows, puzzle.cols, puzzle.entries)
    return Navigator(grid, ClueIndex(puzzle.entries))


class FocusClueTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nav = build_navigator(lattice_puzzle())
        self.events = []
        self.nav.add_listener(self.events.append)

    def test_unfocused_by_default(self) -> None:
        self.assertIsNone(self.nav.state.cell)
        self.assertIsNone(self.nav.clue_in_focus())

    def test_focus_clue_emits_event(self) -> None:
        self.assertTrue(self.nav.focus_clue(2, 2, Direction.DOWN))
        self.assertEqual(self.nav.state.cell, Position(2, 2))
        self.assertEqual(self.nav.clue_in_focus().id, "2-down")
        self.assertEqual(len(self.events), 1)
        self.assertEqual((self.events[0].x, self.events[0].y, self.events[0].clue_id), (2, 2, "2-down"))

    def test_focus_clue_without_clue_is_noop(self) -> None:
        self.assertFalse(self.nav.focus_clue(2, 1, Direction.ACROSS))
        self.assertFalse(self.nav.focus_clue(1, 1, Direction.DOWN))
        self.assertIsNone(self.nav.state.cell)
        self.assertEqual(self.events, [])

    def test_focus_by_id_records_return_position(self) -> None:
        context = SessionContext()
        self.nav.context = context
        self.assertTrue(self.nav.focus_clue_by_id("3-down", return_position=420.0))
        self.assertEqual(self.nav.state.cell, Position(4, 0))
        self.assertEqual(self.nav.state.direction, Direction.DOWN)
        self.assertEqual(context.take_return_position(), 420.0)
        self.assertIsNone(context.take_return_position())

    def test_focus_by_unknown_id_is_ignored(self) -> None:
        self.assertFalse(self.nav.focus_clue_by_id("99-across"))
        self.assertEqual(self.events, [])

    def test_focus_group_and_highlight(self) -> None:
        self.nav.focus_clue(0, 2, Direction.ACROSS)
        group_ids = [clue.id for clue in self.nav.focus_group()]
        self.assertEqual(group_ids, ["4-across", "5-across"])
        self.assertTrue(self.nav.is_in_focus_group(self.nav.index.get("5-across")))
        self.assertFalse(self.nav.is_in_focus_group(self.nav.index.get("1-across")))
        self.assertTrue(self.nav.is_highlighted(3, 4))
        self.assertFalse(self.nav.is_highlighted(0, 0))


class SelectTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nav = build_navigator(lattice_puzzle())

    def test_shared_start_prefers_across(self) -> None:
        self.nav.select(0, 0)
        self.assertEqual(self.nav.state.direction, Direction.ACROSS)

    def test_down_start_inside_across_prefers_down(self) -> None:
        self.nav.select(2, 0)
        self.assertEqual(self.nav.state.direction, Direction.DOWN)
        self.assertEqual(self.nav.clue_in_focus().id, "2-down")

    def test_mid_clue_cell_prefers_across(self) -> None:
        self.nav.select(2, 2)
        self.assertEqual(self.nav.clue_in_focus().id, "4-across")

    def test_down_only_cell(self) -> None:
        self.nav.select(4, 3)
        self.assertEqual(self.nav.clue_in_focus().id, "3-down")

    def test_repeat_select_toggles_direction(self) -> None:
        self.nav.select(0, 0)
        self.nav.select(0, 0)
        self.assertEqual(self.nav.state.direction, Direction.DOWN)
        self.nav.select(0, 0)
        self.assertEqual(self.nav.state.direction, Direction.ACROSS)

    def test_repeat_select_without_other_clue_keeps_direction(self) -> None:
        self.nav.select(2, 1)
        self.assertFalse(self.nav.select(2, 1))
        self.assertEqual(self.nav.state.direction, Direction.DOWN)

    def test_select_inside_focused_clue_keeps_direction(self) -> None:
        self.nav.select(0, 0)
        self.nav.select(0, 0)
        self.nav.select(0, 2)
        self.assertEqual(self.nav.state.cell, Position(0, 2))
        self.assertEqual(self.nav.clue_in_focus().id, "1-down")

    def test_select_block_cell_is_ignored(self) -> None:
        self.nav.select(0, 0)
        self.assertFalse(self.nav.select(1, 1))
        self.assertEqual(self.nav.state.cell, Position(0, 0))

    def test_reselect_toggles(self) -> None:
        self.assertFalse(self.nav.reselect())
        self.nav.select(4, 0)
        self.assertEqual(self.nav.state.direction, Direction.DOWN)
        self.nav.reselect()
        self.assertEqual(self.nav.state.direction, Direction.ACROSS)


class MoveFocusTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nav = build_navigator(lattice_puzzle())

    def test_move_skips_blocks(self) -> None:
        self.nav.focus_clue(0, 1, Direction.DOWN)
        self.nav.move_focus(1, 0)
        self.assertEqual(self.nav.state.cell, Position(2, 1))
        self.assertEqual(self.nav.state.direction, Direction.DOWN)

    def test_move_wraps_at_edges(self) -> None:
        self.nav.focus_clue(0, 0, Direction.ACROSS)
        self.nav.move_focus(-1, 0)
        self.assertEqual(self.nav.state.cell, Position(4, 0))
        self.assertEqual(self.nav.state.direction, Direction.ACROSS)
        self.nav.move_focus(0, -1)
        self.assertEqual(self.nav.state.cell, Position(4, 4))
        self.assertEqual(self.nav.state.direction, Direction.DOWN)

    def test_vertical_move_without_down_clue_is_across(self) -> None:
        self.nav.focus_clue(1, 0, Direction.ACROSS)
        self.nav.move_focus(0, 1)
        self.assertEqual(self.nav.state.cell, Position(1, 2))
        self.assertEqual(self.nav.state.direction, Direction.ACROSS)

    def test_move_without_focus_is_noop(self) -> None:
        self.assertFalse(self.nav.move_focus(1, 0))

    def test_diagonal_delta_rejected(self) -> None:
        self.nav.focus_clue(0, 0, Direction.ACROSS)
        self.assertFalse(self.nav.move_focus(1, 1))
        self.assertEqual(self.nav.state.cell, Position(0, 0))

    def test_single_row_wraps_back_to_start(self) -> None:
        puzzle = Puzzle(
            id="row",
            cols=6,
            rows=1,
            entries=(make_clue("1-across", 1, Direction.ACROSS, 0, 0, 6),),
        )
        nav = build_navigator(puzzle)
        nav.focus_clue(2, 0, Direction.ACROSS)
        for _ in range(puzzle.cols):
            nav.move_focus(1, 0)
        self.assertEqual(nav.state.cell, Position(2, 0))


class SequentialFocusTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nav = build_navigator(lattice_puzzle())

    def test_focus_next_moves_along_direction(self) -> None:
        self.nav.focus_clue(2, 0, Direction.DOWN)
        self.nav.focus_next()
        self.assertEqual(self.nav.state.cell, Position(2, 1))
        self.assertEqual(self.nav.clue_in_focus().id, "2-down")

    def test_focus_next_at_end_of_ungrouped_clue_stays(self) -> None:
        self.nav.focus_clue(4, 0, Direction.ACROSS)
        self.assertFalse(self.nav.focus_next())
        self.assertEqual(self.nav.state.cell, Position(4, 0))

    def test_focus_next_continues_into_group(self) -> None:
        self.nav.focus_clue(4, 2, Direction.ACROSS)
        self.nav.focus_next()
        self.assertEqual(self.nav.state.cell, Position(0, 4))
        self.assertEqual(self.nav.clue_in_focus().id, "5-across")

    def test_focus_previous_returns_to_group_predecessor(self) -> None:
        self.nav.focus_clue(0, 4, Direction.ACROSS)
        self.nav.focus_previous()
        self.assertEqual(self.nav.state.cell, Position(4, 2))
        self.assertEqual(self.nav.clue_in_focus().id, "4-across")

    def test_focus_previous_at_start_of_ungrouped_clue_stays(self) -> None:
        self.nav.focus_clue(0, 0, Direction.DOWN)
        self.assertFalse(self.nav.focus_previous())
        self.assertEqual(self.nav.state.cell, Position(0, 0))

    def test_focus_previous_moves_back(self) -> None:
        self.nav.focus_clue(0, 3, Direction.DOWN)
        self.nav.focus_previous()
        self.assertEqual(self.nav.state.cell, Position(0, 2))
        self.assertEqual(self.nav.state.direction, Direction.DOWN)


class ClueTraversalTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nav = build_navigator(lattice_puzzle())

    def test_next_clue_follows_puzzle_order(self) -> None:
        self.nav.focus_clue(3, 0, Direction.ACROSS)
        self.nav.focus_next_clue()
        self.assertEqual(self.nav.clue_in_focus().id, "4-across")
        self.assertEqual(self.nav.state.cell, Position(0, 2))

    def test_next_clue_wraps(self) -> None:
        self.nav.focus_clue(4, 3, Direction.DOWN)
        self.nav.focus_next_clue()
        self.assertEqual(self.nav.clue_in_focus().id, "1-across")

    def test_previous_clue_wraps(self) -> None:
        self.nav.focus_clue(0, 0, Direction.ACROSS)
        self.nav.focus_previous_clue()
        self.assertEqual(self.nav.clue_in_focus().id, "3-down")
        self.assertEqual(self.nav.state.cell, Position(4, 0))

    def test_clue_traversal_ignores_grouping(self) -> None:
        self.nav.focus_clue(0, 2, Direction.ACROSS)
        self.nav.focus_next_clue()
        self.assertEqual(self.nav.clue_in_focus().id, "5-across")

    def test_traversal_requires_focus(self) -> None:
        self.assertFalse(self.nav.focus_next_clue())


class SharedStartTests(unittest.TestCase):
    def test_select_twice_toggles_across_to_down(self) -> None:
        nav = build_navigator(cat_cow_puzzle())
        nav.select(0, 0)
        self.assertEqual(nav.state.direction, Direction.ACROSS)
        nav.select(0, 0)
        self.assertEqual(nav.state.direction, Direction.DOWN)
        self.assertEqual(nav.clue_in_focus().id, "1-down")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
