import unittest

from game import InvariantViolation, PlaySession, build

KEY = {
    "S": ["#####", "#...#", "#...#", "#...#", "#####"],
    "N": ["## ##", "#   #", "#####", "#   #", "## ##"],
    "V": ["# ###", "#    ", "# ###", "#   #", "#####"],
}


def _session():
    # S at (0,0); N at (2,0); V at (2,2); three loose fragments
    return PlaySession.from_level(build("First", KEY, ["S.N", "", "..V"], level_id="first"))


class TestPlaySession(unittest.TestCase):
    def test_given_new_session_when_started_then_grid_cloned_from_level(self):
        lvl = build("First", KEY, ["S.N", "", "..V"], level_id="first")
        s = PlaySession.from_level(lvl)
        self.assertEqual(s.level_id, "first")
        self.assertIsNot(s.grid, lvl.initial_grid)
        self.assertEqual(s.grid.symbols, lvl.initial_grid.symbols)

    def test_given_empty_cell_when_picking_up_then_nothing_held(self):
        s = _session()
        self.assertFalse(s.pick_up((1, 1)))
        self.assertIsNone(s.holding)

    def test_given_moves_when_dropping_then_sentence_solved(self):
        s = _session()
        self.assertFalse(s.solved())
        self.assertTrue(s.pick_up((2, 0)))
        self.assertTrue(s.drop((1, 0)))
        self.assertTrue(s.pick_up((2, 2)))
        self.assertTrue(s.drop((2, 0)))
        self.assertEqual(s.moves, 2)
        self.assertEqual(s.last_drop, ((2, 0),))
        self.assertTrue(s.solved())
        s.grid.check_partition()

    def test_given_blocked_target_when_dropping_then_still_holding(self):
        s = _session()
        s.pick_up((2, 2))
        self.assertFalse(s.drop((0, 0)))     # start particle is there
        self.assertFalse(s.drop((13, 0)))    # off the board
        self.assertIsNotNone(s.holding)
        self.assertEqual(s.moves, 0)

    def test_given_held_fragment_when_cancelled_then_restored(self):
        s = _session()
        before = dict(s.grid.symbols)
        s.pick_up((2, 2))
        self.assertNotIn((2, 2), s.grid.symbols)
        s.cancel()
        self.assertIsNone(s.holding)
        self.assertEqual(s.grid.symbols, before)
        s.grid.check_partition()
        s.cancel()  # no-op when empty-handed

    def test_given_fragment_in_flight_when_misused_then_invariant_violation(self):
        s = _session()
        s.pick_up((0, 0))
        with self.assertRaises(InvariantViolation):
            s.pick_up((2, 0))
        with self.assertRaises(InvariantViolation):
            s.check()
        s.cancel()
        with self.assertRaises(InvariantViolation):
            s.drop((5, 5))

    def test_given_fragment_when_dropped_over_own_old_cells_then_allowed(self):
        lvl = build("Pair", KEY, ["SN"], level_id="pair")
        s = PlaySession.from_level(lvl)
        s.pick_up((0, 0))
        self.assertTrue(s.drop((1, 0)))
        self.assertEqual(set(s.grid.symbols), {(1, 0), (2, 0)})
        self.assertEqual(len(s.grid.fragments), 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
