import unittest

from game import flood_components, flood_from, neighbors4


class TestFloodFill(unittest.TestCase):
    def test_given_coord_when_listing_neighbors_then_four_orthogonal_cells(self):
        self.assertEqual(set(neighbors4((0, 0))), {(0, -1), (1, 0), (0, 1), (-1, 0)})

    def test_given_two_regions_when_partitioning_then_two_components(self):
        cells = {(0, 0), (1, 0), (1, 1), (5, 5), (5, 6)}
        comps = flood_components(cells)
        self.assertEqual(len(comps), 2)
        self.assertIn(frozenset({(0, 0), (1, 0), (1, 1)}), comps)
        self.assertIn(frozenset({(5, 5), (5, 6)}), comps)

    def test_given_diagonal_cells_when_partitioning_then_not_connected(self):
        comps = flood_components([(0, 0), (1, 1), (2, 2)])
        self.assertEqual(len(comps), 3)
        self.assertTrue(all(len(c) == 1 for c in comps))

    def test_given_any_order_when_partitioning_then_same_partition(self):
        cells = [(3, 0), (0, 0), (2, 0), (0, 1), (-4, -4)]
        a = set(flood_components(cells))
        b = set(flood_components(list(reversed(cells))))
        self.assertEqual(a, b)
        self.assertEqual(set().union(*a), set(cells))

    def test_given_empty_set_when_partitioning_then_no_components(self):
        self.assertEqual(flood_components([]), [])

    def test_given_seed_when_flooding_then_region_stays_inside_cells(self):
        cells = {(0, 0), (0, 1), (0, 2), (2, 2)}
        self.assertEqual(flood_from((0, 0), cells), {(0, 0), (0, 1), (0, 2)})


if __name__ == '__main__':
    unittest.main(verbosity=2)
