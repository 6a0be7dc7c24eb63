import sys, os, unittest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from diffcore import ComparisonOptions, DiffEngine, ThreeWayMerger, ThreeWayStatus, diff, diff3

U = ThreeWayStatus.UNCHANGED
L = ThreeWayStatus.LEFT_CHANGED
R = ThreeWayStatus.RIGHT_CHANGED
B = ThreeWayStatus.BOTH_CHANGED
C = ThreeWayStatus.CONFLICT


def statuses(result):
    return [c.status for c in result.chunks]


def ranges(chunk):
    return tuple((r.start, r.stop) for r in (chunk.base_range, chunk.left_range, chunk.right_range))


class TestThreeWayClassification(unittest.TestCase):
    def setUp(self):
        self.base = ['line1', 'line2', 'line3']

    def test_nothing_changed(self):
        result = diff3(self.base, list(self.base), list(self.base))
        self.assertEqual(statuses(result), [U, U, U])
        self.assertFalse(result.has_conflicts)

    def test_left_only_change(self):
        result = diff3(self.base, ['line1', 'modified by left', 'line3'], self.base)
        self.assertEqual(statuses(result), [U, L, U])
        self.assertFalse(result.has_conflicts)

    def test_right_only_change(self):
        result = diff3(self.base, self.base, ['line1', 'line2', 'line3 from right'])
        self.assertEqual(statuses(result), [U, U, R])

    def test_conflicting_change(self):
        result = diff3(self.base, ['line1', 'left change', 'line3'], ['line1', 'right change', 'line3'])
        self.assertEqual(statuses(result), [U, C, U])
        self.assertTrue(result.has_conflicts)
        self.assertEqual(result.conflict_count, 1)
        self.assertTrue(result.chunks[1].is_conflict)

    def test_identical_change_on_both_sides(self):
        result = diff3(self.base, ['line1', 'same', 'line3'], ['line1', 'same', 'line3'])
        self.assertEqual(statuses(result), [U, B, U])
        self.assertFalse(result.has_conflicts)

    def test_identical_delete_on_both_sides(self):
        result = diff3(self.base, ['line1', 'line3'], ['line1', 'line3'])
        self.assertEqual(statuses(result), [U, B, U])
        self.assertEqual(ranges(result.chunks[2]), ((2, 3), (2, 2), (2, 2)))

    def test_same_change_after_normalization(self):
        left = ['line1', 'Same', 'line3']
        right = ['line1', 'sAME', 'line3']
        self.assertEqual(statuses(diff3(self.base, left, right)), [U, C, U])
        result = diff3(self.base, left, right, ComparisonOptions(ignore_case=True))
        self.assertEqual(statuses(result), [U, B, U])

    def test_different_base_ranges_conflict(self):
        base = ['a', 'b', 'c', 'd']
        left = ['a', 'X', 'Y', 'd']
        right = ['a', 'X', 'c', 'd']
        self.assertEqual(statuses(diff3(base, left, right)), [U, C, L, U])


class TestThreeWayWalk(unittest.TestCase):
    def test_one_line_per_step(self):
        base = ['a', 'b', 'c', 'd']
        left = ['a', 'B', 'C', 'd']
        result = diff3(base, left, base)
        self.assertEqual(len(result.chunks), 4)
        self.assertEqual(statuses(result), [U, L, L, U])
        for chunk in result.chunks:
            self.assertLessEqual(len(chunk.base_range), 1)

    def test_insertion_shifts_the_walk(self):
        base = ['a', 'b']
        result = diff3(base, ['a', 'new', 'b'], base)
        self.assertEqual(statuses(result), [U, L, U])
        self.assertEqual([ranges(c) for c in result.chunks],
                         [((0, 1), (0, 1), (0, 1)),
                          ((1, 2), (1, 2), (1, 2)),
                          ((2, 2), (2, 3), (2, 2))])

    def test_empty_inputs(self):
        self.assertEqual(diff3([], [], []).chunks, [])
        result = diff3([], ['x'], [])
        self.assertEqual(statuses(result), [L])
        self.assertEqual(ranges(result.chunks[0]), ((0, 0), (0, 1), (0, 0)))

    def test_regions_coalesce_runs(self):
        base = ['a', 'b', 'c', 'd']
        result = diff3(base, ['a', 'B', 'C', 'd'], base)
        regions = result.regions()
        self.assertEqual([r.status for r in regions], [U, L, U])
        self.assertEqual(ranges(regions[1]), ((1, 3), (1, 3), (1, 3)))

    def test_status_counts(self):
        base = ['a', 'b', 'c']
        counts = diff3(base, ['a', 'x', 'c'], ['a', 'y', 'z']).status_counts()
        self.assertEqual(counts[C], 1)
        self.assertEqual(counts[R], 1)
        self.assertEqual(counts[U], 1)
        self.assertEqual(counts[B], 0)

    def test_merger_works_on_precomputed_diffs(self):
        base = ['a', 'b']
        engine = DiffEngine()
        merged = ThreeWayMerger().merge(engine.diff(base, ['a', 'c']), engine.diff(base, base))
        self.assertEqual(merged.base_lines, base)
        self.assertEqual(merged.left_lines, ['a', 'c'])
        self.assertEqual(statuses(merged), [U, L])

    def test_engine_and_module_function_agree(self):
        base, left, right = ['1', '2', '3'], ['1', '2b', '3'], ['0', '1', '2', '3']
        self.assertEqual(statuses(DiffEngine().diff3(base, left, right)),
                         statuses(diff3(base, left, right)))
        self.assertTrue(diff(base, left).has_changes)


if __name__ == '__main__':
    unittest.main()
