import unittest
import sys
import os
from typing import List

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from diffcore import (
    ComparisonOptions, DiffEngine, DiffOperation, DiffResult, ThreeWayStatus,
    diff, diff3, shortest_edit_script, linear_edit_script,
)

from helpers.naive_diff import edit_distance as naive_edit_distance, verify_script

from properties.generators import (
    GeneratorConfig,
    SequenceGenerator,
    SimilarSequenceGenerator,
    BlankLineGenerator,
    generate_random_sequences,
    generate_similar_sequences,
    generate_edge_cases,
)


def all_pairs() -> List:
    return (generate_edge_cases()
            + generate_random_sequences(count=25, seed=11)
            + generate_similar_sequences(count=15, seed=12))


def rebuild_right(result: DiffResult) -> List[str]:
    out = []
    for chunk in result.chunks:
        if chunk.operation != DiffOperation.DELETE:
            out.extend(result.right_lines[j] for j in chunk.right_range)
    return out


def rebuild_left(result: DiffResult) -> List[str]:
    out = []
    for chunk in result.chunks:
        if chunk.operation != DiffOperation.INSERT:
            out.extend(result.left_lines[i] for i in chunk.left_range)
    return out


class PartitionMixin:
    def assertPartitions(self, result: DiffResult):
        left_pos = right_pos = 0
        for chunk in result.chunks:
            self.assertEqual(chunk.left_range.start, left_pos, result.chunks)
            self.assertEqual(chunk.right_range.start, right_pos, result.chunks)
            self.assertLessEqual(chunk.left_range.start, chunk.left_range.stop)
            self.assertLessEqual(chunk.right_range.start, chunk.right_range.stop)
            left_pos, right_pos = chunk.left_range.stop, chunk.right_range.stop
        self.assertEqual(left_pos, len(result.left_lines))
        self.assertEqual(right_pos, len(result.right_lines))
        self.assertEqual(sum(c.left_line_count for c in result.chunks), len(result.left_lines))
        self.assertEqual(sum(c.right_line_count for c in result.chunks), len(result.right_lines))

    def assertChunkShapes(self, result: DiffResult, strict_equal: bool = True):
        for chunk in result.chunks:
            if chunk.operation == DiffOperation.INSERT:
                self.assertEqual(chunk.left_line_count, 0)
                self.assertGreater(chunk.right_line_count, 0)
            elif chunk.operation == DiffOperation.DELETE:
                self.assertEqual(chunk.right_line_count, 0)
                self.assertGreater(chunk.left_line_count, 0)
            elif chunk.operation == DiffOperation.REPLACE:
                self.assertGreater(chunk.left_line_count, 0)
                self.assertGreater(chunk.right_line_count, 0)
            elif strict_equal:
                self.assertEqual(chunk.left_line_count, chunk.right_line_count)
        for first, second in zip(result.chunks, result.chunks[1:]):
            self.assertNotEqual(first.operation, second.operation)


class TestEditScriptProperties(unittest.TestCase):
    def test_classic_script_replays_and_is_minimal(self):
        for old, new in all_pairs():
            script = shortest_edit_script(old, new)
            self.assertTrue(verify_script(old, new, script), (old, new, script))
            self.assertEqual(len(script), naive_edit_distance(old, new))

    def test_linear_script_replays_and_is_minimal(self):
        for old, new in all_pairs():
            script = linear_edit_script(old, new)
            self.assertTrue(verify_script(old, new, script), (old, new, script))
            self.assertEqual(len(script), naive_edit_distance(old, new))

    def test_linear_and_classic_agree_on_length(self):
        gen = SequenceGenerator(GeneratorConfig(seed=21, max_length=60, alphabet="ab"))
        for _ in range(40):
            old, new = gen.generate_list(), gen.generate_list()
            self.assertEqual(len(linear_edit_script(old, new)), len(shortest_edit_script(old, new)))

    def test_swap_sequences_swaps_operations(self):
        for old, new in generate_random_sequences(count=20, seed=22):
            forward = shortest_edit_script(old, new)
            backward = shortest_edit_script(new, old)
            self.assertEqual(sum(1 for e in forward if e.kind.value == 'insert'),
                             sum(1 for e in backward if e.kind.value == 'delete'))

    def test_triangle_inequality(self):
        gen = SequenceGenerator(GeneratorConfig(seed=23, max_length=12))
        for _ in range(20):
            a, b, c = gen.generate_list(), gen.generate_list(), gen.generate_list()
            d_ab = len(shortest_edit_script(a, b))
            d_bc = len(shortest_edit_script(b, c))
            self.assertLessEqual(len(shortest_edit_script(a, c)), d_ab + d_bc)


class TestDiffResultProperties(PartitionMixin, unittest.TestCase):
    def test_lines_are_kept_verbatim(self):
        for old, new in all_pairs():
            result = diff(old, new)
            self.assertEqual(result.left_lines, old)
            self.assertEqual(result.right_lines, new)

    def test_chunks_partition_both_sides(self):
        for engine in (DiffEngine(), DiffEngine(use_linear_space=True)):
            for old, new in all_pairs():
                result = engine.diff(old, new)
                self.assertPartitions(result)
                self.assertChunkShapes(result)

    def test_chunks_rebuild_both_sides(self):
        for old, new in all_pairs():
            result = diff(old, new)
            self.assertEqual(rebuild_right(result), new)
            self.assertEqual(rebuild_left(result), old)

    def test_equal_chunks_hold_equal_lines(self):
        for old, new in all_pairs():
            result = diff(old, new)
            for chunk in result.chunks:
                if chunk.operation == DiffOperation.EQUAL:
                    self.assertEqual([old[i] for i in chunk.left_range],
                                     [new[j] for j in chunk.right_range])

    def test_identical_inputs(self):
        gen = SequenceGenerator(GeneratorConfig(seed=24))
        for _ in range(10):
            seq = gen.generate_list()
            result = diff(seq, list(seq))
            self.assertFalse(result.has_changes)
            if seq:
                self.assertEqual(len(result.chunks), 1)
                self.assertEqual(result.chunks[0].operation, DiffOperation.EQUAL)
            else:
                self.assertEqual(result.chunks, [])

    def test_insert_and_delete_counts_match_distance(self):
        for old, new in all_pairs():
            result = diff(old, new)
            inserted = sum(c.right_line_count for c in result.chunks
                           if c.operation in (DiffOperation.INSERT, DiffOperation.REPLACE))
            deleted = sum(c.left_line_count for c in result.chunks
                          if c.operation in (DiffOperation.DELETE, DiffOperation.REPLACE))
            self.assertEqual(inserted + deleted, naive_edit_distance(old, new))


class TestBlankLineProperties(PartitionMixin, unittest.TestCase):
    def setUp(self):
        self.options = ComparisonOptions(ignore_blank_lines=True)

    def test_blank_only_differences_are_ignored(self):
        gen = BlankLineGenerator(GeneratorConfig(seed=31))
        for _ in range(30):
            old, new = gen.generate_pair()
            result = diff(old, new, self.options)
            self.assertFalse(result.has_changes, (old, new, result.chunks))
            self.assertPartitions(result)

    def test_projection_keeps_partition(self):
        gen = BlankLineGenerator(GeneratorConfig(seed=32))
        for _ in range(30):
            old, new = gen.generate_pair(change_content=True)
            for engine in (DiffEngine(self.options), DiffEngine(self.options, use_linear_space=True)):
                result = engine.diff(old, new)
                self.assertPartitions(result)
                self.assertChunkShapes(result, strict_equal=False)

    def test_changes_survive_projection(self):
        gen = BlankLineGenerator(GeneratorConfig(seed=33))
        for _ in range(30):
            old, new = gen.generate_pair(change_content=True)
            plain_old = [line for line in old if line.strip()]
            plain_new = [line for line in new if line.strip()]
            expected = diff(plain_old, plain_new)
            result = diff(old, new, self.options)
            self.assertEqual(result.has_changes, expected.has_changes)
            self.assertEqual(len(result.changes), len(expected.changes))

    def test_changed_lines_are_never_blank_at_the_edges(self):
        gen = BlankLineGenerator(GeneratorConfig(seed=34))
        for _ in range(30):
            old, new = gen.generate_pair(change_content=True)
            for chunk in diff(old, new, self.options).changes:
                for lines, line_range in ((old, chunk.left_range), (new, chunk.right_range)):
                    if len(line_range):
                        self.assertTrue(lines[line_range.start].strip())
                        self.assertTrue(lines[line_range.stop - 1].strip())


class TestThreeWayProperties(unittest.TestCase):
    def setUp(self):
        self.gen = SimilarSequenceGenerator(GeneratorConfig(seed=41, max_length=25))

    def test_identical_inputs_are_unchanged(self):
        for _ in range(10):
            base, _ = self.gen.generate_pair()
            result = diff3(base, list(base), list(base))
            self.assertFalse(result.has_conflicts)
            self.assertTrue(all(c.status == ThreeWayStatus.UNCHANGED for c in result.chunks))

    def test_cursors_cover_every_line(self):
        for _ in range(15):
            base, left, right = self.gen.generate_triple()
            result = diff3(base, left, right)
            self.assertEqual(len(result.chunks), max(len(base), len(left), len(right)))
            for attr, lines in (("base_range", base), ("left_range", left), ("right_range", right)):
                covered = [i for c in result.chunks for i in getattr(c, attr)]
                self.assertEqual(covered, list(range(len(lines))))

    def test_same_edit_on_both_sides_never_conflicts(self):
        for _ in range(15):
            base, left = self.gen.generate_pair()
            result = diff3(base, left, list(left))
            self.assertFalse(result.has_conflicts, result.chunks)

    def test_one_sided_edit_never_conflicts(self):
        for _ in range(15):
            base, left = self.gen.generate_pair()
            self.assertFalse(diff3(base, left, list(base)).has_conflicts)
            self.assertFalse(diff3(base, list(base), left).has_conflicts)

    def test_regions_cover_the_same_lines(self):
        for _ in range(15):
            base, left, right = self.gen.generate_triple()
            result = diff3(base, left, right)
            regions = result.regions()
            self.assertLessEqual(len(regions), len(result.chunks))
            self.assertEqual([i for r in regions for i in r.base_range], list(range(len(base))))
            for first, second in zip(regions, regions[1:]):
                self.assertEqual(first.base_range.stop, second.base_range.start)


if __name__ == '__main__':
    unittest.main()
