import logging
from typing import Callable, List, Optional, Sequence, Union

from .chunks import build_chunks, project_chunks
from .linear import linear_edit_script
from .merge3 import ThreeWayMerger
from .models import ComparisonOptions, DiffChunk, DiffResult, EditScript, ThreeWayDiffResult
from .myers import shortest_edit_script
from .normalize import normalize_with_index

logger = logging.getLogger(__name__)

ChunkRef = Union[DiffChunk, int]


class DiffEngine:
    """Line diff and three-way classification with fixed comparison options.

    The engine keeps no state between calls; ``use_linear_space`` swaps the
    classic Myers search for the divide-and-conquer variant, which needs
    O(n + m) memory instead of O((n + m) * d).
    """

    def __init__(self, options: Optional[ComparisonOptions] = None, use_linear_space: bool = False):
        self.options = options or ComparisonOptions()
        self.use_linear_space = use_linear_space

    @property
    def strategy(self) -> str:
        return 'linear' if self.use_linear_space else 'classic'

    def _edit_script(self) -> Callable[[Sequence[str], Sequence[str]], EditScript]:
        return linear_edit_script if self.use_linear_space else shortest_edit_script

    def diff(self, left: Sequence[str], right: Sequence[str]) -> DiffResult:
        left_lines = list(left)
        right_lines = list(right)
        left_view = normalize_with_index(left_lines, self.options)
        right_view = normalize_with_index(right_lines, self.options)

        edits = self._edit_script()(left_view.text, right_view.text)
        chunks = build_chunks(edits, len(left_view.text), len(right_view.text))
        if self.options.ignore_blank_lines:
            chunks = project_chunks(chunks, left_view.origin, right_view.origin,
                                    len(left_lines), len(right_lines))

        logger.debug("diff (%s): left=%d right=%d edits=%d chunks=%d",
                     self.strategy, len(left_lines), len(right_lines), len(edits), len(chunks))
        return DiffResult(chunks=chunks, left_lines=left_lines, right_lines=right_lines)

    def diff3(self, base: Sequence[str], left: Sequence[str], right: Sequence[str]) -> ThreeWayDiffResult:
        base_left = self.diff(base, left)
        base_right = self.diff(base, right)
        return ThreeWayMerger(self.options).merge(base_left, base_right)

    def apply_chunk_to_right(self, result: DiffResult, chunk: ChunkRef) -> DiffResult:
        """Copy the left side of ``chunk`` over the right side and diff again."""
        chunk = self._resolve(result, chunk)
        right = _splice(result.right_lines, chunk.right_range,
                        result.left_lines[chunk.left_range.start:chunk.left_range.stop])
        return self.diff(result.left_lines, right)

    def apply_chunk_to_left(self, result: DiffResult, chunk: ChunkRef) -> DiffResult:
        """Copy the right side of ``chunk`` over the left side and diff again."""
        chunk = self._resolve(result, chunk)
        left = _splice(result.left_lines, chunk.left_range,
                       result.right_lines[chunk.right_range.start:chunk.right_range.stop])
        return self.diff(left, result.right_lines)

    @staticmethod
    def _resolve(result: DiffResult, chunk: ChunkRef) -> DiffChunk:
        if isinstance(chunk, int):
            changes = result.changes
            if not 0 <= chunk < len(changes):
                raise IndexError(f"change index {chunk} out of range (0..{len(changes) - 1})")
            return changes[chunk]
        if (chunk.left_range.stop > len(result.left_lines)
                or chunk.right_range.stop > len(result.right_lines)
                or chunk.left_range.start < 0 or chunk.right_range.start < 0):
            raise ValueError(f"{chunk!r} does not belong to this result")
        return chunk


def _splice(lines: Sequence[str], target: range, replacement: Sequence[str]) -> List[str]:
    return list(lines[:target.start]) + list(replacement) + list(lines[target.stop:])


def diff(left: Sequence[str], right: Sequence[str],
         options: Optional[ComparisonOptions] = None) -> DiffResult:
    return DiffEngine(options).diff(left, right)


def diff3(base: Sequence[str], left: Sequence[str], right: Sequence[str],
          options: Optional[ComparisonOptions] = None) -> ThreeWayDiffResult:
    return DiffEngine(options).diff3(base, left, right)
