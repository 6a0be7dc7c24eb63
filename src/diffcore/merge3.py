import logging
from typing import List, Optional, Sequence

from .models import (ComparisonOptions, DiffChunk, DiffOperation, DiffResult,
                     ThreeWayChunk, ThreeWayDiffResult, ThreeWayStatus)
from .normalize import normalize

logger = logging.getLogger(__name__)


class _Cover:
    """Finds the chunk covering a base line; positions must not decrease."""

    def __init__(self, chunks: Sequence[DiffChunk]):
        self.chunks = chunks
        self.pos = 0

    def at(self, base_pos: int) -> Optional[DiffChunk]:
        while self.pos < len(self.chunks):
            base_range = self.chunks[self.pos].left_range
            if base_range.start == base_pos or base_pos in base_range:
                return self.chunks[self.pos]
            if base_range.start > base_pos:
                return None
            self.pos += 1
        return None


class ThreeWayMerger:
    """Classifies every base line against two diffs that share the base.

    The walk advances the base, left and right cursors one line per step,
    so the resulting chunks are one line wide. Use
    ``ThreeWayDiffResult.regions()`` to get multi-line regions.
    """

    def __init__(self, options: Optional[ComparisonOptions] = None):
        self.options = options or ComparisonOptions()

    def merge(self, base_left: DiffResult, base_right: DiffResult) -> ThreeWayDiffResult:
        base_lines = base_left.left_lines
        left_lines = base_left.right_lines
        right_lines = base_right.right_lines
        base_count = len(base_lines)
        left_count = len(left_lines)
        right_count = len(right_lines)

        left_cover = _Cover(base_left.chunks)
        right_cover = _Cover(base_right.chunks)
        chunks: List[ThreeWayChunk] = []
        base_pos = left_pos = right_pos = 0

        while base_pos < base_count or left_pos < left_count or right_pos < right_count:
            left_chunk = left_cover.at(base_pos)
            right_chunk = right_cover.at(base_pos)
            status = self._classify(left_chunk, right_chunk, left_lines, right_lines)

            base_end = min(base_pos + 1, base_count)
            left_end = min(left_pos + 1, left_count)
            right_end = min(right_pos + 1, right_count)
            chunks.append(ThreeWayChunk(
                base_range=range(base_pos, base_end),
                left_range=range(left_pos, left_end),
                right_range=range(right_pos, right_end),
                status=status
            ))
            base_pos, left_pos, right_pos = base_end, left_end, right_end

        result = ThreeWayDiffResult(chunks=chunks, base_lines=list(base_lines),
                                    left_lines=list(left_lines), right_lines=list(right_lines))
        logger.debug("diff3: base=%d left=%d right=%d chunks=%d conflicts=%d",
                     base_count, left_count, right_count, len(chunks), result.conflict_count)
        return result

    def _classify(self, left_chunk: Optional[DiffChunk], right_chunk: Optional[DiffChunk],
                  left_lines: Sequence[str], right_lines: Sequence[str]) -> ThreeWayStatus:
        left_changed = left_chunk is not None and left_chunk.operation != DiffOperation.EQUAL
        right_changed = right_chunk is not None and right_chunk.operation != DiffOperation.EQUAL
        if not left_changed and not right_changed:
            return ThreeWayStatus.UNCHANGED
        if not right_changed:
            return ThreeWayStatus.LEFT_CHANGED
        if not left_changed:
            return ThreeWayStatus.RIGHT_CHANGED
        if self._same_change(left_chunk, right_chunk, left_lines, right_lines):
            return ThreeWayStatus.BOTH_CHANGED
        return ThreeWayStatus.CONFLICT

    def _same_change(self, left_chunk: DiffChunk, right_chunk: DiffChunk,
                     left_lines: Sequence[str], right_lines: Sequence[str]) -> bool:
        left_base, right_base = left_chunk.left_range, right_chunk.left_range
        if (left_base.start, left_base.stop) != (right_base.start, right_base.stop):
            return False
        left_new = [left_lines[i] for i in left_chunk.right_range]
        right_new = [right_lines[i] for i in right_chunk.right_range]
        return normalize(left_new, self.options) == normalize(right_new, self.options)
