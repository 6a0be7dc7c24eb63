from typing import List, NamedTuple, Optional, Dict
from enum import Enum
from dataclasses import dataclass


class EditKind(str, Enum):
    INSERT = 'insert'
    DELETE = 'delete'


class Edit(NamedTuple):
    kind: EditKind
    left_index: int
    right_index: int

    def __repr__(self) -> str:
        return f"Edit({self.kind.value!r}, {self.left_index}, {self.right_index})"


EditScript = List[Edit]


def make_insert(left_index: int, right_index: int) -> Edit:
    return Edit(EditKind.INSERT, left_index, right_index)


def make_delete(left_index: int, right_index: int) -> Edit:
    return Edit(EditKind.DELETE, left_index, right_index)


class DiffOperation(str, Enum):
    EQUAL = 'equal'
    INSERT = 'insert'
    DELETE = 'delete'
    REPLACE = 'replace'
    CONFLICT = 'conflict'


class Side(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'


@dataclass(frozen=True)
class ComparisonOptions:
    ignore_whitespace: bool = False
    ignore_case: bool = False
    ignore_blank_lines: bool = False

    @property
    def is_default(self) -> bool:
        return not (self.ignore_whitespace or self.ignore_case or self.ignore_blank_lines)

    @classmethod
    def from_flags(cls, **flags) -> 'ComparisonOptions':
        known = {name: bool(flags[name]) for name in
                 ('ignore_whitespace', 'ignore_case', 'ignore_blank_lines') if name in flags}
        return cls(**known)


@dataclass(frozen=True)
class DiffChunk:
    operation: DiffOperation
    left_range: range
    right_range: range

    @property
    def left_line_count(self) -> int:
        return len(self.left_range)

    @property
    def right_line_count(self) -> int:
        return len(self.right_range)

    @property
    def description(self) -> str:
        if self.operation == DiffOperation.EQUAL:
            return f"Equal: lines {self.left_range.start + 1}-{self.left_range.stop}"
        if self.operation == DiffOperation.INSERT:
            return f"Insert: {self.right_line_count} lines at {self.right_range.start + 1}"
        if self.operation == DiffOperation.DELETE:
            return f"Delete: {self.left_line_count} lines at {self.left_range.start + 1}"
        if self.operation == DiffOperation.REPLACE:
            return f"Replace: {self.left_line_count} → {self.right_line_count} lines"
        return f"Conflict: {self.left_line_count} vs {self.right_line_count} lines"

    def __repr__(self) -> str:
        return (f"DiffChunk({self.operation.value!r}, "
                f"[{self.left_range.start},{self.left_range.stop}), "
                f"[{self.right_range.start},{self.right_range.stop}))")


def make_chunk(operation: DiffOperation, left_lo: int, left_hi: int,
               right_lo: int, right_hi: int) -> DiffChunk:
    return DiffChunk(operation, range(left_lo, left_hi), range(right_lo, right_hi))


@dataclass(frozen=True)
class DiffResult:
    chunks: List[DiffChunk]
    left_lines: List[str]
    right_lines: List[str]

    @classmethod
    def empty(cls) -> 'DiffResult':
        return cls(chunks=[], left_lines=[], right_lines=[])

    @property
    def has_changes(self) -> bool:
        return any(c.operation != DiffOperation.EQUAL for c in self.chunks)

    @property
    def insertions(self) -> int:
        return sum(c.right_line_count for c in self.chunks if c.operation == DiffOperation.INSERT)

    @property
    def deletions(self) -> int:
        return sum(c.left_line_count for c in self.chunks if c.operation == DiffOperation.DELETE)

    @property
    def modifications(self) -> int:
        return sum(1 for c in self.chunks if c.operation == DiffOperation.REPLACE)

    @property
    def changes(self) -> List[DiffChunk]:
        return [c for c in self.chunks if c.operation != DiffOperation.EQUAL]

    def chunk_at_line(self, side: Side, index: int) -> Optional[DiffChunk]:
        for chunk in self.chunks:
            line_range = chunk.left_range if side == Side.LEFT else chunk.right_range
            if index in line_range:
                return chunk
        return None


class ThreeWayStatus(str, Enum):
    UNCHANGED = 'unchanged'
    LEFT_CHANGED = 'left_changed'
    RIGHT_CHANGED = 'right_changed'
    BOTH_CHANGED = 'both_changed'
    CONFLICT = 'conflict'


@dataclass(frozen=True)
class ThreeWayChunk:
    base_range: range
    left_range: range
    right_range: range
    status: ThreeWayStatus

    @property
    def is_conflict(self) -> bool:
        return self.status == ThreeWayStatus.CONFLICT

    def __repr__(self) -> str:
        spans = ", ".join(f"[{r.start},{r.stop})" for r in
                          (self.base_range, self.left_range, self.right_range))
        return f"ThreeWayChunk({self.status.value!r}, {spans})"


@dataclass(frozen=True)
class ThreeWayDiffResult:
    chunks: List[ThreeWayChunk]
    base_lines: List[str]
    left_lines: List[str]
    right_lines: List[str]

    @property
    def has_conflicts(self) -> bool:
        return any(c.is_conflict for c in self.chunks)

    @property
    def conflict_count(self) -> int:
        return sum(1 for c in self.chunks if c.is_conflict)

    def status_counts(self) -> Dict[ThreeWayStatus, int]:
        counts = {status: 0 for status in ThreeWayStatus}
        for chunk in self.chunks:
            counts[chunk.status] += 1
        return counts

    def regions(self) -> List[ThreeWayChunk]:
        """Coalesce runs of same-status chunks whose ranges touch on all three sides."""
        merged: List[ThreeWayChunk] = []
        for chunk in self.chunks:
            if merged:
                last = merged[-1]
                if (last.status == chunk.status
                        and last.base_range.stop == chunk.base_range.start
                        and last.left_range.stop == chunk.left_range.start
                        and last.right_range.stop == chunk.right_range.start):
                    merged[-1] = ThreeWayChunk(
                        base_range=range(last.base_range.start, chunk.base_range.stop),
                        left_range=range(last.left_range.start, chunk.left_range.stop),
                        right_range=range(last.right_range.start, chunk.right_range.stop),
                        status=last.status
                    )
                    continue
            merged.append(chunk)
        return merged
