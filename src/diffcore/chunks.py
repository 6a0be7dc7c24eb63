import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import DiffChunk, DiffOperation, DiffResult, EditKind, EditScript, make_chunk

logger = logging.getLogger(__name__)


def build_chunks(edits: EditScript, left_count: int, right_count: int) -> List[DiffChunk]:
    """Group an ascending edit script into chunks covering both sequences.

    Lines between edits become ``EQUAL`` chunks. Each maximal run of edits
    with no matching line in between becomes a single ``REPLACE``,
    ``DELETE`` or ``INSERT`` chunk.
    """
    if not edits:
        if left_count > 0 and right_count > 0:
            return [make_chunk(DiffOperation.EQUAL, 0, left_count, 0, right_count)]
        return []

    chunks: List[DiffChunk] = []
    left_pos = 0
    right_pos = 0
    i = 0
    while i < len(edits):
        edit = edits[i]

        if edit.kind == EditKind.DELETE and edit.left_index > left_pos:
            gap = edit.left_index - left_pos
            chunks.append(make_chunk(DiffOperation.EQUAL, left_pos, edit.left_index,
                                     right_pos, right_pos + gap))
            left_pos = edit.left_index
            right_pos += gap
        elif edit.kind == EditKind.INSERT and edit.right_index > right_pos:
            gap = edit.right_index - right_pos
            chunks.append(make_chunk(DiffOperation.EQUAL, left_pos, left_pos + gap,
                                     right_pos, edit.right_index))
            left_pos += gap
            right_pos = edit.right_index

        deletes = 0
        inserts = 0
        while i < len(edits):
            e = edits[i]
            if e.kind == EditKind.DELETE and e.left_index == left_pos + deletes:
                deletes += 1
            elif e.kind == EditKind.INSERT and e.right_index == right_pos + inserts:
                inserts += 1
            else:
                break
            i += 1

        if deletes and inserts:
            op = DiffOperation.REPLACE
        elif deletes:
            op = DiffOperation.DELETE
        else:
            op = DiffOperation.INSERT
        chunks.append(make_chunk(op, left_pos, left_pos + deletes, right_pos, right_pos + inserts))
        left_pos += deletes
        right_pos += inserts

    if left_pos < left_count and right_pos < right_count:
        chunks.append(make_chunk(DiffOperation.EQUAL, left_pos, left_count, right_pos, right_count))

    return merge_adjacent_chunks(chunks)


def merge_adjacent_chunks(chunks: Sequence[DiffChunk]) -> List[DiffChunk]:
    if not chunks:
        return []
    merged: List[DiffChunk] = []
    current = chunks[0]
    for chunk in chunks[1:]:
        if (current.operation == chunk.operation
                and current.left_range.stop == chunk.left_range.start
                and current.right_range.stop == chunk.right_range.start):
            current = make_chunk(current.operation,
                                 current.left_range.start, chunk.left_range.stop,
                                 current.right_range.start, chunk.right_range.stop)
        else:
            merged.append(current)
            current = chunk
    merged.append(current)
    return merged


def _span(line_range: range, origin: Sequence[int], cursor: int):
    if len(line_range) == 0:
        return cursor, cursor
    return origin[line_range.start], origin[line_range.stop - 1] + 1


def project_chunks(chunks: Sequence[DiffChunk], left_origin: Sequence[int],
                   right_origin: Sequence[int], left_count: int,
                   right_count: int) -> List[DiffChunk]:
    """Map comparison-space chunks back onto the original lines.

    ``left_origin``/``right_origin`` give the original index of every
    compared line. Lines that were left out of the comparison (ignored
    blank lines) are absorbed into ``EQUAL`` chunks, except where they fall
    between the first and last line of a change.
    """
    projected: List[DiffChunk] = []
    left_pos = 0
    right_pos = 0
    for chunk in chunks:
        left_lo, left_hi = _span(chunk.left_range, left_origin, left_pos)
        right_lo, right_hi = _span(chunk.right_range, right_origin, right_pos)
        if chunk.operation == DiffOperation.EQUAL:
            left_lo, right_lo = left_pos, right_pos
        elif left_lo > left_pos or right_lo > right_pos:
            projected.append(make_chunk(DiffOperation.EQUAL, left_pos, left_lo, right_pos, right_lo))
        projected.append(make_chunk(chunk.operation, left_lo, left_hi, right_lo, right_hi))
        left_pos, right_pos = left_hi, right_hi

    if left_pos < left_count or right_pos < right_count:
        projected.append(make_chunk(DiffOperation.EQUAL, left_pos, left_count, right_pos, right_count))

    merged = merge_adjacent_chunks(projected)
    logger.debug("projected %d chunks onto %d/%d lines (%d after merge)",
                 len(chunks), left_count, right_count, len(merged))
    return merged


@dataclass(frozen=True)
class AlignedLine:
    """One side-by-side row; ``None`` marks a placeholder on that side."""
    index: int
    left_text: Optional[str]
    right_text: Optional[str]
    left_line_number: Optional[int]
    right_line_number: Optional[int]
    operation: DiffOperation


def align_lines(result: DiffResult) -> List[AlignedLine]:
    rows: List[AlignedLine] = []
    left_lines = result.left_lines
    right_lines = result.right_lines

    for chunk in result.chunks:
        op = chunk.operation
        if op == DiffOperation.DELETE:
            for i in chunk.left_range:
                rows.append(AlignedLine(len(rows), left_lines[i], None, i + 1, None, op))
        elif op == DiffOperation.INSERT:
            for j in chunk.right_range:
                rows.append(AlignedLine(len(rows), None, right_lines[j], None, j + 1, op))
        else:
            # equal chunks only differ in length when blank lines were ignored
            left_n = chunk.left_line_count
            right_n = chunk.right_line_count
            for offset in range(max(left_n, right_n)):
                i = chunk.left_range.start + offset
                j = chunk.right_range.start + offset
                has_left = offset < left_n
                has_right = offset < right_n
                rows.append(AlignedLine(
                    index=len(rows),
                    left_text=left_lines[i] if has_left else None,
                    right_text=right_lines[j] if has_right else None,
                    left_line_number=i + 1 if has_left else None,
                    right_line_number=j + 1 if has_right else None,
                    operation=op
                ))
    return rows
