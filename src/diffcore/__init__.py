from .models import (
    ComparisonOptions, DiffChunk, DiffOperation, DiffResult, Edit, EditKind,
    Side, ThreeWayChunk, ThreeWayDiffResult, ThreeWayStatus,
)
from .normalize import normalize, normalize_with_index, NormalizedLines
from .myers import MyersDiff, shortest_edit_script, edit_distance
from .linear import LinearSpaceMyers, linear_edit_script
from .chunks import AlignedLine, align_lines, build_chunks, merge_adjacent_chunks, project_chunks
from .merge3 import ThreeWayMerger
from .engine import DiffEngine, diff, diff3

__all__ = [
    'ComparisonOptions', 'DiffChunk', 'DiffOperation', 'DiffResult', 'Edit', 'EditKind',
    'Side', 'ThreeWayChunk', 'ThreeWayDiffResult', 'ThreeWayStatus',
    'normalize', 'normalize_with_index', 'NormalizedLines',
    'MyersDiff', 'shortest_edit_script', 'edit_distance',
    'LinearSpaceMyers', 'linear_edit_script',
    'AlignedLine', 'align_lines', 'build_chunks', 'merge_adjacent_chunks', 'project_chunks',
    'ThreeWayMerger', 'DiffEngine', 'diff', 'diff3',
]

__version__ = '1.0.0'
