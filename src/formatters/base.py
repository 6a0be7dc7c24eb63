from abc import ABC, abstractmethod
from typing import List, NamedTuple, TextIO, Optional, Dict, Tuple
from enum import Enum
from dataclasses import dataclass, replace
import sys

from diffcore import DiffOperation, DiffResult


class OutputTarget(Enum):
    STDOUT = "stdout"
    FILE = "file"
    STRING = "string"


@dataclass
class FormatterConfig:
    context_lines: int = 3
    width: int = 130
    use_color: bool = True
    tab_size: int = 4
    show_line_numbers: bool = True

    def copy(self) -> 'FormatterConfig':
        return replace(self)

    def with_context_lines(self, lines: int) -> 'FormatterConfig':
        return replace(self, context_lines=lines)

    def with_width(self, width: int) -> 'FormatterConfig':
        return replace(self, width=width)

    def with_color(self, use_color: bool) -> 'FormatterConfig':
        return replace(self, use_color=use_color)


class ColorScheme:
    def __init__(self):
        self.reset = '\033[0m'
        self.bold = '\033[1m'
        self.red = '\033[31m'
        self.green = '\033[32m'
        self.yellow = '\033[33m'
        self.blue = '\033[34m'
        self.magenta = '\033[35m'
        self.cyan = '\033[36m'

    def disable_colors(self):
        for name in ('reset', 'bold', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan'):
            setattr(self, name, '')

    @classmethod
    def no_color(cls) -> 'ColorScheme':
        scheme = cls()
        scheme.disable_colors()
        return scheme


class OutputWriter:
    def __init__(self, target: OutputTarget = OutputTarget.STDOUT, output: Optional[TextIO] = None):
        self.target = target
        self._output = output or sys.stdout
        self._buffer: List[str] = []

    def write(self, text: str):
        if self.target == OutputTarget.STRING:
            self._buffer.append(text)
        else:
            self._output.write(text)

    def writeln(self, text: str = ""):
        self.write(text + "\n")

    def get_output(self) -> str:
        return "".join(self._buffer)

    def flush(self):
        if self.target != OutputTarget.STRING:
            self._output.flush()


class DiffLine(NamedTuple):
    """One printed line: ``EQUAL``, ``DELETE`` or ``INSERT`` with 0-based source indices."""
    op: DiffOperation
    text: str
    left_index: Optional[int]
    right_index: Optional[int]


def flatten(result: DiffResult) -> List[DiffLine]:
    """Expand chunks into printable lines; replaced lines come out as deletes then inserts."""
    lines: List[DiffLine] = []
    for chunk in result.chunks:
        if chunk.operation == DiffOperation.EQUAL:
            left = list(chunk.left_range)
            right = list(chunk.right_range)
            for offset in range(max(len(left), len(right))):
                i = left[offset] if offset < len(left) else None
                j = right[offset] if offset < len(right) else None
                text = result.left_lines[i] if i is not None else result.right_lines[j]
                lines.append(DiffLine(DiffOperation.EQUAL, text, i, j))
            continue
        for i in chunk.left_range:
            lines.append(DiffLine(DiffOperation.DELETE, result.left_lines[i], i, None))
        for j in chunk.right_range:
            lines.append(DiffLine(DiffOperation.INSERT, result.right_lines[j], None, j))
    return lines


class DiffHunk:
    def __init__(
        self,
        orig_start: int,
        orig_count: int,
        mod_start: int,
        mod_count: int,
        lines: List[DiffLine]
    ):
        self.orig_start = orig_start
        self.orig_count = orig_count
        self.mod_start = mod_start
        self.mod_count = mod_count
        self.lines = lines

    def __repr__(self) -> str:
        return f"DiffHunk({self.header()})"

    def header(self) -> str:
        # an empty side names the line before the hunk, as diff -u does
        orig = self.orig_start + 1 if self.orig_count else self.orig_start
        mod = self.mod_start + 1 if self.mod_count else self.mod_start
        return f"@@ -{orig},{self.orig_count} +{mod},{self.mod_count} @@"

    def has_changes(self) -> bool:
        return any(line.op != DiffOperation.EQUAL for line in self.lines)


class HunkGenerator:
    def __init__(self, context_lines: int = 3):
        self.context_lines = context_lines

    def generate(self, lines: List[DiffLine]) -> List[DiffHunk]:
        change_indices = [i for i, line in enumerate(lines) if line.op != DiffOperation.EQUAL]
        if not change_indices:
            return []
        return [self._create_hunk(lines, start, end)
                for start, end in self._merge_ranges(change_indices, len(lines))]

    def _merge_ranges(self, change_indices: List[int], total: int) -> List[Tuple[int, int]]:
        # windows of context that touch or overlap become one hunk
        ranges: List[Tuple[int, int]] = []
        for idx in change_indices:
            start = max(0, idx - self.context_lines)
            end = min(total - 1, idx + self.context_lines)
            if ranges and start <= ranges[-1][1] + 1:
                ranges[-1] = (ranges[-1][0], end)
            else:
                ranges.append((start, end))
        return ranges

    def _create_hunk(self, lines: List[DiffLine], start: int, end: int) -> DiffHunk:
        before = lines[:start]
        orig_start = sum(1 for line in before if line.left_index is not None)
        mod_start = sum(1 for line in before if line.right_index is not None)
        body = lines[start:end + 1]
        orig_count = sum(1 for line in body if line.left_index is not None)
        mod_count = sum(1 for line in body if line.right_index is not None)
        return DiffHunk(orig_start, orig_count, mod_start, mod_count, body)


class BaseFormatter(ABC):
    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme() if self.config.use_color else ColorScheme.no_color()
        self.writer: Optional[OutputWriter] = None

    def format(
        self,
        result: DiffResult,
        file1: str,
        file2: str,
        output: Optional[TextIO] = None
    ) -> str:
        if output is None:
            self.writer = OutputWriter(OutputTarget.STRING)
        else:
            self.writer = OutputWriter(OutputTarget.FILE, output)
        self._format_impl(result, file1, file2)
        if output is None:
            return self.writer.get_output()
        return ""

    @abstractmethod
    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        pass

    def has_changes(self, result: DiffResult) -> bool:
        return result.has_changes

    def _write(self, text: str):
        if self.writer:
            self.writer.write(text)

    def _writeln(self, text: str = ""):
        if self.writer:
            self.writer.writeln(text)


class SimpleFormatter(BaseFormatter):
    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        for line in flatten(result):
            if line.op == DiffOperation.EQUAL:
                self._writeln(f" {line.text}")
            elif line.op == DiffOperation.DELETE:
                self._writeln(f"{self.colors.red}-{line.text}{self.colors.reset}")
            else:
                self._writeln(f"{self.colors.green}+{line.text}{self.colors.reset}")


class FormatterFactory:
    _formatters: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, formatter_class: type):
        cls._formatters[name] = formatter_class

    @classmethod
    def create(cls, name: str, config: Optional[FormatterConfig] = None) -> BaseFormatter:
        if name not in cls._formatters:
            raise ValueError(f"Unknown formatter: {name}")
        return cls._formatters[name](config)

    @classmethod
    def available(cls) -> List[str]:
        return list(cls._formatters.keys())


FormatterFactory.register("simple", SimpleFormatter)
