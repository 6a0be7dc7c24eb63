from typing import Optional

from diffcore import DiffOperation, DiffResult
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory, HunkGenerator, DiffHunk, flatten


class UnifiedFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__(config)
        self.hunk_generator = HunkGenerator(self.config.context_lines)

    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        if not self.has_changes(result):
            return
        self._writeln(f"{self.colors.bold}--- {file1}{self.colors.reset}")
        self._writeln(f"{self.colors.bold}+++ {file2}{self.colors.reset}")
        for hunk in self.hunk_generator.generate(flatten(result)):
            self._write_hunk(hunk)

    def _write_hunk(self, hunk: DiffHunk):
        self._writeln(f"{self.colors.cyan}{hunk.header()}{self.colors.reset}")
        for line in hunk.lines:
            if line.op == DiffOperation.EQUAL:
                self._writeln(f" {line.text}")
            elif line.op == DiffOperation.DELETE:
                self._writeln(f"{self.colors.red}-{line.text}{self.colors.reset}")
            else:
                self._writeln(f"{self.colors.green}+{line.text}{self.colors.reset}")


def _span(start: int, count: int) -> str:
    # 1-based; a single line prints as one number
    if count <= 1:
        return f"{start + 1}"
    return f"{start + 1},{start + count}"


class NormalDiffFormatter(BaseFormatter):
    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        for chunk in result.changes:
            left, right = chunk.left_range, chunk.right_range
            if chunk.operation == DiffOperation.DELETE:
                self._writeln(f"{_span(left.start, len(left))}d{right.start}")
            elif chunk.operation == DiffOperation.INSERT:
                self._writeln(f"{left.start}a{_span(right.start, len(right))}")
            else:
                self._writeln(f"{_span(left.start, len(left))}c{_span(right.start, len(right))}")
            for i in left:
                self._writeln(f"{self.colors.red}< {result.left_lines[i]}{self.colors.reset}")
            if len(left) and len(right):
                self._writeln("---")
            for j in right:
                self._writeln(f"{self.colors.green}> {result.right_lines[j]}{self.colors.reset}")


FormatterFactory.register("unified", UnifiedFormatter)
FormatterFactory.register("normal", NormalDiffFormatter)
