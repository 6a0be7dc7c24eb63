from typing import List, Optional, TextIO

from diffcore import ThreeWayChunk, ThreeWayDiffResult, ThreeWayStatus
from formatters.base import ColorScheme, FormatterConfig, OutputTarget, OutputWriter


class ThreeWayFormatter:
    """Region report for a three-way comparison.

    Unchanged regions are summarised in one line; every other region lists
    the base, left and right text it covers.
    """

    LABELS = {
        ThreeWayStatus.UNCHANGED: "unchanged",
        ThreeWayStatus.LEFT_CHANGED: "changed in left",
        ThreeWayStatus.RIGHT_CHANGED: "changed in right",
        ThreeWayStatus.BOTH_CHANGED: "changed identically",
        ThreeWayStatus.CONFLICT: "CONFLICT",
    }

    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme() if self.config.use_color else ColorScheme.no_color()
        self.writer: Optional[OutputWriter] = None

    def format(self, result: ThreeWayDiffResult, base_name: str, left_name: str,
               right_name: str, output: Optional[TextIO] = None) -> str:
        if output is None:
            self.writer = OutputWriter(OutputTarget.STRING)
        else:
            self.writer = OutputWriter(OutputTarget.FILE, output)

        self.writer.writeln(f"{self.colors.bold}base:  {base_name}{self.colors.reset}")
        self.writer.writeln(f"{self.colors.bold}left:  {left_name}{self.colors.reset}")
        self.writer.writeln(f"{self.colors.bold}right: {right_name}{self.colors.reset}")
        for region in result.regions():
            self._write_region(result, region)

        counts = result.status_counts()
        summary = ", ".join(f"{counts[status]} {self.LABELS[status]}" for status in ThreeWayStatus)
        self.writer.writeln(f"{len(result.chunks)} lines compared: {summary}")

        if output is None:
            return self.writer.get_output()
        return ""

    def _color(self, status: ThreeWayStatus) -> str:
        if status == ThreeWayStatus.CONFLICT:
            return self.colors.red
        if status == ThreeWayStatus.BOTH_CHANGED:
            return self.colors.cyan
        if status == ThreeWayStatus.UNCHANGED:
            return ""
        return self.colors.yellow

    def _write_region(self, result: ThreeWayDiffResult, region: ThreeWayChunk):
        header = (f"@@ base {_describe(region.base_range)} left {_describe(region.left_range)} "
                  f"right {_describe(region.right_range)} @@ {self.LABELS[region.status]}")
        color = self._color(region.status)
        self.writer.writeln(f"{color}{header}{self.colors.reset if color else ''}")
        if region.status == ThreeWayStatus.UNCHANGED:
            return
        for marker, lines, line_range in (("=", result.base_lines, region.base_range),
                                          ("<", result.left_lines, region.left_range),
                                          (">", result.right_lines, region.right_range)):
            for line in _slice(lines, line_range):
                self.writer.writeln(f"{marker} {line}")


def _describe(line_range: range) -> str:
    if len(line_range) == 0:
        return f"{line_range.start}"
    if len(line_range) == 1:
        return f"{line_range.start + 1}"
    return f"{line_range.start + 1}-{line_range.stop}"


def _slice(lines: List[str], line_range: range) -> List[str]:
    return lines[line_range.start:line_range.stop]
