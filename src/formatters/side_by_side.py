from typing import List, Optional

from diffcore import AlignedLine, DiffOperation, DiffResult, align_lines
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory


class ColumnConfig:
    def __init__(self, total_width: int = 130, gutter_width: int = 3, line_num_width: int = 4):
        self.total_width = total_width
        self.gutter_width = gutter_width
        self.line_num_width = line_num_width
        self._calculate_content_width()

    def _calculate_content_width(self):
        available = self.total_width - self.gutter_width - (2 * self.line_num_width) - 4
        self.content_width = max(available // 2, 1)


class TextTruncator:
    def __init__(self, max_width: int, ellipsis: str = "..."):
        self.max_width = max_width
        self.ellipsis = ellipsis

    def truncate(self, text: str) -> str:
        if len(text) <= self.max_width:
            return text
        if self.max_width <= len(self.ellipsis):
            return text[:self.max_width]
        return text[:self.max_width - len(self.ellipsis)] + self.ellipsis

    def pad(self, text: str, width: Optional[int] = None) -> str:
        target_width = width or self.max_width
        if len(text) >= target_width:
            return text[:target_width]
        return text + " " * (target_width - len(text))

    def truncate_and_pad(self, text: str) -> str:
        return self.pad(self.truncate(text))


class LineNumberFormatter:
    def __init__(self, width: int = 4, padding_char: str = " "):
        self.width = width
        self.padding_char = padding_char

    def format(self, line_num: Optional[int]) -> str:
        if line_num is None:
            return self.padding_char * self.width
        num_str = str(line_num)
        if len(num_str) >= self.width:
            return num_str
        return self.padding_char * (self.width - len(num_str)) + num_str


class GutterFormatter:
    MARKERS = {
        DiffOperation.EQUAL: " | ",
        DiffOperation.DELETE: " < ",
        DiffOperation.INSERT: " > ",
        DiffOperation.REPLACE: " | ",
        DiffOperation.CONFLICT: " ! ",
    }

    def __init__(self, colors):
        self.colors = colors

    def format(self, operation: DiffOperation) -> str:
        marker = self.MARKERS[operation]
        if operation == DiffOperation.EQUAL:
            return marker
        color = {
            DiffOperation.DELETE: self.colors.red,
            DiffOperation.INSERT: self.colors.green,
            DiffOperation.REPLACE: self.colors.yellow,
            DiffOperation.CONFLICT: self.colors.magenta,
        }[operation]
        return f"{color}{marker}{self.colors.reset}"


class SideBySideRowFormatter:
    def __init__(self, config: ColumnConfig, colors, tab_size: int = 4, show_line_numbers: bool = True):
        self.config = config
        self.colors = colors
        self.tab_size = tab_size
        self.show_line_numbers = show_line_numbers
        self.truncator = TextTruncator(config.content_width)
        self.line_num_fmt = LineNumberFormatter(config.line_num_width)
        self.gutter_fmt = GutterFormatter(colors)

    def _cell(self, number: Optional[int], text: Optional[str], pad: bool) -> str:
        content = (text or "").expandtabs(self.tab_size)
        content = self.truncator.truncate_and_pad(content) if pad else self.truncator.truncate(content)
        if not self.show_line_numbers:
            return content
        return f"{self.line_num_fmt.format(number)} {content}"

    def format_row(self, row: AlignedLine) -> str:
        left = self._cell(row.left_line_number, row.left_text, pad=True)
        right = self._cell(row.right_line_number, row.right_text, pad=False)
        gutter = self.gutter_fmt.format(row.operation)
        if row.operation == DiffOperation.EQUAL:
            return f"{left}{gutter}{right}".rstrip()
        if row.left_text is not None:
            left = f"{self.colors.red}{left}{self.colors.reset}"
        if row.right_text is not None:
            right = f"{self.colors.green}{right}{self.colors.reset}"
        return f"{left}{gutter}{right}".rstrip()


class SideBySideHeader:
    def __init__(self, config: ColumnConfig, file1: str, file2: str):
        self.config = config
        self.file1 = file1
        self.file2 = file2
        self.truncator = TextTruncator(config.content_width + config.line_num_width + 1)

    def format_separator(self) -> str:
        return "=" * self.config.total_width

    def format_filenames(self) -> str:
        left = self.truncator.truncate_and_pad(self.file1)
        right = self.truncator.truncate(self.file2)
        return f"{left} | {right}"

    def format_header_lines(self) -> List[str]:
        return [
            self.format_separator(),
            self.format_filenames(),
            self.format_separator()
        ]


class SideBySideFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__(config)
        self.column_config = ColumnConfig(self.config.width)
        self.row_formatter = SideBySideRowFormatter(
            self.column_config,
            self.colors,
            self.config.tab_size,
            self.config.show_line_numbers
        )

    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        header = SideBySideHeader(self.column_config, file1, file2)
        for line in header.format_header_lines():
            self._writeln(line)
        for row in align_lines(result):
            self._writeln(self.row_formatter.format_row(row))


FormatterFactory.register("side-by-side", SideBySideFormatter)
