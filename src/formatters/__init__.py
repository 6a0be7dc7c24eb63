from formatters.base import (
    BaseFormatter, SimpleFormatter, FormatterConfig, FormatterFactory,
    ColorScheme, OutputWriter, OutputTarget, DiffLine, DiffHunk, HunkGenerator, flatten
)
from formatters.unified import UnifiedFormatter, NormalDiffFormatter
from formatters.side_by_side import (
    SideBySideFormatter, SideBySideRowFormatter, SideBySideHeader, ColumnConfig,
    TextTruncator, LineNumberFormatter, GutterFormatter
)
from formatters.html import HTMLFormatter, JSONFormatter
from formatters.three_way import ThreeWayFormatter


__all__ = [
    "BaseFormatter", "SimpleFormatter", "FormatterConfig", "FormatterFactory",
    "ColorScheme", "OutputWriter", "OutputTarget", "DiffLine", "DiffHunk", "HunkGenerator",
    "flatten", "UnifiedFormatter", "NormalDiffFormatter",
    "SideBySideFormatter", "SideBySideRowFormatter", "SideBySideHeader", "ColumnConfig",
    "TextTruncator", "LineNumberFormatter", "GutterFormatter",
    "HTMLFormatter", "JSONFormatter", "ThreeWayFormatter"
]


def create_formatter(name: str, config: FormatterConfig = None) -> BaseFormatter:
    return FormatterFactory.create(name, config)


def get_available_formatters():
    return FormatterFactory.available()


def format_diff(
    result,
    file1: str,
    file2: str,
    formatter_name: str = "unified",
    config: FormatterConfig = None
) -> str:
    formatter = create_formatter(formatter_name, config)
    return formatter.format(result, file1, file2)
