from typing import List, NamedTuple, Sequence

from .models import ComparisonOptions


class NormalizedLines(NamedTuple):
    text: List[str]
    origin: List[int]

    @property
    def is_identity(self) -> bool:
        return len(self.origin) == 0 or self.origin[-1] == len(self.origin) - 1


def _is_blank(line: str) -> bool:
    return not line.strip()


def normalize_line(line: str, options: ComparisonOptions) -> str:
    if options.ignore_whitespace:
        line = line.strip()
    if options.ignore_case:
        line = line.lower()
    return line


def normalize(lines: Sequence[str], options: ComparisonOptions) -> List[str]:
    return normalize_with_index(lines, options).text


def normalize_with_index(lines: Sequence[str], options: ComparisonOptions) -> NormalizedLines:
    """Comparison view of ``lines`` plus the source index of every line kept.

    Only ``ignore_blank_lines`` drops lines, so ``origin`` is ``0..n-1``
    unless that option is set.
    """
    text: List[str] = []
    origin: List[int] = []
    for index, line in enumerate(lines):
        if options.ignore_blank_lines and _is_blank(line):
            continue
        text.append(normalize_line(line, options))
        origin.append(index)
    return NormalizedLines(text, origin)
