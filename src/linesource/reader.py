import logging
import os
import re
from typing import List, Optional

from .binary_check import is_binary_file, get_file_encoding

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


def split_lines(text: str) -> List[str]:
    """Split on ``\\r\\n``, ``\\r`` or ``\\n``; a final line break does not add an empty line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == '':
        lines.pop()
    return lines


def read_file_lines(filepath: str, encoding: Optional[str] = None) -> List[str]:
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")
    if is_binary_file(filepath):
        raise ValueError(f"Cannot read binary file: {filepath}")
    enc = encoding or get_file_encoding(filepath)
    with open(filepath, 'r', encoding=enc, errors='replace', newline='') as f:
        content = f.read()
    lines = split_lines(content)
    logger.debug("read %s: %d lines (%s)", filepath, len(lines), enc)
    return lines
