import fnmatch
import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from diffcore import ComparisonOptions, DiffEngine
from .binary_check import is_binary_file
from .reader import read_file_lines

logger = logging.getLogger(__name__)


@dataclass
class FileEntry:
    path: str
    relative_path: str
    size: int

    @classmethod
    def from_path(cls, path: str, base: str) -> 'FileEntry':
        return cls(path=path, relative_path=os.path.relpath(path, base),
                   size=os.path.getsize(path))


DEFAULT_IGNORE = ['.git', '__pycache__', '*.pyc', '.pytest_cache', '.venv', 'venv',
                  'node_modules', '.idea', '.vscode', '.DS_Store']


class DirectoryWalker:
    def __init__(self, root: str, extra_ignore_patterns: Optional[List[str]] = None,
                 max_depth: Optional[int] = None, include_hidden: bool = False):
        self.root = os.path.abspath(root)
        self.max_depth = max_depth
        self.include_hidden = include_hidden
        self.ignore = DEFAULT_IGNORE + (extra_ignore_patterns or [])

    def _should_ignore(self, path: str) -> bool:
        name = os.path.basename(path)
        rel = os.path.relpath(path, self.root)
        if name.startswith('.') and not self.include_hidden:
            return True
        return any(fnmatch.fnmatch(name, pat) or fnmatch.fnmatch(rel, pat) for pat in self.ignore)

    def walk_entries(self) -> Iterator[FileEntry]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel = os.path.relpath(dirpath, self.root)
            if self.max_depth is not None:
                depth = 0 if rel == '.' else rel.count(os.sep) + 1
                if depth > self.max_depth:
                    dirnames.clear()
                    continue
            dirnames[:] = sorted(d for d in dirnames if not self._should_ignore(os.path.join(dirpath, d)))
            for fn in sorted(filenames):
                fp = os.path.join(dirpath, fn)
                if not self._should_ignore(fp):
                    yield FileEntry.from_path(fp, self.root)

    def relative_paths(self) -> List[str]:
        return [entry.relative_path for entry in self.walk_entries()]


class DirectoryComparator:
    """Compares two trees file by file.

    Common files that are both text are diffed with ``options``, so files
    that differ only in ignored ways count as identical. Binary files are
    compared byte for byte.
    """

    def __init__(self, dir1: str, dir2: str, options: Optional[ComparisonOptions] = None, **walker_kw):
        self.dir1, self.dir2 = os.path.abspath(dir1), os.path.abspath(dir2)
        self.engine = DiffEngine(options)
        self.walker_kw = walker_kw

    def _files_differ(self, rel: str) -> bool:
        path1, path2 = os.path.join(self.dir1, rel), os.path.join(self.dir2, rel)
        if is_binary_file(path1) or is_binary_file(path2):
            with open(path1, 'rb') as f1, open(path2, 'rb') as f2:
                return f1.read() != f2.read()
        result = self.engine.diff(read_file_lines(path1), read_file_lines(path2))
        return result.has_changes

    def compare(self) -> Dict[str, List[str]]:
        f1 = set(DirectoryWalker(self.dir1, **self.walker_kw).relative_paths())
        f2 = set(DirectoryWalker(self.dir2, **self.walker_kw).relative_paths())
        modified, identical = [], []
        for rel in sorted(f1 & f2):
            (modified if self._files_differ(rel) else identical).append(rel)
        logger.debug("compared %s and %s: %d common, %d modified",
                     self.dir1, self.dir2, len(f1 & f2), len(modified))
        return {'only_in_first': sorted(f1 - f2), 'only_in_second': sorted(f2 - f1),
                'modified': modified, 'identical': identical}
