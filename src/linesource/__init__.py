from .binary_check import BinaryDetector, EncodingDetector, is_binary_file, get_file_encoding
from .reader import read_file_lines, split_lines
from .walker import DirectoryComparator, DirectoryWalker, FileEntry

__all__ = [
    'BinaryDetector', 'EncodingDetector', 'is_binary_file', 'get_file_encoding',
    'read_file_lines', 'split_lines',
    'DirectoryComparator', 'DirectoryWalker', 'FileEntry',
]
