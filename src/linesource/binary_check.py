import os
from typing import Optional


BINARY_SIGNATURES = [
    b'\x89PNG\r\n\x1a\n',
    b'\xff\xd8\xff',
    b'GIF87a',
    b'GIF89a',
    b'PK\x03\x04',
    b'PK\x05\x06',
    b'%PDF',
    b'\x7fELF',
    b'\x1f\x8b',
    b'BZh',
    b'\xfd7zXZ\x00',
    b'Rar!\x1a\x07',
    b'\xca\xfe\xba\xbe',
    b'\xce\xfa\xed\xfe',
    b'\xcf\xfa\xed\xfe',
]


BINARY_EXTENSIONS = {
    '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.ico', '.webp', '.tiff', '.tif',
    '.pdf', '.doc', '.docx', '.xls', '.xlsx', '.ppt', '.pptx',
    '.zip', '.rar', '.7z', '.tar', '.gz', '.bz2', '.xz',
    '.exe', '.dll', '.so', '.dylib', '.bin',
    '.mp3', '.mp4', '.avi', '.mkv', '.mov', '.wav', '.ogg',
    '.ttf', '.otf', '.woff', '.woff2',
    '.pyc', '.class', '.o', '.obj',
    '.db', '.sqlite', '.sqlite3',
}


CHECK_SIZE = 8192
NON_TEXT_THRESHOLD = 0.30
_TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))


class BinaryDetector:
    """Decides whether a file holds text the diff engine can compare.

    Checks run cheapest first: extension, magic signature, then the first
    ``CHECK_SIZE`` bytes (NUL bytes or too many control characters).
    """

    def __init__(self, check_size: int = CHECK_SIZE, threshold: float = NON_TEXT_THRESHOLD):
        self.check_size = check_size
        self.threshold = threshold

    def is_binary_by_extension(self, filepath: str) -> bool:
        return os.path.splitext(filepath)[1].lower() in BINARY_EXTENSIONS

    def is_binary_by_signature(self, data: bytes) -> bool:
        return any(data.startswith(sig) for sig in BINARY_SIGNATURES)

    def is_binary_by_content(self, data: bytes) -> bool:
        if not data:
            return False
        if EncodingDetector.detect_bom(data) in ('utf-16', 'utf-32'):
            return False
        if b'\x00' in data:
            return True
        try:
            data.decode('utf-8')
            return False
        except UnicodeDecodeError:
            pass
        non_text = len(data.translate(None, _TEXT_BYTES))
        return non_text / len(data) > self.threshold

    def check_file(self, filepath: str) -> bool:
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")
        if not os.path.isfile(filepath):
            raise ValueError(f"Not a file: {filepath}")
        if os.path.getsize(filepath) == 0:
            return False
        if self.is_binary_by_extension(filepath):
            return True
        with open(filepath, 'rb') as f:
            head = f.read(self.check_size)
        return self.is_binary_by_signature(head) or self.is_binary_by_content(head)


def is_binary_file(filepath: str) -> bool:
    return BinaryDetector().check_file(filepath)


class EncodingDetector:
    ENCODINGS = ['utf-8', 'cp1252', 'latin-1']

    BOM_ENCODINGS = [
        (b'\xff\xfe\x00\x00', 'utf-32'),
        (b'\x00\x00\xfe\xff', 'utf-32'),
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    ]

    @classmethod
    def detect_bom(cls, data: bytes) -> Optional[str]:
        for bom, encoding in cls.BOM_ENCODINGS:
            if data.startswith(bom):
                return encoding
        return None

    def detect_from_content(self, data: bytes) -> str:
        bom_encoding = self.detect_bom(data)
        if bom_encoding:
            return bom_encoding
        for encoding in self.ENCODINGS:
            try:
                data.decode(encoding)
                return encoding
            except UnicodeDecodeError:
                continue
        return 'latin-1'

    def detect_encoding(self, filepath: str) -> str:
        with open(filepath, 'rb') as f:
            return self.detect_from_content(f.read())


def get_file_encoding(filepath: str) -> str:
    return EncodingDetector().detect_encoding(filepath)
