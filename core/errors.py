# core/errors.py

class ReaderError(Exception):
    """Base class for comic reader errors"""


class IndexOutOfRange(ReaderError, IndexError):
    """Raised when an index falls outside [0, length) of the catalog"""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for catalog of length {length}")


class EmptyCatalog(ReaderError, LookupError):
    """Raised when a position is requested from a catalog with no images"""

    def __init__(self, message: str = "Catalog contains no images"):
        super().__init__(message)


class ManifestError(ReaderError, ValueError):
    """Raised when a manifest document cannot be turned into groups"""
