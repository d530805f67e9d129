from .paths import safe_join, DirectoryCache
from .correlator import EntryCorrelator
from .unpacker import PackageUnpacker, extract
from .batch_unpacker import BatchUnpacker

__all__ = [
    "safe_join",
    "DirectoryCache",
    "EntryCorrelator",
    "PackageUnpacker",
    "extract",
    "BatchUnpacker"
]
