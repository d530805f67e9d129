"""
Checksum Utility
SHA-256 hashes for archive fingerprints and extracted assets.
"""
import hashlib
from typing import Union

def calculate_bytes_checksum(data: Union[bytes, str]) -> str:
    """
    Calculates the SHA-256 checksum of a byte string or text string.

    Args:
        data: The input data (bytes or string)

    Returns:
        str: The hexadecimal hash string
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.sha256(data).hexdigest()

def calculate_file_checksum(file_path: str, chunk_size: int = 65536) -> str:
    """
    Calculates the SHA-256 checksum of a file without loading it into RAM.
    """
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(chunk_size), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()

__all__ = ["calculate_bytes_checksum", "calculate_file_checksum"]
