"""
GUID Entry Correlator
Pairs the 'asset' and 'pathname' records of each GUID folder into one file,
whichever of the two the archive stores first.

Per GUID the map holds one of three states:
    key missing       nothing seen yet
    None              asset staged at <root>/<GUID>, pathname still unknown
    'Assets/x.png'    final relative path known
"""
import os
import shutil
import unicodedata
from typing import BinaryIO, Dict, List, Optional, Set
from charset_normalizer import from_bytes
from ..errors import ExtractionConflictError, PackageFormatError
from ..utils.logger import logger
from .paths import DirectoryCache, as_root, safe_join


# Single-byte Western code pages written by pre-UTF-8 editors
LEGACY_CODE_PAGES = ['cp1252', 'iso8859_15', 'latin_1']


def _decode_legacy(line: bytes) -> Optional[str]:
    """Decode with the first legacy code page that reproduces the bytes exactly"""
    for match in from_bytes(line, cp_isolation=LEGACY_CODE_PAGES):
        text = str(match)
        if text.encode(match.encoding) != line:
            continue
        # C1 control characters mean the bytes were never text in this code page
        if any(unicodedata.category(ch) == 'Cc' for ch in text.rstrip('\r\n').rstrip('\x00')):
            continue
        logger.debug(f"   Pathname decoded as {match.encoding}: {text.strip()}")
        return text
    return None


def read_pathname(stream: Optional[BinaryIO], detect_encoding: bool = True) -> str:
    """First line of a pathname record, without the line feed and NUL trailer"""
    if stream is None:
        raise PackageFormatError()

    line = stream.readline()
    try:
        asset_path = line.decode('utf-8')
    except UnicodeDecodeError as e:
        asset_path = _decode_legacy(line) if detect_encoding else None
        if asset_path is None:
            raise PackageFormatError(f"Unreadable pathname record: {e}") from e

    asset_path = asset_path.rstrip('\r\n').rstrip('\x00')
    if not asset_path:
        raise PackageFormatError()
    if '\x00' in asset_path:
        raise PackageFormatError(f"Pathname record contains a NUL byte: {asset_path!r}")
    return asset_path


class EntryCorrelator:
    """Session state for one extraction run. Not thread-safe."""

    CHUNK_SIZE = 65536

    def __init__(self, output_root: str, chunk_size: int = None, detect_encoding: bool = True):
        self.output_root = as_root(output_root)
        self.chunk_size = chunk_size or self.CHUNK_SIZE
        self.detect_encoding = detect_encoding

        self._guid_to_path: Dict[str, Optional[str]] = {}
        self._assets_seen: Set[str] = set()
        self.directories = DirectoryCache()

        self.assets_written = 0
        self.bytes_written = 0

    # ── Records ────────────────────────────────────────────────────────────

    def add_asset(self, guid: str, stream: BinaryIO) -> str:
        """
        Write an 'asset' blob. Returns the path it was written to.

        Goes straight to its final location when the pathname came first,
        otherwise to the staging path <root>/<GUID>.
        """
        if guid in self._assets_seen:
            raise ExtractionConflictError(f"Duplicate asset record for {guid}")
        self._assets_seen.add(guid)

        asset_path = self._guid_to_path.get(guid)
        if asset_path is not None:
            output_path = safe_join(self.output_root, asset_path)
            self.directories.ensure_parent(output_path)
        else:
            self._guid_to_path[guid] = None
            output_path = safe_join(self.output_root, guid)

        self._write(stream, output_path)
        logger.debug(f"   {guid}/asset → {output_path}")
        return output_path

    def add_pathname(self, guid: str, stream: BinaryIO) -> str:
        """
        Record a 'pathname'. Moves the staged asset if it already arrived.

        The record holds the relative path on its first line, e.g.
        Assets/Footstep Sounds/Water Running 1_10.wav, then a line feed
        and a short trailer which is ignored.
        """
        asset_path = read_pathname(stream, self.detect_encoding)

        # Validate before anything touches the disk
        final_path = safe_join(self.output_root, asset_path)

        if guid in self._guid_to_path:
            if self._guid_to_path[guid] is not None:
                raise PackageFormatError(
                    f"Duplicate pathname record for {guid}; is this a valid Unity package file?"
                )
            self.directories.ensure_parent(final_path)
            self._move(safe_join(self.output_root, guid), final_path)
            logger.debug(f"   {guid} moved → {final_path}")

        self._guid_to_path[guid] = asset_path
        return final_path

    # ── Views ──────────────────────────────────────────────────────────────

    @property
    def resolved_paths(self) -> Dict[str, str]:
        """GUID → relative path for every GUID with a pathname"""
        return {g: p for g, p in self._guid_to_path.items() if p is not None}

    @property
    def unresolved_guids(self) -> List[str]:
        """GUIDs whose asset is still at the staging path"""
        return [g for g, p in self._guid_to_path.items() if p is None]

    def state(self, guid: str) -> str:
        """'unseen', 'staged' or 'resolved'"""
        if guid not in self._guid_to_path:
            return 'unseen'
        return 'staged' if self._guid_to_path[guid] is None else 'resolved'

    # ── Helpers ────────────────────────────────────────────────────────────

    def _write(self, stream: Optional[BinaryIO], output_path: str):
        """Copy stream into a new file — never overwrites"""
        if stream is None:
            raise PackageFormatError()
        try:
            with open(output_path, 'xb') as out_f:
                shutil.copyfileobj(stream, out_f, self.chunk_size)
                written = out_f.tell()
        except FileExistsError as e:
            raise ExtractionConflictError(f"The file '{output_path}' already exists.") from e

        self.assets_written += 1
        self.bytes_written += written

    @staticmethod
    def _move(source: str, destination: str):
        if os.path.lexists(destination):
            raise ExtractionConflictError(f"The file '{destination}' already exists.")
        shutil.move(source, destination)


__all__ = ["EntryCorrelator", "read_pathname"]
