"""
Package Inspector
Peek inside a .unitypackage without writing anything to disk.
"""
import tarfile
from pathlib import Path
from typing import Dict, Optional
from ..config import config
from ..errors import InvalidInputError, PackageFormatError
from ..utils.checksum import calculate_file_checksum
from ..utils.logger import logger
from ..unpacker.correlator import read_pathname
from ..unpacker.unpacker import ASSET, PATHNAME, split_entry_name


class Inspector:

    def inspect(self, package_path: str, verbose: bool = False) -> dict:
        """
        Read the GUID folders of a package and report what extraction would produce.
        """
        if not str(package_path).lower().endswith(config.package_extension):
            raise InvalidInputError(f"The input file must end with {config.package_extension}")

        path = Path(package_path)
        if not path.exists():
            raise FileNotFoundError(f"Package not found: {package_path}")

        guid_to_path: Dict[str, Optional[str]] = {}
        asset_sizes: Dict[str, int] = {}
        skipped = 0

        with tarfile.open(path, mode='r|gz') as tar:
            for member in tar:
                if not member.isreg():
                    continue

                split = split_entry_name(member.name)
                if split is None:
                    skipped += 1
                    continue

                guid, leaf = split
                if leaf == ASSET:
                    asset_sizes[guid] = member.size
                    guid_to_path.setdefault(guid, None)
                elif leaf == PATHNAME:
                    if guid_to_path.get(guid) is not None:
                        raise PackageFormatError(f"Duplicate pathname record for {guid}")
                    stream = tar.extractfile(member)
                    with stream:
                        guid_to_path[guid] = read_pathname(stream, config.encoding_detection)
                else:
                    skipped += 1

        with_asset = [g for g in guid_to_path if g in asset_sizes]
        info = {
            'archive_path': str(path),
            'archive_size': path.stat().st_size,
            'checksum': calculate_file_checksum(str(path), config.chunk_size),
            'guids': len(guid_to_path),
            'assets': len(asset_sizes),
            'resolved': sum(1 for g in with_asset if guid_to_path[g] is not None),
            'unresolved': sorted(g for g in with_asset if guid_to_path[g] is None),
            'pathname_only': sorted(g for g in guid_to_path if g not in asset_sizes),
            'asset_bytes': sum(asset_sizes.values()),
            'skipped_entries': skipped,
            'entries': {g: guid_to_path[g] for g in sorted(guid_to_path)},
        }

        self._print(info, verbose)
        return info

    def _print(self, info: dict, verbose: bool):
        def fmt_size(b):
            if not b:
                return '0 KB'
            if b >= 1024 * 1024:
                return f"{b/1024/1024:.2f} MB"
            return f"{b/1024:.1f} KB"

        print(f"\n{'='*50}")
        print(f"  Unity Package Inspection")
        print(f"{'='*50}")
        print(f"  File:        {info['archive_path']}")
        print(f"  Size:        {fmt_size(info['archive_size'])}")
        print(f"  SHA-256:     {info['checksum']}")
        print()
        print(f"  GUIDs:       {info['guids']}")
        print(f"  Assets:      {info['assets']} ({fmt_size(info['asset_bytes'])})")
        print(f"  With path:   {info['resolved']}")
        print(f"  No path:     {len(info['unresolved'])}")
        if info['pathname_only']:
            print(f"  Folders:     {len(info['pathname_only'])} (pathname only)")
        print(f"{'='*50}\n")

        if verbose:
            for guid, asset_path in info['entries'].items():
                print(f"  {guid}  {asset_path or '<no pathname>'}")
            print()

        logger.debug(f"Inspected {info['archive_path']}: {info['guids']} GUIDs")


__all__ = ["Inspector"]
