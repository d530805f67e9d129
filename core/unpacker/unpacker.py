"""
Unity Package Unpacker
Streams a .unitypackage (gzip-compressed tar) and rebuilds the project's
asset tree under <output_dir>/<package name>/.
"""
import os
import time
import tarfile
from typing import Callable, Optional, Tuple
from ..config import config
from ..errors import InvalidInputError, PackageFormatError
from ..utils.logger import logger
from .correlator import EntryCorrelator
from .paths import as_root

ASSET = 'asset'
PATHNAME = 'pathname'


def split_entry_name(name: str) -> Optional[Tuple[str, str]]:
    """
    Split '<GUID>/<leaf>' into (guid, leaf).

    Returns None for hidden root-level package files such as '.icon.png'.
    Raises PackageFormatError for any other layout.
    """
    if name.startswith('./'):
        name = name[2:]

    if '/' not in name:
        if name.startswith('.'):
            return None
        raise PackageFormatError(f"Unexpected archive entry '{name}'; is this a valid Unity package file?")

    parts = name.split('/')
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise PackageFormatError(f"Unexpected archive entry '{name}'; is this a valid Unity package file?")
    return parts[0], parts[1]


def output_root_for(package_path: str, output_dir: str, extension: str = None) -> str:
    """<output_dir>/<package name without extension>/ as an absolute path"""
    extension = (extension or config.package_extension).lower()
    name = os.path.basename(package_path)
    if name.lower().endswith(extension):
        name = name[:len(name) - len(extension)]
    # A bare ".unitypackage" has an empty name and extracts into output_dir itself
    return as_root(os.path.join(os.path.abspath(output_dir), name))


class PackageUnpacker:

    def __init__(self, chunk_size: int = None, extension: str = None, detect_encoding: bool = None):
        self.chunk_size = chunk_size or config.chunk_size
        self.extension = (extension or config.package_extension).lower()
        self.detect_encoding = config.encoding_detection if detect_encoding is None else detect_encoding

    def unpack(
        self,
        package_path: str,
        output_dir: str,
        on_progress: Optional[Callable[[float], None]] = None
    ) -> dict:
        """
        Extract one package.

        Args:
            package_path: path to the .unitypackage file
            output_dir: a folder named after the package is created inside it
            on_progress: optional callback(fraction), called after every entry

        Returns:
            summary dict with the output path and asset counts
        """
        if not str(package_path).lower().endswith(self.extension):
            raise InvalidInputError(f"The input file must end with {self.extension}")

        start_time = time.time()
        output_root = output_root_for(package_path, output_dir, self.extension)

        try:
            if not os.path.isdir(output_root):
                os.makedirs(output_root)

            logger.info(f"📦 Extracting '{package_path}' to '{output_root}'")

            correlator = EntryCorrelator(
                output_root,
                chunk_size=self.chunk_size,
                detect_encoding=self.detect_encoding
            )
            entries = 0

            with open(package_path, 'rb') as f:
                total = os.fstat(f.fileno()).st_size
                last = 0.0

                with tarfile.open(fileobj=f, mode='r|gz') as tar:
                    for member in tar:
                        if member.isreg():
                            self._process_entry(tar, member, correlator)
                            entries += 1

                        if on_progress:
                            # Compressed position is only a rough proxy for work done
                            fraction = min(1.0, f.tell() / total)
                            last = max(last, fraction)
                            on_progress(last)

            unresolved = correlator.unresolved_guids
            if unresolved:
                logger.warning(
                    f"⚠️  {len(unresolved)} asset(s) had no pathname and were left as <GUID> files"
                )

            logger.info(f"✅ Extracted {correlator.assets_written} asset(s) to {output_root}")

            return {
                'success': True,
                'input_file': str(package_path),
                'output_path': output_root,
                'entries': entries,
                'assets': correlator.assets_written,
                'resolved': correlator.resolved_paths,
                'unresolved': unresolved,
                'bytes_written': correlator.bytes_written,
                'time': time.time() - start_time
            }

        except Exception as e:
            # Reporting is left to the caller so each failure is shown once
            logger.debug(f"Extraction of {package_path} failed: {e}", exc_info=True)
            raise

    def _process_entry(self, tar: tarfile.TarFile, member: tarfile.TarInfo, correlator: EntryCorrelator):
        split = split_entry_name(member.name)
        if split is None:
            logger.debug(f"   Skipping package file {member.name}")
            return

        guid, leaf = split
        if leaf not in (ASSET, PATHNAME):
            logger.debug(f"   Skipping {member.name}")
            return

        stream = tar.extractfile(member)
        if stream is None:
            raise PackageFormatError()

        with stream:
            if leaf == ASSET:
                correlator.add_asset(guid, stream)
            else:
                correlator.add_pathname(guid, stream)


def extract(
    input_path: str,
    output_dir: str = '.',
    on_progress: Optional[Callable[[float], None]] = None
) -> dict:
    """Extract input_path into <output_dir>/<input name>/ with a fresh unpacker"""
    return PackageUnpacker().unpack(input_path, output_dir, on_progress=on_progress)


__all__ = ["PackageUnpacker", "extract", "split_entry_name", "output_root_for"]
