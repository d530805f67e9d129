"""
Batch Unpacker
Extracts many .unitypackage files concurrently with progress tracking.
Each package gets its own extraction run; nothing is shared between them.
"""
import os
import time
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Dict, Optional, Callable
from ..config import config
from ..errors import InvalidInputError
from ..utils.logger import logger
from .unpacker import PackageUnpacker, output_root_for


class BatchUnpacker:
    def __init__(self, max_workers: int = None):
        self.max_workers = max_workers or config.max_workers or min(32, (os.cpu_count() or 4) * 2)

    def extract_directory(
        self,
        input_dir: str,
        output_dir: str,
        recursive: bool = False,
        on_progress: Optional[Callable] = None
    ) -> Dict:
        """
        Extract every package in a directory.

        Args:
            input_dir: directory containing .unitypackage files
            output_dir: each package is extracted into output_dir/<package name>/
            recursive: if True, walks subdirectories and mirrors them under output_dir
            on_progress: optional callback(completed, total, result)

        Returns:
            summary dict with results, stats, and failures
        """
        input_path = Path(input_dir)
        if not input_path.is_dir():
            raise InvalidInputError(f"Input directory not found: {input_dir}")

        extension = config.package_extension.lower()
        candidates = input_path.rglob('*') if recursive else input_path.glob('*')
        files = sorted(f for f in candidates if f.is_file() and f.name.lower().endswith(extension))

        if not files:
            logger.warning(f"No {config.package_extension} files found in {input_dir}")
            return self._empty_summary()

        jobs = []
        for f in files:
            if recursive:
                out_dir = Path(output_dir) / f.relative_to(input_path).parent
            else:
                out_dir = Path(output_dir)
            jobs.append((f, out_dir))

        logger.info(f"📦 Batch extracting {len(jobs)} packages with {self.max_workers} workers...")
        return self._run(jobs, on_progress)

    def extract_files(
        self,
        file_paths: List[str],
        output_dir: str,
        on_progress: Optional[Callable] = None
    ) -> Dict:
        """Extract a specific list of packages into output_dir."""
        jobs = [(Path(f), Path(output_dir)) for f in file_paths]
        if not jobs:
            return self._empty_summary()
        logger.info(f"📦 Batch extracting {len(jobs)} packages with {self.max_workers} workers...")
        return self._run(jobs, on_progress)

    def _run(self, jobs: List[tuple], on_progress: Optional[Callable]) -> Dict:
        start_time = time.time()
        results = []
        failures = []
        total = len(jobs)
        completed = 0

        # Two packages with the same name would extract into the same root
        seen = {}
        for inp, out_dir in jobs:
            root = output_root_for(str(inp), str(out_dir))
            key = root.lower()
            if key in seen:
                raise InvalidInputError(f"{inp} and {seen[key]} would both extract to {root}")
            seen[key] = inp

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_job = {
                executor.submit(self._extract_one, inp, out_dir): (inp, out_dir)
                for inp, out_dir in jobs
            }

            for future in as_completed(future_to_job):
                inp, out_dir = future_to_job[future]
                completed += 1

                try:
                    result = future.result()
                    results.append(result)

                    if on_progress:
                        on_progress(completed, total, result)

                    logger.info(f"   [{completed}/{total}] {inp.name} → {result['output_path']}")

                except Exception as e:
                    failure = {
                        'file': str(inp),
                        'error': str(e)
                    }
                    failures.append(failure)

                    if on_progress:
                        on_progress(completed, total, failure)

                    logger.error(f"   [{completed}/{total}] {inp.name} — {e}")

        elapsed = time.time() - start_time
        return self._build_summary(results, failures, elapsed)

    def _extract_one(self, input_path: Path, output_dir: Path) -> Dict:
        """Extract a single package — called from thread pool"""
        return PackageUnpacker().unpack(str(input_path), str(output_dir))

    def _build_summary(self, results: List[Dict], failures: List[Dict], elapsed: float) -> Dict:
        total = len(results) + len(failures)
        total_bytes = sum(r.get('bytes_written', 0) for r in results)

        logger.info(f"\n{'='*50}")
        logger.info(f"✨ Batch Extraction Complete!")
        logger.info(f"   Packages:  {len(results)} succeeded, {len(failures)} failed")
        logger.info(f"   Written:   {total_bytes/1024/1024:.2f} MB")
        logger.info(f"   Time:      {elapsed:.2f}s")
        logger.info(f"{'='*50}")

        return {
            'success': len(failures) == 0,
            'total': total,
            'succeeded': len(results),
            'failed': len(failures),
            'failures': failures,
            'results': results,
            'total_bytes': total_bytes,
            'processing_time': elapsed
        }

    def _empty_summary(self) -> Dict:
        return {
            'success': True,
            'total': 0,
            'succeeded': 0,
            'failed': 0,
            'failures': [],
            'results': [],
            'total_bytes': 0,
            'processing_time': 0
        }


__all__ = ["BatchUnpacker"]
