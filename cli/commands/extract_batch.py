"""
Unity Package CLI - Batch Extract Command
Usage: python -m cli.commands.extract_batch input_dir/ -o output_dir/ [options]
"""
import argparse
import sys
from pathlib import Path
from core.config import config
from core.unpacker.batch_unpacker import BatchUnpacker
from core.utils.logger import logger, set_verbosity


def main(argv=None):
    parser = argparse.ArgumentParser(description="Batch extract Unity packages")
    parser.add_argument("input", help="Input directory containing .unitypackage files")
    parser.add_argument("-o", "--output", help="Output directory (default: current directory)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Recursively extract packages in subdirectories")
    parser.add_argument("-w", "--workers", type=int, default=None,
                        help="Number of parallel workers (default: auto)")
    parser.add_argument("-c", "--config", help="Path to a JSON config file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report failures")

    args = parser.parse_args(argv)
    set_verbosity(quiet=args.quiet)

    try:
        if args.config:
            config.load(args.config)

        input_dir = Path(args.input)
        output_dir = Path(args.output or config.output_dir)

        batch = BatchUnpacker(max_workers=args.workers)
        summary = batch.extract_directory(
            input_dir=str(input_dir),
            output_dir=str(output_dir),
            recursive=args.recursive
        )

    except KeyboardInterrupt:
        print("\nBatch operation cancelled.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"ERROR: {e}")
        sys.exit(1)

    if summary['failed'] > 0:
        # Each failure was already reported as it happened
        logger.error(f"ERROR: {summary['failed']} of {summary['total']} package(s) failed")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
