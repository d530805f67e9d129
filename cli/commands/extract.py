"""
Unity Package CLI - Extract Command
Usage: python -m cli.commands.extract input.unitypackage [output_dir]
"""
import argparse
import os
import sys
from pathlib import Path
from core.config import config
from core.unpacker.unpacker import PackageUnpacker
from core.utils.logger import logger, set_verbosity


def make_progress_bar(total_size: int, width: int = 50):
    """Returns an on_progress(fraction) callback drawing an in-place bar, or None"""
    if not config.progress_enabled or total_size < config.progress_min_size:
        return None

    state = {'filled': -1}

    def on_progress(fraction):
        percent = fraction * 100
        filled = int(fraction * width)
        if filled == state['filled'] and fraction < 1.0:
            return
        state['filled'] = filled
        bar = '█' * filled + '░' * (width - filled)
        sys.stdout.write(f'\r   [{bar}] {percent:.1f}%')
        sys.stdout.flush()

    return on_progress


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Extracts the contents of a .unitypackage file into a new directory."
    )
    parser.add_argument("input", help="The path to the .unitypackage file to extract.")
    parser.add_argument("output", nargs="?", default=None,
                        help="The directory to extract to. A new directory with the same name as "
                             "the input file (excluding the extension) will be created inside it "
                             "(default: current directory).")
    parser.add_argument("-c", "--config", help="Path to a JSON config file")
    parser.add_argument("-q", "--quiet", action="store_true", help="No progress bar or status lines")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every archive entry")

    args = parser.parse_args(argv)
    set_verbosity(verbose=args.verbose, quiet=args.quiet)

    try:
        if args.config:
            config.load(args.config)

        input_path = Path(args.input)
        out_dir = args.output or config.output_dir

        on_progress = None
        if not args.quiet and input_path.suffix.lower() == config.package_extension and input_path.is_file():
            on_progress = make_progress_bar(os.path.getsize(input_path), config.bar_width)

        try:
            result = PackageUnpacker().unpack(str(input_path), out_dir, on_progress=on_progress)
        finally:
            if on_progress:
                sys.stdout.write('\n')

        if not args.quiet:
            print(f"\n✅ Done. {result['assets']} asset(s) extracted to: {result['output_path']}")
            if result['unresolved']:
                print(f"   {len(result['unresolved'])} asset(s) had no pathname and kept their GUID name")

    except KeyboardInterrupt:
        print("\n❌ Operation cancelled by user.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"ERROR: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
