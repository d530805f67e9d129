"""
Unity Package CLI - Inspect Command
Usage: python -m cli.commands.inspect package.unitypackage [-v]
"""
import argparse
import sys
from core.tools.inspector import Inspector
from core.utils.logger import logger


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Inspect a Unity package without extracting it"
    )
    parser.add_argument("input", help="Path to the .unitypackage file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="List every GUID with its asset path")

    args = parser.parse_args(argv)

    try:
        Inspector().inspect(args.input, verbose=args.verbose)
    except (ValueError, OSError) as e:
        logger.error(f"ERROR: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"ERROR: Inspection failed: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
