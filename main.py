#!/usr/bin/env python3
"""
Drawable Export - Android density drawable generator.

This is the main entry point for the Drawable Export command-line tool.
Run with --help for the available options.
"""

import os
import sys

from drawable_export.cli import run


def main():
    """Main entry point for the application."""
    # Add support for --silent command line option
    silent_mode = "--silent" in sys.argv
    if silent_mode:
        # Remove the argument so it doesn't interfere with argparse
        sys.argv.remove("--silent")
        # Redirect stdout to null in silent mode
        sys.stdout = open(os.devnull, "w")

    try:
        status = run()
    except KeyboardInterrupt:
        print("\nExiting Drawable Export...")
        status = 130
    finally:
        if silent_mode:
            sys.stdout.close()
            sys.stdout = sys.__stdout__

    sys.exit(status)


if __name__ == "__main__":
    main()
