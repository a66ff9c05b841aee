"""
Command-line interface for Drawable Export.

Exports the active layer (or every top-level layer) of an image, a folder of
images or a PSD into drawable-<density> folders.
"""

import argparse
import logging
import sys

from drawable_export.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESIZE_METHOD,
    DEFAULT_SOURCE_DENSITY,
    DEFAULT_TARGET_TIERS,
    LEGACY_SOURCE_DENSITY,
    LEGACY_TARGET_TIERS,
)
from drawable_export.densities import DENSITY_TIERS
from drawable_export.document import open_document
from drawable_export.errors import DrawableExportError
from drawable_export.export.export_manager import export_drawables
from drawable_export.models import ExportJob
from drawable_export.naming import NamePolicy
from drawable_export.resize_methods import RESIZE_METHODS

logger = logging.getLogger("drawable_export.cli")

EXIT_OK = 0
EXIT_ITEM_FAILED = 1
EXIT_SETUP_FAILED = 2


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="drawable-export",
        description="Export a layer at every Android density as trimmed PNG drawables",
    )

    parser.add_argument("source", help="Image file, folder of images (one layer each) or PSD")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        help="Folder receiving the drawable-* folders (default: $DRAWABLE_EXPORT_OUTPUT)",
    )
    parser.add_argument("--name", default="", help="Base name for the files (default: layer name)")
    parser.add_argument("--layer", default=None, help="Layer to export instead of the active one")
    parser.add_argument(
        "--all-layers",
        action="store_true",
        help="Export every top-level layer, each under its own name",
    )
    parser.add_argument(
        "--density",
        type=str.lower,
        choices=list(DENSITY_TIERS),
        default=None,
        help=f"Density the source was drawn at (default: {DEFAULT_SOURCE_DENSITY})",
    )
    parser.add_argument(
        "--tiers",
        default=None,
        help=f"Comma separated densities to export (default: {','.join(DEFAULT_TARGET_TIERS)})",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Deprecated: mdpi source exported to ldpi, mdpi, hdpi and xhdpi",
    )
    parser.add_argument(
        "--resize-method",
        default=DEFAULT_RESIZE_METHOD,
        help=f"One of: {', '.join(m.name for m in RESIZE_METHODS.values())}",
    )
    parser.add_argument(
        "--no-scale-styles",
        dest="scale_styles",
        action="store_false",
        help="Do not scale layer styles with the image",
    )
    parser.add_argument("--trim", action="store_true", help="Trim transparent margins")
    parser.add_argument(
        "--name-policy",
        choices=[policy.value for policy in NamePolicy],
        default=NamePolicy.get_default().value,
        help="whitespace: lowercase and underscores; resource: also strip other punctuation",
    )
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Write export_metadata.json into the output folder",
    )
    parser.add_argument(
        "--list-layers",
        action="store_true",
        help="List the top-level layers of the source and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="info",
        help="Logging level",
    )
    return parser


def build_job(args):
    """Turn parsed arguments into an ExportJob."""
    source_density = args.density or DEFAULT_SOURCE_DENSITY
    tiers = args.tiers or ",".join(DEFAULT_TARGET_TIERS)

    if args.legacy:
        logger.warning("Using the deprecated legacy four density layout")
        source_density = args.density or LEGACY_SOURCE_DENSITY
        tiers = args.tiers or ",".join(LEGACY_TARGET_TIERS)

    return ExportJob(
        base_name=args.name,
        destination_root=args.output,
        source_density=source_density,
        target_tiers=tiers,
        resize_method=args.resize_method,
        scale_styles=args.scale_styles,
        trim=args.trim,
        name_policy=args.name_policy,
    )


def list_layers(source):
    document = open_document(source)
    print(f"{document.name}: {document.width}x{document.height}")
    for layer in document.layers:
        marker = "*" if layer is document.active_layer else " "
        hidden = "" if layer.visible else " (hidden)"
        print(f" {marker} {layer.name} [{layer.width}x{layer.height} at {layer.offset}]{hidden}")


def run(argv=None):
    """
    Run the exporter and return a process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    numeric_level = getattr(logging, args.log_level.upper(), None)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.list_layers:
            list_layers(args.source)
            return EXIT_OK

        if not args.output:
            parser.error("an output folder is required (-o/--output or $DRAWABLE_EXPORT_OUTPUT)")

        job = build_job(args)
        report = export_drawables(
            args.source,
            job,
            all_layers=args.all_layers,
            layer_name=args.layer,
            write_metadata=args.metadata,
        )
    except (DrawableExportError, ValueError) as e:
        logger.error(f"Export aborted: {e}")
        return EXIT_SETUP_FAILED

    for item in report.items:
        if item.error:
            print(f"FAILED  {item.layer_name}: {item.error_type}: {item.error}")
        else:
            print(f"OK      {item.layer_name} -> {len(item.artifacts)} file(s)")

    return EXIT_OK if report.succeeded else EXIT_ITEM_FAILED


def main():
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
