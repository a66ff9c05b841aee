"""
PNG file writer.

Writes 32-bit RGBA PNGs into density folders, creating the folders on demand.
Long file names go through a temporary file that is then renamed into place.
"""

import logging
import os
import shutil
import tempfile

from drawable_export.config import LONG_NAME_THRESHOLD, STAGING_PREFIX, TEMP_FILENAME
from drawable_export.errors import DirectoryCreateError, EncodeWriteError

logger = logging.getLogger("drawable_export.export.file_writer")


def ensure_directory(folder):
    """
    Create a folder and any missing parents. Safe to call repeatedly.

    Raises:
        DirectoryCreateError: If the folder cannot be created
    """
    try:
        os.makedirs(folder, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(f"Could not create folder {folder}: {e}") from e


def encode_png(image, path):
    """
    Save an image as a lossless, non-indexed RGBA PNG.

    Raises:
        EncodeWriteError: If the image cannot be encoded or written
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    try:
        image.save(path, format="PNG", optimize=False, compress_level=9)
    except (OSError, ValueError) as e:
        raise EncodeWriteError(f"Could not write {path}: {e}") from e


def safe_file_name(file_name):
    """
    Make a base name safe to use as a single file inside a folder.

    Path separators become underscores so a name can never point into another
    folder.

    Raises:
        EncodeWriteError: If nothing but a relative folder reference is left
    """
    name = str(file_name)
    for separator in {"/", "\\", os.sep, os.altsep} - {None}:
        name = name.replace(separator, "_")
    if name in ("", os.curdir, os.pardir):
        raise EncodeWriteError(f"Not a usable file name: {file_name!r}")
    return name


def write_png(image, destination_folder, file_name):
    """
    Write an image to <destination_folder>/<file_name>.png.

    An existing file at that path is overwritten. Names longer than
    LONG_NAME_THRESHOLD characters are first written as TEMP_FILENAME in a
    private staging folder next to the output and then renamed, so the final file
    always carries the full name.

    Args:
        image: PIL Image to write
        destination_folder: Folder to write into, created if missing
        file_name: File name without the .png extension; path separators are
            replaced with underscores

    Returns:
        Absolute path of the written file

    Raises:
        EncodeWriteError: If the name is unusable or the file cannot be written
    """
    ensure_directory(destination_folder)
    file_name = safe_file_name(file_name)
    folder = os.path.abspath(destination_folder)
    output_path = os.path.join(folder, f"{file_name}.png")
    if os.path.dirname(os.path.normpath(output_path)) != folder:
        raise EncodeWriteError(f"{file_name!r} does not resolve to a file inside {folder}")

    if len(file_name) <= LONG_NAME_THRESHOLD:
        encode_png(image, output_path)
        logger.debug(f"Wrote {output_path}")
        return output_path

    try:
        staging_dir = tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=folder)
    except OSError as e:
        raise EncodeWriteError(f"Could not create a staging folder in {folder}: {e}") from e

    temp_path = os.path.join(staging_dir, TEMP_FILENAME)
    try:
        encode_png(image, temp_path)
        try:
            os.replace(temp_path, output_path)
        except OSError as e:
            raise EncodeWriteError(f"Could not rename {temp_path} to {output_path}: {e}") from e
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

    logger.debug(f"Wrote {output_path} via {TEMP_FILENAME}")
    return output_path
