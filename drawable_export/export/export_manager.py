"""
Export manager for multi-density drawables.

This module isolates one artwork item into a disposable working copy, trims
it, snaps its canvas to even dimensions and writes one PNG per density tier.
ExportManager runs that unit for the active layer or for every top-level
layer of a document.
"""

import json
import logging
import os
from datetime import datetime

from drawable_export.config import METADATA_FILENAME
from drawable_export.densities import width_for_tier
from drawable_export.document import Document, Session
from drawable_export.errors import DrawableExportError, ExportSetupError, NoSelectionError
from drawable_export.export.file_writer import ensure_directory, safe_file_name, write_png
from drawable_export.image_ops import new_canvas, resize_to_width, snap_to_even, trim_transparent
from drawable_export.models import ExportReport, ItemResult, ItemStatus, OutputArtifact
from drawable_export.naming import normalize

logger = logging.getLogger("drawable_export.export.export_manager")


class WorkingCopy:
    """
    Disposable single-layer document used for the destructive export steps.

    The copy is registered with the session while it is open and removed
    again by dispose(), which the context manager always calls.
    """

    def __init__(self, session, source, name):
        self.session = session
        self.document = Document(name, source.width, source.height, source.resolution)
        self.canvas = new_canvas(source.width, source.height)
        session.add_document(self.document)

    @property
    def size(self):
        return self.canvas.size

    def dispose(self):
        self.session.close_document(self.document)
        self.canvas = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


def output_name(layer, job):
    """File name, without extension, a layer is written under."""
    return safe_file_name(normalize(job.base_name or layer.name, job.name_policy))


def export_item(session, document, layer, job):
    """
    Export one layer at every target density of a job.

    Args:
        session: Session the working copy is opened in
        document: Document the layer belongs to; it is never modified
        layer: Layer to export
        job: ExportJob with the base name and export settings

    Returns:
        List of OutputArtifact, one per target tier

    Raises:
        EmptyArtworkError: If trimming finds no visible pixels
        DirectoryCreateError, EncodeWriteError: If an output cannot be written
    """
    file_name = output_name(layer, job)
    artifacts = []

    with WorkingCopy(session, document, job.base_name or layer.name) as working:
        working.canvas = document.duplicate_layer(layer, working.canvas)

        if job.trim:
            working.canvas = trim_transparent(working.canvas)

        # Even dimensions so the half-size tiers land on whole pixels
        working.canvas = snap_to_even(working.canvas)
        source_width = working.canvas.width
        logger.debug(f"'{layer.name}' working canvas is {working.size[0]}x{working.size[1]}")

        for tier in job.target_tiers:
            target_width = width_for_tier(source_width, job.source_density, tier)
            resized = resize_to_width(
                working.canvas,
                target_width,
                method=job.resize_method,
                scale_styles=job.scale_styles,
            )
            folder = os.path.join(job.destination_root, tier.folder_name)
            path = write_png(resized, folder, file_name)
            artifacts.append(
                OutputArtifact(tier=tier.name, path=path, width=resized.width, height=resized.height)
            )
            logger.info(f"Exported {tier.folder_name}/{file_name}.png ({resized.width}x{resized.height})")

    return artifacts


class ExportManager:
    """
    Runs the export unit over the layers of a document.
    """

    def __init__(self, session=None, write_metadata=False, progress_callback=None):
        """
        Initialize the export manager.

        Args:
            session: Session holding open documents and unit preferences
            write_metadata: Write export_metadata.json into the destination root
            progress_callback: Function to report progress (percentage, layer name)
        """
        self.session = session or Session()
        self.write_metadata = write_metadata
        self.progress_callback = progress_callback

    def export_one(self, document, job, layer=None):
        """
        Export a single layer, by default the document's active layer.

        The job's base name is used for the files; an empty base name falls
        back to the layer's own name.

        Raises:
            ExportSetupError: If there is no document or destination folder
            NoSelectionError: If no layer is given and none is active
        """
        self._check_setup(document, job)
        layer = layer or document.active_layer
        if layer is None:
            raise NoSelectionError(f"No active layer selected in {document.name}")

        return self._run(document, [(layer, job.for_item(job.base_name or layer.name))], job)

    def export_all(self, document, job):
        """
        Export every top-level layer, each under its own layer name.

        A failing layer is recorded in the report and the remaining layers
        are still exported.
        """
        self._check_setup(document, job)
        if not document.layers:
            raise ExportSetupError(f"Document {document.name} has no layers")

        return self._run(document, [(layer, job.for_item(layer.name)) for layer in document.layers], job)

    def _check_setup(self, document, job):
        if document is None:
            raise ExportSetupError("No document to export from")
        if not job.destination_root:
            raise ExportSetupError("No destination folder chosen")
        ensure_directory(job.destination_root)

    def _report_progress(self, percent, step):
        if self.progress_callback:
            self.progress_callback(percent, step)

    def _run(self, document, items, job):
        report = ExportReport(destination_root=os.path.abspath(job.destination_root))
        logger.info(
            f"Exporting {len(items)} item(s) from {document.name} at {job.source_density.name} "
            f"to {', '.join(t.name for t in job.target_tiers)}"
        )

        with self.session.pixel_units():
            for index, (layer, item_job) in enumerate(items):
                self._report_progress(int(index * 100 / len(items)), layer.name)
                report.items.append(self._export_isolated(document, layer, item_job))
            self._report_progress(100, "Export complete")

        report.finished_at = datetime.now()
        if report.failures:
            logger.warning(f"{len(report.failures)} of {len(items)} item(s) failed to export")

        if self.write_metadata:
            self._save_metadata(report)
        return report

    def _export_isolated(self, document, layer, job):
        file_name = None
        try:
            file_name = output_name(layer, job)
            artifacts = export_item(self.session, document, layer, job)
        except (DrawableExportError, OSError) as e:
            logger.warning(f"Failed to export '{layer.name}': {e}")
            return ItemResult(
                layer_name=layer.name,
                base_name=job.base_name,
                file_name=file_name,
                status=ItemStatus.FAILED,
                error=str(e),
                error_type=type(e).__name__,
            )

        return ItemResult(
            layer_name=layer.name,
            base_name=job.base_name,
            file_name=file_name,
            status=ItemStatus.EXPORTED,
            artifacts=artifacts,
        )

    def _save_metadata(self, report):
        metadata_path = os.path.join(report.destination_root, METADATA_FILENAME)
        with open(metadata_path, "w") as f:
            json.dump(report.model_dump(mode="json"), f, indent=2)
        logger.info(f"Saved export metadata to {metadata_path}")
        return metadata_path


def export_drawables(
    source_path,
    job,
    all_layers=False,
    layer_name=None,
    write_metadata=False,
    session=None,
):
    """
    Convenience function for exporting drawables from a file or folder.

    Args:
        source_path: Image, directory of images or PSD to export from
        job: ExportJob with the export settings
        all_layers: Export every top-level layer instead of the active one
        layer_name: Layer to make active before a single-layer export
        write_metadata: Write export_metadata.json next to the drawable folders
        session: Optional Session to open the document in

    Returns:
        ExportReport
    """
    manager = ExportManager(session=session, write_metadata=write_metadata)
    document = manager.session.open(source_path, active_layer_name=layer_name)
    try:
        if all_layers:
            return manager.export_all(document, job)
        return manager.export_one(document, job)
    finally:
        manager.session.close_document(document)
