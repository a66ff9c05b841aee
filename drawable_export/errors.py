"""
Exception types raised by the export pipeline.
"""


class DrawableExportError(Exception):
    """Base class for every error the export pipeline reports."""


class InvalidDensityError(DrawableExportError):
    """Raised when a density tier name is not in the density table."""


class UnknownResizeMethodError(DrawableExportError):
    """Raised when a resize method name is not in the registry."""


class EmptyArtworkError(DrawableExportError):
    """Raised when trimming leaves no visible pixels to export."""


class DirectoryCreateError(DrawableExportError):
    """Raised when a destination folder cannot be created."""


class EncodeWriteError(DrawableExportError):
    """Raised when encoding, writing or renaming an output file fails."""


class NoSelectionError(DrawableExportError):
    """Raised when single-layer mode runs without an active layer."""


class DocumentLoadError(DrawableExportError):
    """Raised when a source document cannot be opened."""


class ExportSetupError(DrawableExportError):
    """Raised for run-level problems detected before any layer is exported."""
