"""
Export functionality for drawables.

This module provides the per-artwork export unit, the multi-item driver that
runs it over one or all layers of a document, and the PNG file writer.
"""
