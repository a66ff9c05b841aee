"""
Drawable Export - multi-density Android drawable generator.

Takes one source artwork (a single layer, or every top-level layer of a
document) at a known density and writes a trimmed PNG for each Android
density bucket into drawable-<density> folders.
"""

__version__ = "1.2.0"
