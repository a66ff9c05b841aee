"""
File name normalization for exported drawables.
"""

import re
from enum import Enum

from drawable_export.config import FALLBACK_NAME

SEPARATOR = "_"

_WHITESPACE_RUN = re.compile(r"\s+")
_NOT_RESOURCE_CHAR = re.compile(r"[^a-z0-9_]")
_SEPARATOR_RUN = re.compile(r"_{2,}")


class NamePolicy(str, Enum):
    """How aggressively layer names are cleaned up."""

    WHITESPACE = "whitespace"
    RESOURCE = "resource"

    @classmethod
    def get_default(cls) -> "NamePolicy":
        return cls.WHITESPACE


def normalize(raw_name, policy=NamePolicy.WHITESPACE):
    """
    Derive a file base name from a layer or user supplied name.

    Args:
        raw_name: Name as typed or as found on the layer
        policy: WHITESPACE lowercases and joins words with underscores;
            RESOURCE also turns anything outside [a-z0-9_] into underscores
            so the result is a legal Android resource name

    Returns:
        The normalized name, or FALLBACK_NAME when nothing usable is left
    """
    policy = NamePolicy(policy)
    name = _WHITESPACE_RUN.sub(SEPARATOR, str(raw_name).strip().lower())

    if policy is NamePolicy.RESOURCE:
        name = _NOT_RESOURCE_CHAR.sub(SEPARATOR, name)
        name = _SEPARATOR_RUN.sub(SEPARATOR, name).strip(SEPARATOR)
        if name[:1].isdigit():
            name = f"img{SEPARATOR}{name}"

    return name or FALLBACK_NAME
