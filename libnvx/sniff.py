"""libnvx.sniff

Classify a file by its leading 4-byte tag. Only the tag is read; decoders
re-open the file and start from offset 0 themselves.
"""

from __future__ import annotations

import enum
import logging

from .binio import NVX1_MAGIC, NVX2_MAGIC, tag_matches
from .errors import InputNotFoundError

logger = logging.getLogger(__name__)


class NvxFormat(str, enum.Enum):
    NVX1 = "NVX1"
    NVX2 = "NVX2"
    UNKNOWN = "Unknown"


def classify_tag(raw: bytes) -> NvxFormat:
    if tag_matches(raw, NVX1_MAGIC):
        return NvxFormat.NVX1
    if tag_matches(raw, NVX2_MAGIC):
        return NvxFormat.NVX2
    return NvxFormat.UNKNOWN


def sniff_format(path: str) -> NvxFormat:
    try:
        with open(path, "rb") as f:
            raw = f.read(4)
    except OSError as e:
        raise InputNotFoundError(f"Cannot open {path}: {e}") from e

    if len(raw) < 4:
        raise InputNotFoundError(f"{path} is {len(raw)} bytes, too short to hold a format tag")

    fmt = classify_tag(raw)
    logger.debug("sniffed %s as %s (tag %r)", path, fmt.value, raw)
    return fmt
