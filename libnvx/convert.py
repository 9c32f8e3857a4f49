"""libnvx.convert

Single conversion entry point: sniff -> decode -> write.

``convert_nvx`` never raises for the failures listed in ``libnvx.errors``; it
returns a ``ConversionResult`` with ``success=False`` and a message instead.
If the failure happens while writing, a truncated output file may be left
behind.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .errors import InputNotFoundError, NvxError, NvxFormatError, UnsupportedFormatError
from .model import Mesh
from .nvx1 import read_nvx1
from .nvx2 import read_nvx2
from .objwriter import write_obj
from .sniff import NvxFormat, sniff_format

logger = logging.getLogger(__name__)

OBJ_EXTENSION = ".obj"

DECODERS: Dict[NvxFormat, Callable[[str], Mesh]] = {
    NvxFormat.NVX1: read_nvx1,
    NvxFormat.NVX2: read_nvx2,
}


@dataclass
class ConversionResult:
    success: bool
    input_path: str
    output_path: str
    vertex_count: int = 0
    triangle_count: int = 0
    format_name: str = NvxFormat.UNKNOWN.value
    duration: float = 0.0
    error: Optional[str] = None


def default_output_path(input_path: str) -> str:
    return os.path.splitext(input_path)[0] + OBJ_EXTENSION


def _sniff_input(input_path: str) -> NvxFormat:
    if not os.path.isfile(input_path):
        raise InputNotFoundError(f"Input file not found: {input_path}")
    return sniff_format(input_path)


def _decode(fmt: NvxFormat, input_path: str) -> Mesh:
    if fmt is NvxFormat.UNKNOWN:
        raise NvxFormatError(f"Unrecognised file type for {input_path}")

    decoder = DECODERS.get(fmt)
    if decoder is None:
        raise UnsupportedFormatError(f"No decoder registered for {fmt.value}")
    return decoder(input_path)


def load_mesh(input_path: str) -> Tuple[NvxFormat, Mesh]:
    fmt = _sniff_input(input_path)
    return fmt, _decode(fmt, input_path)


def convert_nvx(input_path: str, output_path: Optional[str] = None) -> ConversionResult:
    out_path = output_path or default_output_path(input_path)
    result = ConversionResult(success=False, input_path=input_path, output_path=out_path)
    t0 = time.perf_counter()

    logger.info("Converting %s to %s", input_path, out_path)
    try:
        fmt = _sniff_input(input_path)
        result.format_name = fmt.value
        logger.info("Detected file type: %s", fmt.value)

        mesh = _decode(fmt, input_path)
        logger.info(
            "Loaded %s mesh with %d vertices and %d triangles",
            fmt.value, len(mesh.vertices), len(mesh.triangles),
        )
        vertex_count, triangle_count = write_obj(mesh, out_path)
    except NvxError as e:
        logger.info("Error during conversion of %s: %s", input_path, e)
        result.error = str(e)
        result.duration = time.perf_counter() - t0
        return result

    result.success = True
    result.vertex_count = vertex_count
    result.triangle_count = triangle_count
    result.duration = time.perf_counter() - t0
    logger.info("Wrote %s in %.3fs", out_path, result.duration)
    return result
