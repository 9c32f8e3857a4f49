"""libnvx.objwriter

Wavefront OBJ writer for ``Mesh``.

Layout of the output:
  header comments (counts)
  v   for every vertex
  vn  for every vertex, if NORMAL is set
  vt  for every vertex, if UV0 is set (UV1..UV3 have no OBJ slot and are dropped)
  # vc comment lines, if COLOR is set
  faces, with ``g GroupN`` whenever the group id changes

Every attribute list is parallel to the vertex list, so a face corner uses
the same 1-based index for v, vt and vn.
"""

from __future__ import annotations

import logging
import math
import struct
from typing import Iterator, Tuple

from .errors import ObjWriteError
from .model import Mesh, Triangle, VertexComponents

logger = logging.getLogger(__name__)

_F32 = struct.Struct("<f")


def fmt_float(x: float) -> str:
    """Shortest text that reads back as the same float32."""
    if not math.isfinite(x):
        return f"{x:g}"
    try:
        want = _F32.unpack(_F32.pack(x))[0]
    except OverflowError:
        return repr(x)
    for prec in range(1, 10):
        s = f"{x:.{prec}g}"
        if _F32.unpack(_F32.pack(float(s)))[0] == want:
            return s
    return f"{x:.9g}"


def _fmt(*values: float) -> str:
    return " ".join(fmt_float(v) for v in values)


def face_line(tri: Triangle, has_uv: bool, has_normal: bool) -> str:
    a, b, c = (i + 1 for i in tri.vertex_indices)
    if has_uv and has_normal:
        return f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}"
    if has_uv:
        return f"f {a}/{a} {b}/{b} {c}/{c}"
    if has_normal:
        return f"f {a}//{a} {b}//{b} {c}//{c}"
    return f"f {a} {b} {c}"


def iter_obj_lines(mesh: Mesh) -> Iterator[str]:
    has_normal = mesh.has(VertexComponents.NORMAL)
    has_uv = mesh.has(VertexComponents.UV0)

    yield "# OBJ file exported from libnvx"
    yield f"# Vertices: {len(mesh.vertices)}, Faces: {len(mesh.triangles)}, Groups: {len(mesh.groups)}"
    yield ""

    for v in mesh.vertices:
        yield "v " + _fmt(*v.position)
    yield ""

    if has_normal:
        for v in mesh.vertices:
            yield "vn " + _fmt(*v.normal)
        yield ""

    if has_uv:
        for v in mesh.vertices:
            yield "vt " + _fmt(*v.uvs[0])
        yield ""

    if mesh.has(VertexComponents.COLOR):
        yield "# Vertex colors (not standard OBJ, provided as comments)"
        for i, v in enumerate(mesh.vertices, start=1):
            yield f"# vc {i} " + _fmt(*v.color)
        yield ""

    current_group = None
    for tri in mesh.triangles:
        if tri.group_id != current_group:
            current_group = tri.group_id
            yield f"g Group{current_group}"
        yield face_line(tri, has_uv, has_normal)


def write_obj(mesh: Mesh, out_path: str) -> Tuple[int, int]:
    """Write ``mesh`` to ``out_path``. Returns (vertex_count, triangle_count)."""
    try:
        with open(out_path, "w", encoding="ascii", newline="\n") as f:
            for line in iter_obj_lines(mesh):
                f.write(line + "\n")
    except (OSError, ValueError) as e:
        raise ObjWriteError(f"Cannot write {out_path}: {e}") from e

    logger.debug("wrote %s", out_path)
    return len(mesh.vertices), len(mesh.triangles)
