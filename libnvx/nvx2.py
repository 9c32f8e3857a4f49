"""libnvx.nvx2

Reader for the Nebula2 NVX2 mesh layout.

Header (7 x int32):
  magic, num_groups, num_vertices, vertex_width, num_triangles, num_edges,
  vertex_components

Followed by:
  num_groups    group records   6 x int32 (first/num vertex, triangle, edge)
  num_vertices  vertex records  fields present per vertex_components
  num_triangles triangles       3 x uint16
  num_edges     edge records    2 face + 2 vertex indices, uint16

vertex_components uses the canonical bits directly. vertex_width (floats per
vertex) is informational; the component bits drive what is read.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .binio import NVX2_MAGIC, Bin, read_file, tag_matches
from .errors import NvxDecodeError, NvxFormatError
from .model import ZERO2, ZERO3, ZERO4, WHITE, Edge, Group, Mesh, Triangle, Vertex, VertexComponents

logger = logging.getLogger(__name__)

# Group assigned to a triangle that no group range covers.
DEFAULT_GROUP_ID = 0

_VC = VertexComponents

# bytes each component adds to a vertex record
_FIELD_SIZES = (
    (_VC.COORD, 12),
    (_VC.NORMAL, 12),
    (_VC.UV0, 8),
    (_VC.UV1, 8),
    (_VC.UV2, 8),
    (_VC.UV3, 8),
    (_VC.COLOR, 16),
    (_VC.TANGENT, 12),
    (_VC.BINORMAL, 12),
    (_VC.WEIGHTS, 16),
    (_VC.JINDICES, 16),
)


def vertex_size(comps: VertexComponents) -> int:
    return sum(size for bit, size in _FIELD_SIZES if comps & bit)


def _read_vertex(b: Bin, comps: VertexComponents) -> Vertex:
    position = normal = tangent = binormal = ZERO3
    uvs = [ZERO2, ZERO2, ZERO2, ZERO2]
    color = WHITE
    weights = joints = ZERO4

    if comps & _VC.COORD:
        position = b.vec3()
    if comps & _VC.NORMAL:
        normal = b.vec3()
    for i, bit in enumerate((_VC.UV0, _VC.UV1, _VC.UV2, _VC.UV3)):
        if comps & bit:
            uvs[i] = b.vec2()
    # color comes after the UVs here and is four plain floats
    if comps & _VC.COLOR:
        color = b.vec4()
    if comps & _VC.TANGENT:
        tangent = b.vec3()
    if comps & _VC.BINORMAL:
        binormal = b.vec3()
    if comps & _VC.WEIGHTS:
        weights = b.vec4()
    if comps & _VC.JINDICES:
        joints = b.vec4()

    return Vertex(
        position=position,
        normal=normal,
        uvs=(uvs[0], uvs[1], uvs[2], uvs[3]),
        color=color,
        tangent=tangent,
        binormal=binormal,
        weights=weights,
        joint_indices=joints,
    )


def group_for_triangle(groups: Sequence[Group], index: int) -> int:
    """First group whose triangle range holds ``index``, else DEFAULT_GROUP_ID."""
    for g in groups:
        if g.contains_triangle(index):
            return g.id
    logger.warning("Triangle %d is outside every group range; assigning group %d", index, DEFAULT_GROUP_ID)
    return DEFAULT_GROUP_ID


def parse_nvx2(data: bytes) -> Mesh:
    b = Bin(data)
    magic = b.read(4)
    if not tag_matches(magic, NVX2_MAGIC):
        raise NvxFormatError(f"Not a valid NVX2 file. Magic: {magic!r}")

    num_groups = b.s32()
    num_vertices = b.s32()
    vertex_width = b.s32()
    num_triangles = b.s32()
    num_edges = b.s32()
    comps = _VC(b.s32() & 0x7FF)  # nothing is defined above JINDICES
    logger.debug(
        "NVX2 header: groups=%d vertices=%d width=%d triangles=%d edges=%d components=0x%X",
        num_groups, num_vertices, vertex_width, num_triangles, num_edges, int(comps),
    )

    if min(num_groups, num_vertices, num_triangles, num_edges) < 0:
        raise NvxDecodeError(
            f"Negative counts in NVX2 header: groups={num_groups} vertices={num_vertices} "
            f"triangles={num_triangles} edges={num_edges}"
        )

    groups: List[Group] = []
    for i in range(num_groups):
        first_vertex, nv, first_tri, nt, first_edge, ne = (b.s32() for _ in range(6))
        groups.append(
            Group(
                id=i,
                first_vertex=first_vertex,
                num_vertices=nv,
                first_triangle=first_tri,
                num_triangles=nt,
                first_edge=first_edge,
                num_edges=ne,
            )
        )

    b.check_records(num_vertices, vertex_size(comps), "vertex")
    vertices: List[Vertex] = [_read_vertex(b, comps) for _ in range(num_vertices)]

    triangles: List[Triangle] = []
    for i in range(num_triangles):
        tri = (b.u16(), b.u16(), b.u16())
        if max(tri) >= num_vertices:
            raise NvxDecodeError(f"Triangle {i} references vertex {max(tri)} of {num_vertices}")
        triangles.append(Triangle(vertex_indices=tri, group_id=group_for_triangle(groups, i)))

    edges: List[Edge] = []
    for _ in range(num_edges):
        faces = (b.u16(), b.u16())
        verts = (b.u16(), b.u16())
        edges.append(Edge(face_indices=faces, vertex_indices=verts))

    return Mesh(
        vertices=tuple(vertices),
        triangles=tuple(triangles),
        groups=tuple(groups),
        edges=tuple(edges),
        components=comps,
        source_format="NVX2",
    )


def read_nvx2(path: str) -> Mesh:
    return parse_nvx2(read_file(path))
