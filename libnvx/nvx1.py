"""libnvx.nvx1

Reader for the older Nebula2 NVX1 mesh layout.

Header (7 x int32):
  magic, num_vertices, num_indices, num_edges, vertex_type, data_start, data_size

Starting at ``data_start`` the payload is:
  num_vertices vertex records   fields present per vertex_type, see below
  num_edges    edge records     4 x uint16, skipped
  num_indices  indices          uint16, three per triangle

NVX1 has its own component bits and no groups; one group covering the whole
mesh is synthesised.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .binio import NVX1_MAGIC, Bin, read_file, tag_matches
from .errors import NvxDecodeError, NvxFormatError
from .model import ZERO2, ZERO3, ZERO4, WHITE, Group, Mesh, Triangle, Vertex, VertexComponents

logger = logging.getLogger(__name__)

# NVX1 vertex_type bits
_COORD = 1 << 0
_NORM = 1 << 1
_RGBA = 1 << 2
_UV0 = 1 << 3
_UV1 = 1 << 4
_UV2 = 1 << 5
_UV3 = 1 << 6
_JW = 1 << 7

# NVX1 bit -> canonical bits. Joint weights carry both weights and indices.
_COMPONENT_MAP: Tuple[Tuple[int, VertexComponents], ...] = (
    (_COORD, VertexComponents.COORD),
    (_NORM, VertexComponents.NORMAL),
    (_RGBA, VertexComponents.COLOR),
    (_UV0, VertexComponents.UV0),
    (_UV1, VertexComponents.UV1),
    (_UV2, VertexComponents.UV2),
    (_UV3, VertexComponents.UV3),
    (_JW, VertexComponents.WEIGHTS | VertexComponents.JINDICES),
)

_EDGE_SIZE = 8

# bytes each field adds to a vertex record
_FIELD_SIZES: Tuple[Tuple[int, int], ...] = (
    (_COORD, 12),
    (_NORM, 12),
    (_RGBA, 4),
    (_UV0, 8),
    (_UV1, 8),
    (_UV2, 8),
    (_UV3, 8),
    (_JW, 24),
)


def translate_components(vertex_type: int) -> VertexComponents:
    out = VertexComponents.NONE
    for bit, comps in _COMPONENT_MAP:
        if vertex_type & bit:
            out |= comps
    return out


def vertex_size(vertex_type: int) -> int:
    return sum(size for bit, size in _FIELD_SIZES if vertex_type & bit)


def _unpack_color(packed: int) -> Tuple[float, float, float, float]:
    # stored as B G R A from the most significant byte down
    b = ((packed >> 24) & 0xFF) / 255.0
    g = ((packed >> 16) & 0xFF) / 255.0
    r = ((packed >> 8) & 0xFF) / 255.0
    a = (packed & 0xFF) / 255.0
    return (r, g, b, a)


def _read_vertex(b: Bin, vertex_type: int) -> Vertex:
    position = normal = ZERO3
    color = WHITE
    uvs = [ZERO2, ZERO2, ZERO2, ZERO2]
    joints = weights = ZERO4

    if vertex_type & _COORD:
        position = b.vec3()
    if vertex_type & _NORM:
        normal = b.vec3()
    if vertex_type & _RGBA:
        color = _unpack_color(b.u32())
    for i, bit in enumerate((_UV0, _UV1, _UV2, _UV3)):
        if vertex_type & bit:
            uvs[i] = b.vec2()
    if vertex_type & _JW:
        joints = (float(b.s16()), float(b.s16()), float(b.s16()), float(b.s16()))
        weights = b.vec4()

    return Vertex(
        position=position,
        normal=normal,
        uvs=(uvs[0], uvs[1], uvs[2], uvs[3]),
        color=color,
        weights=weights,
        joint_indices=joints,
    )


def parse_nvx1(data: bytes) -> Mesh:
    b = Bin(data)
    magic = b.read(4)
    if not tag_matches(magic, NVX1_MAGIC):
        raise NvxFormatError(f"Not a valid NVX1 file. Magic: {magic!r}")

    num_vertices = b.s32()
    num_indices = b.s32()
    num_edges = b.s32()
    vertex_type = b.s32()
    data_start = b.s32()
    data_size = b.s32()
    logger.debug(
        "NVX1 header: vertices=%d indices=%d edges=%d type=0x%X data_start=%d data_size=%d",
        num_vertices, num_indices, num_edges, vertex_type, data_start, data_size,
    )

    if num_vertices < 0 or num_indices < 0 or num_edges < 0:
        raise NvxDecodeError(
            f"Negative counts in NVX1 header: vertices={num_vertices} indices={num_indices} edges={num_edges}"
        )
    if num_indices % 3:
        logger.warning("NVX1 index count %d is not a multiple of 3; trailing indices ignored", num_indices)

    components = translate_components(vertex_type)
    b.seek(data_start)
    b.check_records(num_vertices, vertex_size(vertex_type), "vertex")

    vertices: List[Vertex] = [_read_vertex(b, vertex_type) for _ in range(num_vertices)]

    # edges are not kept
    b.read(num_edges * _EDGE_SIZE)

    num_triangles = num_indices // 3
    triangles: List[Triangle] = []
    for i in range(num_triangles):
        tri = (b.u16(), b.u16(), b.u16())
        if max(tri) >= num_vertices:
            raise NvxDecodeError(f"Triangle {i} references vertex {max(tri)} of {num_vertices}")
        triangles.append(Triangle(vertex_indices=tri, group_id=0))

    group = Group(
        id=0,
        first_vertex=0,
        num_vertices=num_vertices,
        first_triangle=0,
        num_triangles=num_triangles,
        first_edge=0,
        num_edges=num_edges,
    )

    return Mesh(
        vertices=tuple(vertices),
        triangles=tuple(triangles),
        groups=(group,),
        edges=(),
        components=components,
        source_format="NVX1",
    )


def read_nvx1(path: str) -> Mesh:
    return parse_nvx1(read_file(path))
