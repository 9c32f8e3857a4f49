from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

ZERO2: Vec2 = (0.0, 0.0)
ZERO3: Vec3 = (0.0, 0.0, 0.0)
ZERO4: Vec4 = (0.0, 0.0, 0.0, 0.0)
WHITE: Vec4 = (1.0, 1.0, 1.0, 1.0)


# -----------------------------
# Mesh model shared by both decoders and the OBJ writer
#
# Decoders accumulate each record into locals and build the frozen value at
# the end, so nothing outside a decoder ever sees a half-filled vertex.
# -----------------------------


class VertexComponents(enum.IntFlag):
    """Canonical component bits. NVX2 stores exactly these; NVX1 is translated."""

    NONE = 0
    COORD = 1 << 0
    NORMAL = 1 << 1
    UV0 = 1 << 2
    UV1 = 1 << 3
    UV2 = 1 << 4
    UV3 = 1 << 5
    COLOR = 1 << 6
    TANGENT = 1 << 7
    BINORMAL = 1 << 8
    WEIGHTS = 1 << 9
    JINDICES = 1 << 10


UV_COMPONENTS = (
    VertexComponents.UV0,
    VertexComponents.UV1,
    VertexComponents.UV2,
    VertexComponents.UV3,
)


@dataclass(frozen=True)
class Vertex:
    position: Vec3 = ZERO3
    normal: Vec3 = ZERO3
    uvs: Tuple[Vec2, Vec2, Vec2, Vec2] = (ZERO2, ZERO2, ZERO2, ZERO2)
    color: Vec4 = WHITE
    tangent: Vec3 = ZERO3
    binormal: Vec3 = ZERO3
    weights: Vec4 = ZERO4
    # float so NVX1's int16 and NVX2's float indices share one field
    joint_indices: Vec4 = ZERO4


@dataclass(frozen=True)
class Triangle:
    vertex_indices: Tuple[int, int, int]
    group_id: int = 0


@dataclass(frozen=True)
class Group:
    """Contiguous ranges over the mesh's flat lists; it owns nothing."""

    id: int
    first_vertex: int
    num_vertices: int
    first_triangle: int
    num_triangles: int
    first_edge: int
    num_edges: int

    def contains_triangle(self, index: int) -> bool:
        return self.first_triangle <= index < self.first_triangle + self.num_triangles


@dataclass(frozen=True)
class Edge:
    face_indices: Tuple[int, int]
    vertex_indices: Tuple[int, int]


@dataclass(frozen=True)
class Mesh:
    vertices: Tuple[Vertex, ...] = ()
    triangles: Tuple[Triangle, ...] = ()
    groups: Tuple[Group, ...] = ()
    edges: Tuple[Edge, ...] = ()
    components: VertexComponents = VertexComponents.NONE
    source_format: Optional[str] = None

    def has(self, component: VertexComponents) -> bool:
        return (self.components & component) == component and component != 0

    def component_names(self) -> List[str]:
        return [c.name for c in VertexComponents if c and self.has(c)]


# -----------------------------
# Stable DTOs used by summarize_nvx
# -----------------------------


@dataclass
class NvxGroupInfo:
    id: int
    first_vertex: int
    num_vertices: int
    first_triangle: int
    num_triangles: int
    first_edge: int
    num_edges: int


@dataclass
class NvxSummary:
    path: str
    file_size: int
    format_name: str
    vertex_count: int
    triangle_count: int
    edge_count: int
    components: List[str]
    groups: List[NvxGroupInfo] = field(default_factory=list)
