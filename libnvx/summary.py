from __future__ import annotations

import os

from .convert import load_mesh
from .model import NvxGroupInfo, NvxSummary
from .sniff import NvxFormat


def summarize_nvx(path: str) -> NvxSummary:
    """Decode ``path`` and report its counts, components and group table.

    Unlike ``convert_nvx`` this lets ``NvxError`` propagate.
    """
    fmt, mesh = load_mesh(path)

    edge_count = len(mesh.edges)
    if fmt is NvxFormat.NVX1:
        # edge records are skipped; the synthesised group still counts them
        edge_count = mesh.groups[0].num_edges

    groups = [
        NvxGroupInfo(
            id=g.id,
            first_vertex=g.first_vertex,
            num_vertices=g.num_vertices,
            first_triangle=g.first_triangle,
            num_triangles=g.num_triangles,
            first_edge=g.first_edge,
            num_edges=g.num_edges,
        )
        for g in mesh.groups
    ]
    return NvxSummary(
        path=path,
        file_size=os.path.getsize(path),
        format_name=fmt.value,
        vertex_count=len(mesh.vertices),
        triangle_count=len(mesh.triangles),
        edge_count=edge_count,
        components=mesh.component_names(),
        groups=groups,
    )
