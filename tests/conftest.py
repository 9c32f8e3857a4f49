from __future__ import annotations

import struct
from typing import Iterable, Optional, Sequence, Tuple

import pytest

NVX1_TAG = struct.pack("<I", 0x4E565831)  # b"1XVN" on disk
NVX2_TAG = struct.pack("<I", 0x4E565832)


def nvx1_bytes(
    vertex_type: int,
    vertex_payload: bytes,
    num_vertices: int,
    indices: Sequence[int],
    edges: Iterable[Tuple[int, int, int, int]] = (),
    tag: bytes = NVX1_TAG,
    padding: bytes = b"",
) -> bytes:
    edges = list(edges)
    data_start = 28 + len(padding)
    body = vertex_payload
    body += b"".join(struct.pack("<4H", *e) for e in edges)
    body += struct.pack(f"<{len(indices)}H", *indices)
    header = tag + struct.pack(
        "<6i", num_vertices, len(indices), len(edges), vertex_type, data_start, len(body)
    )
    return header + padding + body


def nvx2_bytes(
    components: int,
    vertex_payload: bytes,
    num_vertices: int,
    triangles: Sequence[Tuple[int, int, int]],
    groups: Sequence[Tuple[int, int, int, int, int, int]],
    edges: Sequence[Tuple[int, int, int, int]] = (),
    vertex_width: int = 0,
    tag: bytes = NVX2_TAG,
) -> bytes:
    out = tag + struct.pack(
        "<6i", len(groups), num_vertices, vertex_width, len(triangles), len(edges), components
    )
    out += b"".join(struct.pack("<6i", *g) for g in groups)
    out += vertex_payload
    out += b"".join(struct.pack("<3H", *t) for t in triangles)
    out += b"".join(struct.pack("<4H", *e) for e in edges)
    return out


def floats(*values: float) -> bytes:
    return struct.pack(f"<{len(values)}f", *values)


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, data: bytes):
        p = tmp_path / name
        p.write_bytes(data)
        return str(p)

    return _write


@pytest.fixture
def nvx1_pos_uv(write_file):
    """3 vertices with position + UV0, one triangle, no edges."""
    payload = (
        floats(0.0, 0.0, 0.0, 0.0, 0.0)
        + floats(1.0, 0.0, 0.0, 1.0, 0.0)
        + floats(0.0, 1.0, 0.0, 0.0, 1.0)
    )
    data = nvx1_bytes((1 << 0) | (1 << 3), payload, 3, [0, 1, 2], tag=b"NVX1")
    return write_file("tri.nvx", data)


@pytest.fixture
def nvx2_two_groups(write_file):
    """4 vertices (position + normal), 4 triangles split over two groups."""
    payload = b"".join(floats(float(i), 0.0, 0.0, 0.0, 0.0, 1.0) for i in range(4))
    tris = [(0, 1, 2), (1, 2, 3), (0, 2, 3), (0, 1, 3)]
    groups = [(0, 4, 0, 2, 0, 0), (0, 4, 2, 2, 0, 0)]
    data = nvx2_bytes(0b11, payload, 4, tris, groups, vertex_width=6)
    return write_file("quad.nvx2", data)
