import pytest

from libnvx.errors import ObjWriteError
from libnvx.model import Group, Mesh, Triangle, Vertex, VertexComponents
from libnvx.objwriter import face_line, fmt_float, iter_obj_lines, write_obj

VC = VertexComponents


def _mesh(components, triangles=((0, 1, 2),), group_ids=None, normal=(0.0, 0.0, 1.0)):
    verts = tuple(
        Vertex(position=(float(i), 0.0, 0.0), normal=normal, uvs=((0.5, 0.5),) * 4, color=(1.0, 0.5, 0.0, 1.0))
        for i in range(3)
    )
    group_ids = group_ids or [0] * len(triangles)
    tris = tuple(Triangle(vertex_indices=t, group_id=g) for t, g in zip(triangles, group_ids))
    groups = tuple(Group(g, 0, 3, 0, len(tris), 0, 0) for g in sorted(set(group_ids)))
    return Mesh(vertices=verts, triangles=tris, groups=groups, components=components)


def _lines(mesh):
    return list(iter_obj_lines(mesh))


def _starting(lines, prefix):
    return [l for l in lines if l.split(" ", 1)[0] == prefix]


@pytest.mark.parametrize(
    "has_uv,has_normal,expected",
    [
        (True, True, "f 1/1/1 2/2/2 3/3/3"),
        (True, False, "f 1/1 2/2 3/3"),
        (False, True, "f 1//1 2//2 3//3"),
        (False, False, "f 1 2 3"),
    ],
)
def test_face_line_shapes(has_uv, has_normal, expected):
    assert face_line(Triangle((0, 1, 2)), has_uv, has_normal) == expected


def test_position_uv_mesh_never_emits_normals():
    lines = _lines(_mesh(VC.COORD | VC.UV0))
    assert len(_starting(lines, "v")) == 3
    assert len(_starting(lines, "vt")) == 3
    assert _starting(lines, "vn") == []
    assert _starting(lines, "f") == ["f 1/1 2/2 3/3"]


def test_normals_block():
    lines = _lines(_mesh(VC.COORD | VC.NORMAL))
    assert _starting(lines, "vn") == ["vn 0 0 1"] * 3
    assert _starting(lines, "f") == ["f 1//1 2//2 3//3"]


def test_extra_uv_sets_are_not_written():
    lines = _lines(_mesh(VC.COORD | VC.UV1 | VC.UV2 | VC.UV3))
    assert _starting(lines, "vt") == []
    assert _starting(lines, "f") == ["f 1 2 3"]


def test_colors_as_comments():
    lines = _lines(_mesh(VC.COORD | VC.COLOR))
    vc = [l for l in lines if l.startswith("# vc ")]
    assert vc == ["# vc 1 1 0.5 0 1", "# vc 2 1 0.5 0 1", "# vc 3 1 0.5 0 1"]


def test_header_counts():
    lines = _lines(_mesh(VC.COORD))
    assert lines[0].startswith("#")
    assert lines[1] == "# Vertices: 3, Faces: 1, Groups: 1"


def test_group_markers_on_change_only():
    tris = ((0, 1, 2),) * 4
    lines = _lines(_mesh(VC.COORD, triangles=tris, group_ids=[0, 0, 1, 1]))
    body = [l for l in lines if l.startswith(("g ", "f "))]
    assert body == ["g Group0", "f 1 2 3", "f 1 2 3", "g Group1", "f 1 2 3", "f 1 2 3"]


def test_non_contiguous_group_repeats_marker():
    tris = ((0, 1, 2),) * 3
    lines = _lines(_mesh(VC.COORD, triangles=tris, group_ids=[0, 1, 0]))
    assert _starting(lines, "g") == ["g Group0", "g Group1", "g Group0"]


def test_empty_mesh_has_headers_only():
    lines = _lines(Mesh(components=VC.COORD | VC.UV0 | VC.NORMAL))
    assert lines[1] == "# Vertices: 0, Faces: 0, Groups: 0"
    assert _starting(lines, "f") == []
    assert _starting(lines, "g") == []
    assert _starting(lines, "v") == []


@pytest.mark.parametrize(
    "value,expected",
    [(1.0, "1"), (0.5, "0.5"), (-2.25, "-2.25"), (0.1, "0.1"), (1e-05, "1e-05"), (0.0, "0")],
)
def test_fmt_float(value, expected):
    assert fmt_float(value) == expected


def test_fmt_float_float32_value_prints_short():
    # 0.1 as float32 widened to a Python float
    assert fmt_float(0.10000000149011612) == "0.1"


def test_write_obj(tmp_path):
    out = tmp_path / "m.obj"
    counts = write_obj(_mesh(VC.COORD | VC.UV0 | VC.NORMAL), str(out))
    assert counts == (3, 1)
    text = out.read_text(encoding="ascii")
    assert "f 1/1/1 2/2/2 3/3/3\n" in text
    assert "\r" not in text


def test_write_obj_unwritable(tmp_path):
    with pytest.raises(ObjWriteError):
        write_obj(_mesh(VC.COORD), str(tmp_path / "missing_dir" / "m.obj"))


def test_write_obj_rejected_path(tmp_path):
    with pytest.raises(ObjWriteError):
        write_obj(_mesh(VC.COORD), str(tmp_path / "bad\x00name.obj"))
