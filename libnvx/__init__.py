"""libnvx: Nebula2 NVX1/NVX2 binary meshes to Wavefront OBJ."""

from .convert import ConversionResult, convert_nvx, default_output_path, load_mesh
from .errors import (
    InputNotFoundError,
    NvxDecodeError,
    NvxError,
    NvxFormatError,
    ObjWriteError,
    UnsupportedFormatError,
)
from .model import Edge, Group, Mesh, Triangle, Vertex, VertexComponents
from .nvx1 import parse_nvx1, read_nvx1
from .nvx2 import parse_nvx2, read_nvx2
from .objwriter import iter_obj_lines, write_obj
from .sniff import NvxFormat, sniff_format
from .summary import summarize_nvx

__version__ = "0.1.0"
