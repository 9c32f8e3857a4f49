"""libnvx.binio

Bounds-checked little-endian cursor over a whole file held in memory.

Both NVX layouts store their header ints, floats and indices in the byte
order of the machine that wrote them (x86, so little-endian). The 4-byte tag
is an int32 too: the engine writes the multichar constant 'NVX2' natively,
which puts ``2XVN`` on disk. Files that spell the tag forwards are accepted
as well.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

from .errors import InputNotFoundError, NvxDecodeError

NVX1_MAGIC = 0x4E565831  # 'NVX1'
NVX2_MAGIC = 0x4E565832  # 'NVX2'

_S16 = struct.Struct("<h")
_U16 = struct.Struct("<H")
_S32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_F32 = struct.Struct("<f")


def tag_matches(raw: bytes, magic: int) -> bool:
    if len(raw) != 4:
        return False
    return struct.unpack("<I", raw)[0] == magic or struct.unpack(">I", raw)[0] == magic


def read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputNotFoundError(f"Input file not found: {path}") from e
    except OSError as e:
        raise InputNotFoundError(f"Cannot read input file {path}: {e}") from e


@dataclass
class Bin:
    data: bytes
    ofs: int = 0

    def tell(self) -> int:
        return self.ofs

    def seek(self, ofs: int) -> None:
        if ofs < 0 or ofs > len(self.data):
            raise NvxDecodeError(f"Seek to {ofs} outside file of {len(self.data)} bytes")
        self.ofs = ofs

    def remaining(self) -> int:
        return len(self.data) - self.ofs

    def check_records(self, count: int, size: int, what: str) -> None:
        """Fail early when ``count`` records of ``size`` bytes cannot fit in what is left."""
        if count and not size:
            raise NvxDecodeError(f"Header claims {count} {what} records but they store no fields")
        if count * size > self.remaining():
            raise NvxDecodeError(
                f"{count} {what} records of {size} bytes need more than the {self.remaining()} bytes left at {self.ofs}"
            )

    def read(self, n: int) -> bytes:
        b = self.data[self.ofs : self.ofs + n]
        if len(b) != n:
            raise NvxDecodeError(f"Unexpected EOF at {self.ofs}, need {n}")
        self.ofs += n
        return b

    def _unpack(self, st: struct.Struct):
        return st.unpack(self.read(st.size))[0]

    def s16(self) -> int:
        return self._unpack(_S16)

    def u16(self) -> int:
        return self._unpack(_U16)

    def s32(self) -> int:
        return self._unpack(_S32)

    def u32(self) -> int:
        return self._unpack(_U32)

    def f32(self) -> float:
        return self._unpack(_F32)

    def vec2(self) -> Tuple[float, float]:
        return struct.unpack("<2f", self.read(8))

    def vec3(self) -> Tuple[float, float, float]:
        return struct.unpack("<3f", self.read(12))

    def vec4(self) -> Tuple[float, float, float, float]:
        return struct.unpack("<4f", self.read(16))
