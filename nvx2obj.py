#!/usr/bin/env python3
"""
nvx2obj.py — Nebula2 (.nvx / .nvx2) -> Wavefront OBJ, drag-and-drop front end

Every plain argument is an input file and is converted next to itself.
The older spelling is accepted too:

  nvx2obj.py -in=mesh.nvx2 [-out=mesh.obj]
"""

from __future__ import annotations

import sys
from typing import List, Optional

from libnvx import convert_nvx
from nvxcli.main import console, setup_logging

USAGE = "Usage: nvx2obj.py [--verbose] [-in=FILE] [-out=FILE] [file1.nvx2 ...]"


def _split_opt(a: str) -> Optional[tuple]:
    # -in=x, --in:x, /out=x
    key = a.lstrip("-/")
    for sep in ("=", ":"):
        if sep in key:
            k, v = key.split(sep, 1)
            return k.lower(), v
    return None


def main(argv: List[str]) -> int:
    files: List[str] = []
    out_path: Optional[str] = None
    verbose = False

    for a in argv:
        if a in ("-h", "--help", "/?"):
            print(USAGE)
            return 0
        if a in ("-v", "--verbose"):
            verbose = True
            continue
        opt = _split_opt(a) if a.startswith(("-", "/")) else None
        if opt and opt[0] == "in":
            files.append(opt[1])
            continue
        if opt and opt[0] == "out":
            out_path = opt[1]
            continue
        if a.startswith("-"):
            print(f"[WARN] Ignoring unknown option: {a}")
            continue
        files.append(a)

    setup_logging(verbose)

    if not files:
        print("No input files. Drag-drop .nvx2 files onto the script, or run with a path.")
        print(USAGE)
        return 2
    if out_path and len(files) > 1:
        print("-out can only be used with a single input file")
        return 2

    failed = 0
    for p in files:
        r = convert_nvx(p, out_path)
        if r.success:
            console.print(
                f"[green]{r.format_name}[/green] {p} -> {r.output_path} "
                f"({r.vertex_count} vertices, {r.triangle_count} triangles, {r.duration:.3f}s)"
            )
        else:
            console.print(f"[red]ERROR[/red] {p}: {r.error}")
            failed += 1

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
