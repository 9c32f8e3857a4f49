from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from libnvx import NvxError, convert_nvx, summarize_nvx

console = Console()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def cmd_convert(args: argparse.Namespace) -> int:
    r = convert_nvx(args.input, args.out)
    if not r.success:
        console.print(f"[red]Conversion failed:[/red] {r.error}")
        return 1

    console.print(f"[bold]Detected file type:[/bold] {r.format_name}")
    console.print(f"[bold]Vertices:[/bold] {r.vertex_count}   [bold]Triangles:[/bold] {r.triangle_count}")
    console.print(f"[green]Wrote[/green] {r.output_path} in {r.duration * 1000:.1f} ms")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    try:
        s = summarize_nvx(args.input)
    except NvxError as e:
        console.print(f"[red]Cannot read {args.input}:[/red] {e}")
        return 1

    console.print(f"[bold]File:[/bold] {s.path}")
    console.print(f"[bold]Size:[/bold] {s.file_size} bytes")
    console.print(f"[bold]Format:[/bold] {s.format_name}")
    console.print(
        f"[bold]Vertices:[/bold] {s.vertex_count}   [bold]Triangles:[/bold] {s.triangle_count}"
        f"   [bold]Edges:[/bold] {s.edge_count}"
    )
    console.print(f"[bold]Components:[/bold] {', '.join(s.components) or '(none)'}")

    gt = Table(title="Groups")
    for col in ("Id", "First vertex", "Vertices", "First triangle", "Triangles", "First edge", "Edges"):
        gt.add_column(col, justify="right")
    if s.groups:
        for g in s.groups:
            gt.add_row(*(str(v) for v in (
                g.id, g.first_vertex, g.num_vertices, g.first_triangle, g.num_triangles, g.first_edge, g.num_edges,
            )))
    else:
        gt.add_row("(none)", "-", "-", "-", "-", "-", "-")
    console.print(gt)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nvxcli")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("convert", help="Convert an NVX1/NVX2 mesh to OBJ")
    c.add_argument("input")
    c.add_argument("--out", default=None, help="Output .obj path (default: next to input)")
    c.set_defaults(fn=cmd_convert)

    s = sub.add_parser("summary", help="Print info about an NVX file")
    s.add_argument("input")
    s.set_defaults(fn=cmd_summary)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
