from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from binembed.core import (
    DEFAULT_ARRAY_NAME,
    EmbedError,
    bind,
    build_pipeline_config,
    configure_logging,
    get_logger,
    load_settings,
    new_run_id,
)
from binembed.core.version import BINEMBED_DIST_VERSION
from binembed.embed import EmbedResult, embed_file
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()


@dataclass(frozen=True, slots=True)
class _Args:
    input: str
    output: str
    name: str
    compress: bool
    log_level: str | None
    log_format: str | None


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="binembed",
        description="Convert a binary file to a C++ array",
    )
    p.add_argument("-i", "--input", required=True, help="Input file")
    p.add_argument("-o", "--output", required=True, help="Output file")
    p.add_argument(
        "-n",
        "--name",
        default=DEFAULT_ARRAY_NAME,
        help=f"Name of the generated array (default: {DEFAULT_ARRAY_NAME})",
    )
    p.add_argument(
        "-c",
        "--compress",
        action="store_true",
        help="Brotli-compress the bytes before rendering them",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default=None,
        help="Overrides BINEMBED_LOG_LEVEL (default INFO)",
    )
    p.add_argument(
        "--log-format",
        choices=("console", "json"),
        default=None,
        help="Overrides BINEMBED_LOG_FORMAT (default console)",
    )
    p.add_argument(
        "--version", action="version", version=f"%(prog)s {BINEMBED_DIST_VERSION}"
    )
    return p


def _args(ns: argparse.Namespace) -> _Args:
    return _Args(
        input=str(ns.input),
        output=str(ns.output),
        name=str(ns.name),
        compress=bool(ns.compress),
        log_level=(str(ns.log_level) if ns.log_level else None),
        log_format=(str(ns.log_format) if ns.log_format else None),
    )


def _precheck(args: _Args) -> str | None:
    if not args.input:
        return "Input file name is empty"
    if not Path(args.input).exists():
        return f"File does not exist: {args.input}"
    if not args.output:
        return "Output file name is empty"
    if not args.name:
        return "Array name is empty"
    return None


def _result_table(res: EmbedResult | None) -> Table:
    tbl = Table(title="Result", show_header=True, box=None)
    if res is None:
        tbl.add_row("status", "[red]failed[/red]")
        return tbl
    tbl.add_row("status", "[green]ok[/green]")
    tbl.add_row("output", str(res.destination))
    tbl.add_row("array", f"{res.name} ({res.size_name})")
    tbl.add_row("bytes in", str(res.input_length))
    tbl.add_row("bytes out", str(res.output_length))
    if res.warnings:
        tbl.add_row("warnings", "[yellow]" + "; ".join(res.warnings) + "[/yellow]")
    return tbl


def main(argv: list[str] | None = None) -> int:
    args = _args(_build_parser().parse_args(argv))

    s = load_settings()
    configure_logging(
        level=args.log_level or s.log_level, fmt=args.log_format or s.log_format
    )
    log = get_logger("binembed")

    run_id = new_run_id()
    bind(run_id=run_id, command="embed")

    problem = _precheck(args)
    if problem is not None:
        log.error(problem)
        return 1

    try:
        cfg = build_pipeline_config(
            source=args.input,
            destination=args.output,
            name=args.name,
            compress=args.compress,
        )
    except EmbedError as e:
        log.error("Invalid arguments", error=str(e))
        return 1

    console.print(
        Panel.fit(
            Text(
                f"binembed - {cfg.source} -> {cfg.destination}\n"
                f"run_id={run_id}\ncompress={cfg.compress}",
                style="bold",
            ),
            title="Run",
        )
    )

    res: EmbedResult | None = None
    try:
        with console.status("[bold]embed[/]", spinner="dots"):
            res = embed_file(cfg, logger=log)
    except EmbedError as e:
        log.error("Embed failed", kind=type(e).__name__, error=str(e))
    finally:
        console.print(_result_table(res))

    return 0 if res is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
