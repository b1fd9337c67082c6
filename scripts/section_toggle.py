#!/usr/bin/env python3
"""List a notebook's outline, or collapse/expand the section under one cell.

Collapsing hides every cell (or cell output) that belongs to the heading in
the chosen markdown cell and records a ``toc-nb-collapsed`` marker in that
cell's metadata; expanding reverses it. The notebook is written back in
place unless ``--output`` is given.

Usage::

    # Print the outline as JSON
    python3 scripts/section_toggle.py --notebook analysis.ipynb --list

    # Collapse the section owned by cell 3
    python3 scripts/section_toggle.py --notebook analysis.ipynb --cell 3 --collapse

    # Expand it again, writing to a new file
    python3 scripts/section_toggle.py --notebook analysis.ipynb --cell 3 --expand \
      --output expanded.ipynb
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from tocfold.blocks import Block, OutputBlock
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.notebook import (
    blocks_from_notebook,
    load_notebook,
    save_notebook,
    write_visibility,
)
from tocfold.outline import build_outline, outline_to_dicts
from tocfold.scanner import BlockNotFoundError
from tocfold.toggle import is_collapsed, toggle_section

log = logging.getLogger("section_toggle")


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collapse or expand notebook sections by heading level."
    )
    parser.add_argument(
        "--notebook", required=True, type=Path, help="Path to the .ipynb file"
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Optional JSON config (marker key, mime types, title length)",
    )
    parser.add_argument(
        "--list", action="store_true",
        help="Print the notebook outline and exit.",
    )
    parser.add_argument(
        "--cell", type=int, default=None,
        help="Index of the markdown cell that owns the section.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--collapse", action="store_true", help="Hide the section.")
    mode.add_argument("--expand", action="store_true", help="Show the section.")
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Write the result here instead of overwriting --notebook.",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def visibility_summary(blocks: list[Block], config: FoldConfig) -> dict[str, object]:
    """Hidden cells, hidden outputs per cell, and collapsed owners."""
    hidden_outputs: dict[str, list[int]] = {}
    for i, block in enumerate(blocks):
        if isinstance(block, OutputBlock):
            idx = [j for j, o in enumerate(block.outputs) if o.hidden]
            if idx:
                hidden_outputs[str(i)] = idx
    return {
        "hidden_cells": [i for i, b in enumerate(blocks) if b.hidden],
        "hidden_outputs": hidden_outputs,
        "collapsed_cells": [i for i, b in enumerate(blocks) if is_collapsed(b, config)],
    }


def run(args: argparse.Namespace) -> int:
    config = FoldConfig.from_json(args.config) if args.config else DEFAULT_CONFIG
    nb = load_notebook(args.notebook)
    blocks = blocks_from_notebook(nb, config=config)

    if args.list:
        dump_json(outline_to_dicts(build_outline(blocks, config=config)))
        return 0

    if args.cell is None or not (args.collapse or args.expand):
        raise ValueError("--cell with --collapse or --expand is required unless --list")
    if not 0 <= args.cell < len(blocks):
        raise BlockNotFoundError(
            f"Cell {args.cell} is outside a notebook of {len(blocks)} cells"
        )

    toggle_section(blocks, blocks[args.cell], args.collapse, config=config)
    write_visibility(nb, blocks)

    out_path = args.output or args.notebook
    save_notebook(nb, out_path)
    log.info(
        "%s section at cell %d, wrote %s",
        "Collapsed" if args.collapse else "Expanded", args.cell, out_path,
    )
    dump_json(visibility_summary(blocks, config))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        return run(args)
    except (BlockNotFoundError, ValueError) as exc:
        log.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
