"""Flat outline of every heading in a block sequence.

Headings come from heading blocks (first line of their text) and from the
rendered nodes of heading-capable outputs. Entries are in document order;
callers build any tree they need from ``level``.
"""
from __future__ import annotations

from dataclasses import dataclass

from tocfold.blocks import Block, HeadingBlock, OutputBlock
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.headings import parse_heading, parse_rendered_heading, title_string
from tocfold.mime import classify_output
from tocfold.toggle import is_collapsed


@dataclass(frozen=True, slots=True)
class OutlineEntry:
    level: int
    title: str
    label: str                  # shortened title for display
    block_index: int
    output_index: int | None    # None for heading blocks
    collapsed: bool = False


def build_outline(
    blocks: list[Block],
    *,
    config: FoldConfig | None = None,
) -> list[OutlineEntry]:
    cfg = config or DEFAULT_CONFIG
    entries: list[OutlineEntry] = []
    for i, block in enumerate(blocks):
        if isinstance(block, HeadingBlock):
            h = parse_heading(block.text)
            if h is None:
                continue
            entries.append(OutlineEntry(
                level=h.level,
                title=h.title,
                label=title_string(block.text, cfg.title_max_length),
                block_index=i,
                output_index=None,
                collapsed=is_collapsed(block, cfg),
            ))
        elif isinstance(block, OutputBlock):
            for j, output in enumerate(block.outputs):
                if not classify_output(output.data.keys(), cfg).capable:
                    continue
                h = parse_rendered_heading(output.rendered)
                if h is None:
                    continue
                entries.append(OutlineEntry(
                    level=h.level,
                    title=h.title,
                    label=title_string(h.title, cfg.title_max_length),
                    block_index=i,
                    output_index=j,
                ))
    return entries


def outline_to_dicts(entries: list[OutlineEntry]) -> list[dict[str, object]]:
    """JSON-ready rows, one per entry."""
    return [
        {
            "level": e.level,
            "title": e.title,
            "label": e.label,
            "block_index": e.block_index,
            "output_index": e.output_index,
            "collapsed": e.collapsed,
        }
        for e in entries
    ]
