"""Map ``.ipynb`` documents to blocks and write visibility back.

Cell mapping:
    markdown -> HeadingBlock
    code     -> OutputBlock (one Output per cell output)
    other    -> OpaqueBlock

Each block's ``metadata`` is the cell's own ``metadata`` dict, so the
collapsed marker is saved with the notebook. Visibility is persisted with
the keys notebook front ends already understand:
``metadata.jupyter.source_hidden`` on cells and
``metadata.jupyter.outputs_hidden`` on rich outputs (stream and error
outputs have no metadata and cannot persist a hidden flag).

This module also plays the external renderer for outputs, using the mime
types named in ``FoldConfig``: DOM markup is used as-is, markdown is
rendered with markdown-it-py, plain text is escaped into a ``<pre>`` element.
"""
from __future__ import annotations

import html
import logging
from collections.abc import Callable, Mapping
from functools import partial
from pathlib import Path
from typing import Any, TypeAlias

from markdown_it import MarkdownIt

from tocfold.blocks import Block, HeadingBlock, OpaqueBlock, Output, OutputBlock
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.io_utils import load_json, save_json

log = logging.getLogger(__name__)

Renderer: TypeAlias = Callable[[Mapping[str, Any]], str | None]

_md = MarkdownIt("commonmark")

_RICH_OUTPUT_TYPES = frozenset({"display_data", "execute_result"})


def _text(value: Any) -> str:
    """nbformat multiline strings may be stored as lists of lines."""
    if isinstance(value, list):
        return "".join(str(v) for v in value)
    if value is None:
        return ""
    return str(value)


def _first_present(data: Mapping[str, Any], mime_types: frozenset[str]) -> str | None:
    for mime in sorted(mime_types):
        if mime in data:
            return mime
    return None


def render_output_data(
    data: Mapping[str, Any],
    config: FoldConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render the richest heading-relevant representation of an output.

    DOM types win over markdown, markdown over plain text.
    """
    mime = _first_present(data, config.dom_mime_types)
    if mime is not None:
        return _text(data[mime])
    mime = _first_present(data, config.markdown_mime_types)
    if mime is not None:
        return _md.render(_text(data[mime]))
    if config.plain_text_mime_type in data:
        return f"<pre>{html.escape(_text(data[config.plain_text_mime_type]))}</pre>"
    return None


def _output_data(raw: Mapping[str, Any]) -> dict[str, Any]:
    output_type = raw.get("output_type")
    if output_type in _RICH_OUTPUT_TYPES:
        return {k: _text(v) if isinstance(v, list) else v
                for k, v in dict(raw.get("data") or {}).items()}
    if output_type == "stream":
        return {"text/plain": _text(raw.get("text"))}
    if output_type == "error":
        return {"application/vnd.jupyter.stderr": "\n".join(raw.get("traceback") or [])}
    return {}


def _output_hidden(raw: Mapping[str, Any]) -> bool:
    meta = raw.get("metadata") or {}
    return bool((meta.get("jupyter") or {}).get("outputs_hidden", False))


def _source_hidden(cell: Mapping[str, Any]) -> bool:
    meta = cell.get("metadata") or {}
    return bool((meta.get("jupyter") or {}).get("source_hidden", False))


def blocks_from_notebook(
    nb: dict[str, Any],
    *,
    renderer: Renderer | None = None,
    config: FoldConfig | None = None,
) -> list[Block]:
    """Build the block sequence for a notebook dict (nbformat 4 layout).

    Without a *renderer*, outputs are rendered from *config*'s mime types.
    """
    cfg = config or DEFAULT_CONFIG
    render = renderer or partial(render_output_data, config=cfg)
    cells = nb.get("cells")
    if not isinstance(cells, list):
        raise ValueError("Notebook payload has no 'cells' list")

    blocks: list[Block] = []
    for i, cell in enumerate(cells):
        if not isinstance(cell, dict):
            raise ValueError(f"Cell {i} must be a JSON object")
        metadata = cell.setdefault("metadata", {})
        block_id = str(cell.get("id") or f"cell-{i}")
        hidden = _source_hidden(cell)
        cell_type = cell.get("cell_type")

        if cell_type == "markdown":
            blocks.append(HeadingBlock(
                block_id=block_id, metadata=metadata, hidden=hidden,
                text=_text(cell.get("source")),
            ))
        elif cell_type == "code":
            outputs: list[Output] = []
            for raw in cell.get("outputs") or []:
                data = _output_data(raw)
                outputs.append(Output(
                    data=data,
                    rendered=render(data),
                    hidden=_output_hidden(raw),
                ))
            blocks.append(OutputBlock(
                block_id=block_id, metadata=metadata, hidden=hidden,
                source=_text(cell.get("source")), outputs=outputs,
            ))
        else:
            blocks.append(OpaqueBlock(block_id=block_id, metadata=metadata, hidden=hidden))

    log.debug("Mapped %d cells to blocks", len(blocks))
    return blocks


def _set_jupyter_flag(meta: dict[str, Any], key: str, value: bool) -> None:
    jupyter = meta.get("jupyter")
    if value:
        if not isinstance(jupyter, dict):
            jupyter = meta["jupyter"] = {}
        jupyter[key] = True
        return
    if isinstance(jupyter, dict):
        jupyter.pop(key, None)
        if not jupyter:
            del meta["jupyter"]


def write_visibility(nb: dict[str, Any], blocks: list[Block]) -> None:
    """Copy block and output hidden flags into the notebook's metadata."""
    cells = nb.get("cells")
    if not isinstance(cells, list) or len(cells) != len(blocks):
        raise ValueError(
            f"Notebook has {len(cells) if isinstance(cells, list) else 0} cells "
            f"but {len(blocks)} blocks were given"
        )
    for cell, block in zip(cells, blocks):
        _set_jupyter_flag(cell.setdefault("metadata", {}), "source_hidden", block.hidden)
        if not isinstance(block, OutputBlock):
            continue
        for raw, output in zip(cell.get("outputs") or [], block.outputs):
            if raw.get("output_type") not in _RICH_OUTPUT_TYPES:
                continue
            _set_jupyter_flag(raw.setdefault("metadata", {}), "outputs_hidden", output.hidden)


def load_notebook(path: Path) -> dict[str, Any]:
    nb = load_json(path)
    if not isinstance(nb, dict):
        raise ValueError(f"Notebook payload must be a JSON object: {path}")
    if not isinstance(nb.get("cells"), list):
        raise ValueError(f"Notebook has no 'cells' list: {path}")
    return nb


def save_notebook(nb: dict[str, Any], path: Path) -> None:
    save_json(nb, path, pretty=True)
