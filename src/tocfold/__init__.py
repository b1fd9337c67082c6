"""Outline-driven section collapsing for notebook-like block sequences."""
from tocfold.blocks import (
    Block,
    BlockKind,
    Heading,
    HeadingBlock,
    OpaqueBlock,
    Output,
    OutputBlock,
)
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.headings import parse_heading, parse_rendered_heading, title_string
from tocfold.outline import OutlineEntry, build_outline
from tocfold.scanner import (
    BlockNotFoundError,
    NotFound,
    VisibilityAction,
    compute_affected_blocks,
)
from tocfold.toggle import is_collapsed, toggle_section

__all__ = [
    "DEFAULT_CONFIG",
    "Block",
    "BlockKind",
    "BlockNotFoundError",
    "FoldConfig",
    "Heading",
    "HeadingBlock",
    "NotFound",
    "OpaqueBlock",
    "OutlineEntry",
    "Output",
    "OutputBlock",
    "VisibilityAction",
    "build_outline",
    "compute_affected_blocks",
    "is_collapsed",
    "parse_heading",
    "parse_rendered_heading",
    "title_string",
    "toggle_section",
]
