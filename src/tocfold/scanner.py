"""Compute which blocks and outputs a section toggle affects.

The scan is read-only and pure: for the same ``(blocks, owner_index,
owner_level, collapse)`` it always returns the same action list. Nothing is
mutated here; ``tocfold.toggle`` applies the actions afterwards.

Stop rule: the section ends right before the first heading-capable block
whose heading level is <= the owner's level. Same-level headings are
siblings, so the comparison is ``<=``. A heading found inside a multi-output
block's outputs only limits that block; the outer scan continues.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tocfold.blocks import Block, HeadingBlock, OpaqueBlock, OutputBlock
from tocfold.boundary import VerdictKind, find_output_boundary
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.headings import parse_heading

log = logging.getLogger(__name__)


class BlockNotFoundError(LookupError):
    """The owner block is not part of the supplied block sequence."""


# Name used by callers that think in terms of the outline contract.
NotFound = BlockNotFoundError


@dataclass(frozen=True, slots=True)
class VisibilityAction:
    """Set ``hidden`` on a block (``output_index is None``) or one output."""

    block_index: int
    output_index: int | None
    hidden: bool


def compute_affected_blocks(
    blocks: list[Block],
    owner_index: int,
    owner_level: int,
    collapse: bool,
    config: FoldConfig = DEFAULT_CONFIG,
) -> list[VisibilityAction]:
    """Walk blocks after the owner and list every visibility change.

    Raises:
        BlockNotFoundError: *owner_index* does not address a block.
    """
    if not 0 <= owner_index < len(blocks):
        raise BlockNotFoundError(
            f"Owner index {owner_index} is outside a sequence of {len(blocks)} blocks"
        )

    actions: list[VisibilityAction] = []
    end = len(blocks)
    for i in range(owner_index + 1, len(blocks)):
        match blocks[i]:
            case HeadingBlock(text=text):
                h = parse_heading(text)
                if h is not None and h.level <= owner_level:
                    end = i
                    break
                actions.append(VisibilityAction(i, None, collapse))
            case OutputBlock(outputs=outputs) as block:
                verdict = find_output_boundary(block, owner_level, config)
                # PARTIAL leaves the block's own input editable.
                if verdict.kind is VerdictKind.WHOLE:
                    actions.append(VisibilityAction(i, None, collapse))
                for j in verdict.toggled_outputs(len(outputs)):
                    actions.append(VisibilityAction(i, j, collapse))
            case OpaqueBlock():
                actions.append(VisibilityAction(i, None, collapse))

    log.debug(
        "Section of block %d (level %d) spans blocks %d..%d: %d action(s)",
        owner_index, owner_level, owner_index + 1, end - 1, len(actions),
    )
    return actions
