"""Collapse or expand the section owned by a heading block.

``toggle_section`` is the single entry point. It runs guard checks, scans
the sequence, and only then writes: hidden flags on each affected block or
output, plus the collapsed marker on the owner's metadata. The marker's
presence (with a truthy value) is what marks a section as collapsed by this
engine; expanding deletes it.

Guard no-ops (nothing is mutated, nothing is raised):
    - collapse requested while the owner is hidden
    - expand requested while the marker is absent or false
    - owner is not a heading block
    - owner text does not start with a heading
"""
from __future__ import annotations

import logging

from tocfold.blocks import Block, HeadingBlock, OutputBlock, index_of
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.headings import parse_heading
from tocfold.scanner import BlockNotFoundError, VisibilityAction, compute_affected_blocks

log = logging.getLogger(__name__)


def is_collapsed(block: Block, config: FoldConfig = DEFAULT_CONFIG) -> bool:
    """True when *block* carries a truthy collapsed marker."""
    return bool(block.metadata.get(config.marker_key, False))


def apply_actions(blocks: list[Block], actions: list[VisibilityAction]) -> None:
    """Set hidden flags. Content is never removed or re-rendered."""
    for action in actions:
        block = blocks[action.block_index]
        if action.output_index is None:
            block.hidden = action.hidden
        elif isinstance(block, OutputBlock):
            block.outputs[action.output_index].hidden = action.hidden
        else:
            raise TypeError(
                f"Output action on block {action.block_index} without outputs"
            )


def toggle_section(
    blocks: list[Block],
    owner: Block,
    collapse: bool,
    *,
    config: FoldConfig | None = None,
) -> None:
    """Collapse (``collapse=True``) or expand the section owned by *owner*.

    Raises:
        BlockNotFoundError: *owner* passed the guards but is not in *blocks*.
            Raised before any mutation.
    """
    cfg = config or DEFAULT_CONFIG

    if collapse:
        if owner.hidden:
            log.debug("Skip collapse of %s: block is hidden", owner.block_id)
            return
    elif not is_collapsed(owner, cfg):
        log.debug("Skip expand of %s: no collapsed marker", owner.block_id)
        return

    if not isinstance(owner, HeadingBlock):
        log.debug("Skip toggle of %s: not a heading block", owner.block_id)
        return
    heading = parse_heading(owner.text)
    if heading is None:
        log.debug("Skip toggle of %s: text has no heading", owner.block_id)
        return

    owner_index = index_of(blocks, owner)
    if owner_index == -1:
        raise BlockNotFoundError(
            f"Block {owner.block_id!r} is not in the supplied sequence"
        )

    actions = compute_affected_blocks(
        blocks, owner_index, heading.level, collapse, cfg
    )
    apply_actions(blocks, actions)

    if collapse:
        owner.metadata[cfg.marker_key] = True
    else:
        owner.metadata.pop(cfg.marker_key, None)
    log.debug(
        "%s section of %s (%r): %d action(s)",
        "Collapsed" if collapse else "Expanded",
        owner.block_id, heading.title, len(actions),
    )
