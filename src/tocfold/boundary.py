"""Find where a section ends inside one multi-output block.

A code-like block can render markdown or HTML headings in its outputs. When
one of those headings is at or above the owner's level, the owner's section
ends at that output: earlier outputs belong to the section, the boundary
output and everything after it do not. The outer scan keeps going either way.

Passes:
    1. Classify every output's mime keys (capability flags).
    2. No capable output -> WHOLE.
    3. First capable output whose rendered heading has level <= owner level
       is the boundary.
    4. No boundary -> WHOLE, else PARTIAL(boundary).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tocfold.blocks import OutputBlock
from tocfold.config import DEFAULT_CONFIG, FoldConfig
from tocfold.headings import parse_rendered_heading
from tocfold.mime import classify_output


class VerdictKind(Enum):
    WHOLE = "whole"
    PARTIAL = "partial"


@dataclass(frozen=True, slots=True)
class OutputVerdict:
    kind: VerdictKind
    boundary: int | None = None   # set only for PARTIAL

    def __post_init__(self) -> None:
        if self.kind is VerdictKind.PARTIAL:
            if self.boundary is None or self.boundary < 0:
                raise ValueError(
                    f"PARTIAL verdict needs a boundary >= 0, got {self.boundary}"
                )
        elif self.boundary is not None:
            raise ValueError("WHOLE verdict cannot carry a boundary")

    def toggled_outputs(self, output_count: int) -> range:
        """Indices of the outputs that follow the owner's section."""
        if self.kind is VerdictKind.WHOLE or self.boundary is None:
            return range(output_count)
        return range(min(self.boundary, output_count))


WHOLE = OutputVerdict(VerdictKind.WHOLE)


def find_output_boundary(
    block: OutputBlock,
    owner_level: int,
    config: FoldConfig = DEFAULT_CONFIG,
) -> OutputVerdict:
    """Return the verdict for *block*'s outputs under an owner at *owner_level*."""
    capable = [classify_output(o.data.keys(), config).capable for o in block.outputs]
    if not any(capable):
        return WHOLE

    for j, output in enumerate(block.outputs):
        if not capable[j]:
            continue
        h = parse_rendered_heading(output.rendered)
        if h is not None and h.level <= owner_level:
            return OutputVerdict(VerdictKind.PARTIAL, boundary=j)
    return WHOLE
