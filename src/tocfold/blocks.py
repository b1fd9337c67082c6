"""Block types for the section visibility engine.

A document is a flat sequence of blocks. Each block is one of three closed
variants, decided once by its concrete class:

  HeadingBlock : own text may start with a markdown heading
  OutputBlock  : carries rendered outputs plus its own non-heading source
  OpaqueBlock  : neither; always toggles as a whole

The engine never stores section structure. The only state it reads or writes
on a block is the ``hidden`` flag (the visibility sink) and the block's
``metadata`` mapping (the metadata store holding the collapsed marker).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BlockKind(Enum):
    HEADING_CAPABLE = "heading-capable"
    MULTI_OUTPUT = "multi-output"
    OPAQUE = "opaque"


@dataclass(frozen=True, slots=True)
class Heading:
    """A heading derived on demand from block text or a rendered output."""

    level: int      # 1..6
    title: str


@dataclass(slots=True)
class Output:
    """One rendered output of an OutputBlock.

    ``rendered`` is the markup of the node produced by the external renderer.
    It is only ever read, never produced, by the engine. ``None`` means the
    output has not been rendered.
    """

    data: Mapping[str, Any]
    rendered: str | None = None
    hidden: bool = False


@dataclass(slots=True, eq=False)
class Block(ABC):
    """Base for all block variants. Identity is object identity."""

    block_id: str
    metadata: MutableMapping[str, Any] = field(default_factory=dict[str, Any])
    hidden: bool = False

    @property
    @abstractmethod
    def kind(self) -> BlockKind: ...


@dataclass(slots=True, eq=False)
class HeadingBlock(Block):
    text: str = ""

    @property
    def kind(self) -> BlockKind:
        return BlockKind.HEADING_CAPABLE


@dataclass(slots=True, eq=False)
class OutputBlock(Block):
    source: str = ""
    outputs: list[Output] = field(default_factory=list[Output])

    @property
    def kind(self) -> BlockKind:
        return BlockKind.MULTI_OUTPUT


@dataclass(slots=True, eq=False)
class OpaqueBlock(Block):
    @property
    def kind(self) -> BlockKind:
        return BlockKind.OPAQUE


def index_of(blocks: list[Block], block: Block) -> int:
    """Position of *block* in *blocks* by identity, or -1."""
    for i, candidate in enumerate(blocks):
        if candidate is block:
            return i
    return -1
