"""Decide whether a rendered output can carry a heading, from its mime keys."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeGuard

from tocfold.config import DEFAULT_CONFIG, FoldConfig


@dataclass(frozen=True, slots=True)
class MimeCapability:
    capable: bool
    relevant: tuple[str, ...]   # heading-relevant keys, input order


def is_markdown(mime: str, config: FoldConfig = DEFAULT_CONFIG) -> bool:
    return mime in config.markdown_mime_types


def is_dom(mime: str, config: FoldConfig = DEFAULT_CONFIG) -> bool:
    return mime in config.dom_mime_types


def is_heading_relevant(
    mime: object,
    config: FoldConfig = DEFAULT_CONFIG,
) -> TypeGuard[str]:
    """True for markdown, DOM-renderable, or plain-text keys.

    Plain text is included on purpose: duplicate markdown displays can arrive
    labelled ``text/plain``. Non-string keys are never relevant.
    """
    if not isinstance(mime, str):
        return False
    return (
        is_markdown(mime, config)
        or is_dom(mime, config)
        or mime == config.plain_text_mime_type
    )


def classify_output(
    mime_types: Iterable[object],
    config: FoldConfig = DEFAULT_CONFIG,
) -> MimeCapability:
    """Classify one output's mime keys. Unknown keys are ignored."""
    relevant = tuple(m for m in mime_types if is_heading_relevant(m, config))
    return MimeCapability(capable=bool(relevant), relevant=relevant)
