"""Engine configuration.

Defaults match what notebook front ends write today; a JSON file can
override any field::

    {
      "marker_key": "toc-nb-collapsed",
      "title_max_length": 45,
      "markdown_mime_types": ["text/markdown", "text/x-markdown"],
      "dom_mime_types": ["text/html", "application/xhtml+xml"],
      "plain_text_mime_type": "text/plain"
    }
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

MARKER_KEY = "toc-nb-collapsed"


@dataclass(frozen=True, slots=True)
class FoldConfig:
    """Configuration shared by the toggler, classifier and outline."""

    marker_key: str = MARKER_KEY
    title_max_length: int = 45
    markdown_mime_types: frozenset[str] = frozenset({"text/markdown", "text/x-markdown"})
    dom_mime_types: frozenset[str] = frozenset({"text/html", "application/xhtml+xml"})
    # Some renderers label duplicate markdown displays as plain text, so
    # plain-text outputs stay heading-capable.
    plain_text_mime_type: str = "text/plain"

    def __post_init__(self) -> None:
        if not self.marker_key:
            raise ValueError("marker_key cannot be empty")
        if self.title_max_length < 1:
            raise ValueError(
                f"title_max_length must be >= 1, got {self.title_max_length}"
            )

    @classmethod
    def from_json(cls, path: Path) -> FoldConfig:
        """Load from a JSON file; absent keys keep their defaults."""
        data = orjson.loads(path.read_bytes())
        if not isinstance(data, dict):
            raise ValueError(f"Config payload must be a JSON object: {path}")
        default = cls()
        return cls(
            marker_key=data.get("marker_key", default.marker_key),
            title_max_length=int(data.get("title_max_length", default.title_max_length)),
            markdown_mime_types=_mime_set(
                data, "markdown_mime_types", default.markdown_mime_types, path
            ),
            dom_mime_types=_mime_set(
                data, "dom_mime_types", default.dom_mime_types, path
            ),
            plain_text_mime_type=data.get(
                "plain_text_mime_type", default.plain_text_mime_type
            ),
        )


def _mime_set(
    data: dict[str, Any],
    key: str,
    default: frozenset[str],
    path: Path,
) -> frozenset[str]:
    """Read a list of mime-type strings; a bare string is rejected."""
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings: {path}")
    return frozenset(value)


DEFAULT_CONFIG = FoldConfig()
