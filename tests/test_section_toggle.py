"""Tests for scripts/section_toggle.py command line entry point."""
from pathlib import Path
from typing import Any

import orjson
import pytest

from scripts.section_toggle import build_parser, main


def _write_nb(path: Path) -> None:
    nb: dict[str, Any] = {
        "nbformat": 4,
        "nbformat_minor": 5,
        "metadata": {},
        "cells": [
            {"cell_type": "markdown", "metadata": {}, "source": "# Title"},
            {"cell_type": "markdown", "metadata": {}, "source": "## Part A"},
            {"cell_type": "raw", "metadata": {}, "source": "a"},
            {"cell_type": "markdown", "metadata": {}, "source": "## Part B"},
            {"cell_type": "raw", "metadata": {}, "source": "b"},
        ],
    }
    path.write_bytes(orjson.dumps(nb))


class TestBuildParser:
    def test_collapse_and_expand_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["--notebook", "x.ipynb", "--cell", "1", "--collapse", "--expand"]
            )


class TestMain:
    def test_list_outline(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "nb.ipynb"
        _write_nb(path)
        assert main(["--notebook", str(path), "--list"]) == 0
        rows = orjson.loads(capsys.readouterr().out)
        assert [(r["level"], r["title"]) for r in rows] == [
            (1, "Title"), (2, "Part A"), (2, "Part B"),
        ]

    def test_collapse_writes_notebook(self, tmp_path: Path) -> None:
        path = tmp_path / "nb.ipynb"
        _write_nb(path)
        assert main(["--notebook", str(path), "--cell", "1", "--collapse"]) == 0
        cells = orjson.loads(path.read_bytes())["cells"]
        assert cells[1]["metadata"] == {"toc-nb-collapsed": True}
        assert cells[2]["metadata"] == {"jupyter": {"source_hidden": True}}
        assert cells[4]["metadata"] == {}

    def test_expand_to_output_path(self, tmp_path: Path) -> None:
        path = tmp_path / "nb.ipynb"
        out = tmp_path / "expanded.ipynb"
        _write_nb(path)
        main(["--notebook", str(path), "--cell", "0", "--collapse"])
        assert main([
            "--notebook", str(path), "--cell", "0", "--expand", "--output", str(out),
        ]) == 0
        expanded = orjson.loads(out.read_bytes())["cells"]
        assert all(c["metadata"] == {} for c in expanded)
        collapsed = orjson.loads(path.read_bytes())["cells"]
        assert collapsed[0]["metadata"] == {"toc-nb-collapsed": True}

    def test_config_marker_key(self, tmp_path: Path) -> None:
        path = tmp_path / "nb.ipynb"
        cfg = tmp_path / "fold.json"
        _write_nb(path)
        cfg.write_bytes(orjson.dumps({"marker_key": "folded"}))
        main(["--notebook", str(path), "--config", str(cfg), "--cell", "3", "--collapse"])
        cells = orjson.loads(path.read_bytes())["cells"]
        assert cells[3]["metadata"] == {"folded": True}

    def test_cell_out_of_range(self, tmp_path: Path) -> None:
        path = tmp_path / "nb.ipynb"
        _write_nb(path)
        assert main(["--notebook", str(path), "--cell", "9", "--collapse"]) == 2

    def test_missing_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "nb.ipynb"
        _write_nb(path)
        assert main(["--notebook", str(path), "--cell", "1"]) == 2
