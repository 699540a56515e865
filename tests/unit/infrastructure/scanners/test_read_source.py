"""Tests for infrastructure/scanners/base.py."""

from pathlib import Path

import pytest

from conformcheck.domain.exceptions import UnreadableSourceError
from conformcheck.domain.model.enums import DeclarationKind, Visibility
from conformcheck.infrastructure.scanners.base import DeclarationCollector, read_source


class TestReadSource:
    """Tests for read_source()."""

    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "A.java"
        path.write_text("// café\n", encoding="utf-8")
        assert read_source(path) == "// café\n"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(UnreadableSourceError, match="file not found"):
            read_source(tmp_path / "missing.java")

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(UnreadableSourceError, match="is a directory"):
            read_source(tmp_path)

    def test_undecodable(self, tmp_path: Path) -> None:
        path = tmp_path / "A.java"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(UnreadableSourceError, match="encoding error"):
            read_source(path)


class TestDeclarationCollector:
    """Tests for DeclarationCollector."""

    def test_assigns_positions(self) -> None:
        collector = DeclarationCollector(Path("A.java"))
        for name in ("a", "b"):
            collector.add(
                name=name,
                qualified_name=f"A.{name}",
                kind=DeclarationKind.FIELD,
                visibility=Visibility.PRIVATE,
                documented=False,
                features=frozenset(),
                line=1,
                column=0,
            )
        assert [d.position for d in collector.declarations()] == [0, 1]
        assert collector.declarations()[0].location.file == Path("A.java")
