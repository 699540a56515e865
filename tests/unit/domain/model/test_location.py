"""Tests for domain/model/location.py."""

from pathlib import Path

import pytest

from conformcheck.domain.model.location import Location


class TestLocation:
    """Tests for Location value object."""

    def test_str(self) -> None:
        assert str(Location(file=Path("A.java"), line=3, column=4)) == "A.java:3:4"

    def test_zero_line_raises(self) -> None:
        with pytest.raises(ValueError, match="line"):
            Location(file=Path("A.java"), line=0)

    def test_negative_column_raises(self) -> None:
        with pytest.raises(ValueError, match="column"):
            Location(file=Path("A.java"), line=1, column=-1)

    def test_is_frozen(self) -> None:
        location = Location(file=Path("A.java"), line=1)
        with pytest.raises(AttributeError):
            location.line = 2  # type: ignore[misc]
