"""Tests for mapping and sequence helpers."""

import pytest
from mimic_core.helpers import map_values
from mimic_core.helpers import pick
from mimic_core.helpers import random_item


class TestPick:
    """Tests for pick function."""

    def test_picks_listed_keys(self) -> None:
        """Only the requested keys are kept."""
        assert pick({"a": 1, "b": 2, "c": 3}, "a", "c") == {"a": 1, "c": 3}

    def test_missing_keys_skipped(self) -> None:
        """Keys absent from the source are ignored."""
        assert pick({"a": 1}, "a", "z") == {"a": 1}

    def test_source_not_modified(self) -> None:
        """Returns a new dict."""
        source = {"a": 1, "b": 2}
        result = pick(source, "a")
        result["a"] = 99
        assert source == {"a": 1, "b": 2}


class TestMapValues:
    """Tests for map_values function."""

    def test_maps_values(self) -> None:
        """Keys stay, values are transformed."""
        assert map_values({"a": 1, "b": 2}, lambda v, k, m: v * 10) == {"a": 10, "b": 20}

    def test_callback_receives_key_and_mapping(self) -> None:
        """The callback gets value, key and the whole mapping."""
        source = {"a": 1, "b": 2}
        result = map_values(source, lambda v, k, m: f"{k}={v}/{len(m)}")
        assert result == {"a": "a=1/2", "b": "b=2/2"}


class TestRandomItem:
    """Tests for random_item function."""

    def test_returns_member(self) -> None:
        """The result is one of the items."""
        items = ["red", "green", "blue"]
        for _ in range(20):
            assert random_item(items) in items

    def test_works_on_tuples(self) -> None:
        """Any sequence is accepted."""
        assert random_item(("only",)) == "only"

    def test_empty_raises(self) -> None:
        """An empty sequence has nothing to pick."""
        with pytest.raises(IndexError):
            random_item([])
