"""Unit tests for UniqueOrderedSet."""

from __future__ import annotations

from versionproxy.utils.collections import UniqueOrderedSet


class TestUniqueOrderedSet:
    def test_empty(self) -> None:
        items: UniqueOrderedSet[int] = UniqueOrderedSet()
        assert items.size() == 0
        assert len(items) == 0
        assert items.values() == []

    def test_same_key_twice_keeps_second_value(self) -> None:
        items: UniqueOrderedSet[str] = UniqueOrderedSet()
        items.add("18.0.0", "first")
        items.add("18.0.0", "second")

        assert items.size() == 1
        assert items.values() == ["second"]

    def test_overwrite_keeps_original_position(self) -> None:
        items: UniqueOrderedSet[int] = UniqueOrderedSet()
        items.add("a", 1)
        items.add("b", 2)
        items.add("a", 3)

        assert items.values() == [3, 2]

    def test_extend_adds_pairs_in_order(self) -> None:
        items: UniqueOrderedSet[int] = UniqueOrderedSet()
        items.extend([("x", 1), ("y", 2), ("x", 5)])

        assert items.values() == [5, 2]
        assert "x" in items
        assert "z" not in items

    def test_sort_returns_new_list_and_leaves_storage(self) -> None:
        items: UniqueOrderedSet[int] = UniqueOrderedSet()
        for value in (3, 1, 2):
            items.add(str(value), value)

        ordered = items.sort(lambda a, b: a - b)

        assert ordered == [1, 2, 3]
        assert items.values() == [3, 1, 2]

    def test_iteration_yields_values(self) -> None:
        items: UniqueOrderedSet[str] = UniqueOrderedSet()
        items.add("k1", "v1")
        items.add("k2", "v2")
        assert list(items) == ["v1", "v2"]
