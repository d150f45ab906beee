"""Ordered map value.

Maps on the wire are sequences of key/value pairs. Keys may be any value
(including unhashable lists and maps) and may repeat, so a dict cannot hold
every decoded map. Map keeps the pairs exactly as they appeared.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping


class Map:
    """An ordered list of (key, value) pairs.

    Example:
        >>> m = Map([("a", 1), ([1, 2], "list key"), ("a", 2)])
        >>> len(m)
        3
        >>> m.keys()
        ['a', [1, 2], 'a']
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[Any, Any]] = ()) -> None:
        self._pairs: list[tuple[Any, Any]] = []
        for pair in pairs:
            key, value = pair
            self._pairs.append((key, value))

    @classmethod
    def from_dict(cls, mapping: Mapping[Any, Any]) -> Map:
        """Build a Map from a mapping, keeping its iteration order."""
        return cls(mapping.items())

    @property
    def pairs(self) -> list[tuple[Any, Any]]:
        """A copy of the underlying pairs."""
        return list(self._pairs)

    def keys(self) -> list[Any]:
        return [key for key, _ in self._pairs]

    def values(self) -> list[Any]:
        return [value for _, value in self._pairs]

    def to_dict(self) -> dict[Any, Any]:
        """Convert to a dict.

        Later duplicates overwrite earlier ones.

        Raises:
            TypeError: If a key is unhashable
        """
        return dict(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(self._pairs)

    def __getitem__(self, index: int) -> tuple[Any, Any]:
        return self._pairs[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Map({self._pairs!r})"
