"""Read-only name -> values mapping shared by headers and query params."""

from collections.abc import Iterator, Mapping


class MultiValueMap(Mapping[str, str]):
    """Maps a name to its first value; ``get_list`` returns all values.

    Subclasses parse their source into ``(name, value)`` pairs once, in
    ``__init__``, and may fold names (headers are case-insensitive).
    """

    __slots__ = ("_values",)

    def __init__(self, pairs: list[tuple[str, str]]) -> None:
        values: dict[str, list[str]] = {}
        for name, value in pairs:
            values.setdefault(self._fold(name), []).append(value)
        object.__setattr__(self, "_values", values)

    @staticmethod
    def _fold(name: str) -> str:
        return name

    def __getitem__(self, key: str) -> str:
        return self._values[self._fold(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """First value for *key*, or *default*."""
        found = self._values.get(self._fold(key))
        return found[0] if found else default

    def get_list(self, key: str) -> list[str]:
        """Every value sent under *key*, in order."""
        return list(self._values.get(self._fold(key), ()))
