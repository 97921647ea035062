"""Shared state passed to every API handler.

``Server.define_globals()`` sets one ``SharedState`` for the lifetime of
the process; every handler invocation receives the same object by
reference.

Concurrency:
    The server never serializes access. Two handlers updating the same
    key concurrently race exactly as two coroutines sharing a dict do.
    Handlers that need consistent read-modify-write cycles can use
    ``state.lock``; the server itself never acquires it.

Usage::

    server.define_globals({"calls": 0})

    async def handler(request, state):
        async with state.lock:
            state.calls += 1
        return json.dumps({"calls": state.calls})
"""

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

import anyio


class SharedState(MutableMapping[str, Any]):
    """A mutable name -> value mapping with attribute access.

    Wraps the given dict in place (no copy), so changes made by handlers
    are visible to the code that called ``define_globals()`` and vice
    versa.
    """

    __slots__ = ("_data", "_lock")

    def __init__(self, data: MutableMapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_data", data if data is not None else {})
        object.__setattr__(self, "_lock", None)

    @classmethod
    def wrap(cls, mapping: Mapping[str, Any] | None) -> "SharedState":
        """Return *mapping* as a SharedState, wrapping dicts by reference."""
        if isinstance(mapping, SharedState):
            return mapping
        if mapping is None:
            return cls()
        if isinstance(mapping, MutableMapping):
            return cls(mapping)
        return cls(dict(mapping))

    @property
    def lock(self) -> anyio.Lock:
        """Opt-in lock for handlers that coordinate their own updates.

        Created lazily so it binds to the running event loop.
        """
        if self._lock is None:
            object.__setattr__(self, "_lock", anyio.Lock())
        return self._lock

    # -- Mapping protocol --

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"SharedState({self._data!r})"

    # -- Attribute access --

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            msg = f"SharedState has no value {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._data[name]
        except KeyError:
            raise AttributeError(name) from None
