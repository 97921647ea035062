"""ASGI callable signatures.

pounce (or the test client) hands the server a scope dict, a ``receive``
callable yielding request body messages, and a ``send`` callable that
takes response messages.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Message: TypeAlias = MutableMapping[str, Any]

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
