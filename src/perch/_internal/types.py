"""Type aliases for user-supplied callables."""

from collections.abc import Callable
from typing import Any, TypeAlias

# An API handler takes (request, state), (request) or nothing, and may be async
Handler: TypeAlias = Callable[..., Any]
