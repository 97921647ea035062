"""Invoke helpers — call sync or async handlers uniformly.

API handlers can be ``def`` or ``async def`` and may declare zero, one
(request) or two (request, state) parameters. Everything that calls a
user-provided handler goes through here so the sync/async check and the
signature check live in exactly one place.

Usage::

    from perch._internal.invoke import invoke, invoke_handler

    result = await invoke(func, *args)
    result = await invoke_handler(handler, request, state)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def accepted_positional(handler: Any) -> int:
    """Number of positional arguments *handler* accepts (``*args`` counts as 2)."""
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get the full call.
        return 2

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


async def invoke_handler(handler: Any, request: Any, state: Any) -> Any:
    """Call an API handler with as many of ``(request, state)`` as it declares."""
    accepted = accepted_positional(handler)
    if accepted >= 2:
        return await invoke(handler, request, state)
    if accepted == 1:
        return await invoke(handler, request)
    return await invoke(handler)
