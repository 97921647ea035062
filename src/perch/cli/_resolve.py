"""Server import resolution — resolves ``"module:attribute"`` strings to Server instances.

Shared by ``perch run`` and ``perch routes --app``.
"""

import importlib

from perch.app import Server


def resolve_app(import_string: str) -> Server:
    """Resolve an import string to a perch Server instance.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"server"`` (e.g. ``"devserver"`` resolves
    to ``devserver.server``).

    Factory functions are supported: a callable that is not a Server is
    called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a perch ``Server`` or
            the factory raised.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "server"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Server):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Server):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch.Server instance"
        raise TypeError(msg)

    return obj
