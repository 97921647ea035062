"""Filesystem route discovery for the ``api/`` directory.

Walks ``<static_path>/api`` depth-first and loads every ``.py`` file as
a module. Each file contributes one route whose path mirrors the file's
location relative to ``api/`` with the extension stripped::

    public/api/book.py        -> api/book
    public/api/v2/book.py     -> api/v2/book

The handler is the module's ``handler`` attribute, else ``default``,
else the single public function defined in the module::

    # public/api/v2/book.py
    async def handler(request, state):
        ...
        return json.dumps(book)

Files and directories starting with ``_`` or ``.`` are skipped, as are
non-Python files.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from perch._internal.types import Handler
from perch.errors import HandlerLoadError

logger = logging.getLogger("perch.routing")

# Module attributes checked, in order, for the handler callable
_HANDLER_NAMES = ("handler", "default")


@dataclass(frozen=True, slots=True)
class DiscoveredHandler:
    """A handler file found under the ``api`` directory."""

    route_path: str
    handler: Handler
    source: Path


def discover_handlers(api_dir: str | Path) -> list[DiscoveredHandler]:
    """Walk *api_dir* and load one handler per ``.py`` file.

    A missing directory yields no handlers.

    Raises:
        HandlerLoadError: A file failed to import or exports no handler.
    """
    root = Path(api_dir)
    if not root.is_dir():
        logger.debug("No handler directory at %s", root)
        return []

    found: list[DiscoveredHandler] = []
    _walk_directory(root, url_parts=[], found=found)
    return found


def _walk_directory(directory: Path, *, url_parts: list[str], found: list[DiscoveredHandler]) -> None:
    """Recursively collect handler files, descending into subdirectories first."""
    for item in sorted(directory.iterdir()):
        if item.name.startswith(("_", ".")):
            continue

        if item.is_dir():
            _walk_directory(item, url_parts=[*url_parts, item.name], found=found)
            continue

        if not item.is_file() or item.suffix != ".py":
            logger.debug("Skipping non-handler file %s", item)
            continue

        handler = _load_handler(item, [*url_parts, item.stem])
        route_path = "/".join([*url_parts, item.stem])
        logger.debug("Discovered handler %s -> %s", item, route_path)
        found.append(DiscoveredHandler(route_path=route_path, handler=handler, source=item))


def _load_handler(file: Path, parts: list[str]) -> Handler:
    """Import *file* and return its handler callable."""
    module_name = "_perch_api_" + "_".join(parts)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        raise HandlerLoadError(file, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    # dataclasses and pickle look the defining module up in sys.modules
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise HandlerLoadError(file, f"{type(exc).__name__}: {exc}") from exc

    handler = _find_handler(module)
    if handler is None:
        raise HandlerLoadError(
            file,
            "expected a 'handler' function (or a single public function)",
        )
    return handler


def _find_handler(module: ModuleType) -> Handler | None:
    """Pick the handler callable exported by *module*."""
    for name in _HANDLER_NAMES:
        candidate = getattr(module, name, None)
        if candidate is not None and callable(candidate):
            return candidate

    # Fall back to the only public function defined in the file itself
    local = [
        obj
        for name, obj in vars(module).items()
        if not name.startswith("_")
        and inspect.isfunction(obj)
        and obj.__module__ == module.__name__
    ]
    if len(local) == 1:
        return local[0]
    return None
