"""Route entry frozen dataclass."""

from dataclasses import dataclass
from pathlib import Path

from perch._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Route:
    """A registered API route.

    ``path`` is the normalized key (``"api/v2/book"``). ``source`` is the
    handler file for discovered routes and ``None`` for routes added in
    code.
    """

    path: str
    handler: Handler
    source: Path | None = None

    @property
    def handler_name(self) -> str:
        """Readable handler name for listings and logs."""
        name = getattr(self.handler, "__qualname__", None) or getattr(
            self.handler, "__name__", None
        )
        return name or repr(self.handler)
