"""Request headers from the ASGI scope, looked up case-insensitively."""

from perch.http._multi import MultiValueMap


class Headers(MultiValueMap):
    """``headers["Content-Type"]`` and ``headers["content-type"]`` agree.

    ASGI header names and values are bytes; both are decoded as latin-1.
    """

    __slots__ = ()

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        super().__init__([(name.decode("latin-1"), value.decode("latin-1")) for name, value in raw])

    @staticmethod
    def _fold(name: str) -> str:
        return name.lower()
