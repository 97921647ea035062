"""Query string parameters, exposed to handlers as ``request.search_params``."""

from urllib.parse import parse_qsl

from perch.http._multi import MultiValueMap


class QueryParams(MultiValueMap):
    """Parsed query string.

    Blank values are kept, so ``?flag`` yields ``{"flag": ""}``.
    """

    __slots__ = ("_raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """The value as int, or *default* when missing or not a number."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw
