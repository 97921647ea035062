"""Tests for perch.http.request and perch.http.response."""

from perch.http.request import Request
from perch.http.response import BAD_REQUEST, INTERNAL_ERROR, Response, error_body


def _scope(**overrides) -> dict:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/book",
        "query_string": b"book_id=1&tag=a&tag=b&flag",
        "headers": [(b"content-type", b"application/json"), (b"X-Custom", b"yes")],
        "http_version": "1.1",
        "server": ("localhost", 8080),
        "client": ("127.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


def _receiver(*messages: dict):
    pending = list(messages)

    async def receive() -> dict:
        if pending:
            return pending.pop(0)
        return {"type": "http.disconnect"}

    return receive


class TestRequest:
    def test_metadata(self) -> None:
        request = Request.from_asgi(_scope(), _receiver())
        assert request.method == "GET"
        assert request.path == "/api/book"
        assert request.client == ("127.0.0.1", 5000)
        assert request.content_type == "application/json"
        assert request.headers["x-custom"] == "yes"

    def test_search_params(self) -> None:
        request = Request.from_asgi(_scope(), _receiver())
        params = request.search_params
        assert params.get("book_id") == "1"
        assert request.query is params
        assert params["tag"] == "a"
        assert params.get_list("tag") == ["a", "b"]
        assert params.get("flag") == ""
        assert params.get("missing", "none") == "none"
        assert params.get_int("book_id") == 1
        assert params.get_int("tag", -1) == -1

    def test_url(self) -> None:
        request = Request.from_asgi(_scope(query_string=b"a=1"), _receiver())
        assert request.url == "/api/book?a=1"
        bare = Request.from_asgi(_scope(query_string=b""), _receiver())
        assert bare.url == "/api/book"

    async def test_body_streamed_and_cached(self) -> None:
        receive = _receiver(
            {"type": "http.request", "body": b'{"a":', "more_body": True},
            {"type": "http.request", "body": b"1}", "more_body": False},
        )
        request = Request.from_asgi(_scope(method="POST"), receive)
        assert await request.body() == b'{"a":1}'
        assert await request.json() == {"a": 1}
        assert await request.text() == '{"a":1}'

    async def test_disconnect_ends_body(self) -> None:
        request = Request.from_asgi(_scope(), _receiver())
        assert await request.body() == b""


class TestResponse:
    def test_error_bodies(self) -> None:
        assert error_body(400, "Bad Request") == '{"error":"400 Bad Request"}'
        assert BAD_REQUEST.status == 400
        assert INTERNAL_ERROR.json() == {"error": "500 Internal Server Error"}

    def test_with_helpers_return_new_objects(self) -> None:
        base = Response("x")
        changed = base.with_status(201).with_headers({"X-A": "1"}).with_content_type("text/plain")
        assert base.status == 200
        assert changed.status == 201
        assert changed.header("x-a") == "1"
        assert changed.header("missing") is None
        assert changed.content_type == "text/plain"

    def test_body_conversions(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"ok").text == "ok"


class TestHeaders:
    def test_case_insensitive_and_repeated(self) -> None:
        from perch.http.headers import Headers

        headers = Headers(((b"Accept", b"text/html"), (b"accept", b"application/json")))
        assert headers["ACCEPT"] == "text/html"
        assert headers.get_list("Accept") == ["text/html", "application/json"]
        assert "accept" in headers
        assert 42 not in headers
        assert len(headers) == 1
        assert headers.get("missing") is None
