import attr
import pytest
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL

from crumbs import Request, Response


def test_request_properties() -> None:
    request = Request("GET", "https://example.com:8443/foo/bar?x=1")
    assert request.url == URL("https://example.com:8443/foo/bar?x=1")
    assert request.host == "example.com"
    assert request.scheme == "https"
    assert request.path == "/foo/bar"


def test_request_without_path() -> None:
    assert Request("GET", "http://example.com").path == "/"


def test_request_relative_url_has_no_host() -> None:
    assert Request("GET", "/relative").host == ""


def test_request_headers_are_read_only() -> None:
    request = Request("GET", "http://example.com/", {"Accept": "*/*"})
    assert isinstance(request.headers, CIMultiDictProxy)
    with pytest.raises(TypeError):
        request.headers["Accept"] = "text/html"  # type: ignore[index]


def test_request_is_frozen() -> None:
    request = Request("GET", "http://example.com/")
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        request.method = "POST"  # type: ignore[misc]


def test_header_line() -> None:
    request = Request(
        "GET", "http://example.com/", [("X-Multi", "a"), ("x-multi", "b")]
    )
    assert request.header_line("X-MULTI") == "a, b"
    assert request.header_line("Missing") == ""


def test_with_header_replaces_all_values() -> None:
    headers = CIMultiDict([("Cookie", "a=1"), ("Cookie", "b=2"), ("Accept", "*/*")])
    request = Request("GET", "http://example.com/", headers)
    new_request = request.with_header("cookie", "c=3")

    assert new_request.headers.getall("Cookie") == ["c=3"]
    assert new_request.headers["Accept"] == "*/*"
    # the original is untouched, and so is the caller's multidict
    assert request.headers.getall("Cookie") == ["a=1", "b=2"]
    assert headers.getall("Cookie") == ["a=1", "b=2"]


def test_response_set_cookie_headers() -> None:
    response = Response(
        200,
        [
            ("Set-Cookie", "a=1"),
            ("Content-Type", "text/plain"),
            ("set-cookie", "b=2; Path=/"),
        ],
    )
    assert response.status == 200
    assert response.set_cookie_headers == ("a=1", "b=2; Path=/")


def test_response_without_cookies() -> None:
    assert Response(204).set_cookie_headers == ()
