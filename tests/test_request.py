"""Tests for Request."""

import pytest

from httpmsg import HttpMethod, InvalidArgumentError, Request, Uri


class TestRequestMethod:
    """Test method handling."""

    def test_default_method(self):
        """Test requests default to GET."""
        assert Request().method is HttpMethod.GET

    def test_with_method(self):
        """Test methods can be given as enum members or their names."""
        request = Request()
        assert request.with_method("POST").method is HttpMethod.POST
        assert request.with_method(HttpMethod.PATCH).method is HttpMethod.PATCH
        assert request.method is HttpMethod.GET

    def test_unknown_method(self):
        """Test methods outside the enumeration are rejected."""
        for method in ("FETCH", "get", "", None):
            with pytest.raises(InvalidArgumentError):
                Request().with_method(method)

    def test_all_methods(self):
        """Test every enumerated method is accepted."""
        names = ["PUT", "GET", "POST", "HEAD", "PATCH", "TRACE", "DELETE", "OPTIONS", "CONNECT"]
        assert [m.value for m in HttpMethod] == names
        for name in names:
            assert Request(method=name).method.value == name


class TestRequestTarget:
    """Test request-target computation."""

    def test_default_target_without_uri(self):
        """Test the target is '/' without a URI."""
        assert Request().request_target == "/"

    def test_origin_form(self):
        """Test the target defaults to the URI's path and query."""
        request = Request(uri=Uri.parse("http://example.com/search?q=1#frag"))
        assert request.request_target == "/search?q=1"

    def test_empty_path_origin_form(self):
        """Test an empty URI path yields '/'."""
        assert Request(uri=Uri.parse("http://example.com")).request_target == "/"

    def test_explicit_target(self):
        """Test explicit targets are returned verbatim until cleared."""
        request = Request(uri=Uri.parse("http://example.com/a"))
        for target in ("*", "example.com:443", "http://example.com/other"):
            overridden = request.with_request_target(target)
            assert overridden.request_target == target
            assert overridden.with_uri(Uri.parse("http://x/y")).request_target == target
        cleared = request.with_request_target("*").with_request_target(None)
        assert cleared.request_target == "/a"

    def test_invalid_target(self):
        """Test targets with whitespace are rejected."""
        with pytest.raises(InvalidArgumentError):
            Request().with_request_target("/a b")
        with pytest.raises(InvalidArgumentError):
            Request().with_request_target("")


class TestRequestUri:
    """Test with_uri and the Host header policy."""

    def test_with_uri_sets_host(self):
        """Test the Host header follows the new URI by default."""
        request = Request().with_header("Host", ["old.example"])
        updated = request.with_uri(Uri.parse("http://new.example/path"))
        assert updated.get_header("Host") == ("new.example",)
        assert request.get_header("Host") == ("old.example",)

    def test_with_uri_includes_non_default_port(self):
        """Test a non-default port is part of the Host header."""
        updated = Request().with_uri(Uri.parse("https://example.com:8443/"))
        assert updated.get_header_line("host") == "example.com:8443"
        updated = Request().with_uri(Uri.parse("https://example.com:443/"))
        assert updated.get_header_line("host") == "example.com"

    def test_with_uri_without_host_keeps_header(self):
        """Test a URI without host leaves the Host header untouched."""
        request = Request().with_header("Host", ["kept.example"])
        updated = request.with_uri(Uri(path="/relative"))
        assert updated.get_header_line("Host") == "kept.example"
        assert updated.uri.path == "/relative"

    def test_preserve_host_keeps_existing(self):
        """Test preserve_host never overrides a non-empty Host header."""
        request = Request().with_header("Host", ["kept.example"])
        updated = request.with_uri(Uri.parse("http://other.example/"), preserve_host=True)
        assert updated.get_header_line("Host") == "kept.example"
        assert updated.uri.host == "other.example"

    def test_preserve_host_fills_missing(self):
        """Test preserve_host still fills an absent Host header."""
        updated = Request().with_uri(Uri.parse("http://new.example/"), preserve_host=True)
        assert updated.get_header_line("Host") == "new.example"

    def test_preserve_host_fills_empty(self):
        """Test preserve_host replaces an empty Host header."""
        request = Request().with_header("Host", [""])
        updated = request.with_uri(Uri.parse("http://new.example/"), preserve_host=True)
        assert updated.get_header_line("Host") == "new.example"

    def test_preserve_host_without_uri_host(self):
        """Test preserve_host with a host-less URI does not add a header."""
        updated = Request().with_uri(Uri(path="/x"), preserve_host=True)
        assert not updated.has_header("Host")

    def test_host_header_is_first(self):
        """Test a Host header set from the URI is placed first."""
        request = Request().with_header("Accept", ["*/*"])
        updated = request.with_uri(Uri.parse("http://example.com/"))
        assert list(updated.headers) == ["Host", "Accept"]

    def test_host_header_replaces_casing_variant(self):
        """Test the Host header replaces a differently cased variant."""
        request = Request().with_header("host", ["old"])
        updated = request.with_uri(Uri.parse("http://new/"))
        assert list(updated.headers) == ["Host"]

    def test_with_uri_accepts_string(self):
        """Test a URI string is parsed."""
        updated = Request().with_uri("http://example.com/a?b=c")
        assert isinstance(updated.uri, Uri)
        assert updated.request_target == "/a?b=c"

    def test_with_uri_rejects_other_types(self):
        """Test non-URI values are rejected."""
        with pytest.raises(InvalidArgumentError):
            Request().with_uri(42)
        with pytest.raises(InvalidArgumentError):
            Request().with_uri(None)


class TestRequestBuild:
    """Test the Request.build convenience constructor."""

    def test_build(self):
        """Test build parses the URI and derives Host."""
        request = Request.build("POST", "http://example.com:8080/submit", body=b"data")
        assert request.method is HttpMethod.POST
        assert request.get_header_line("Host") == "example.com:8080"
        assert request.request_target == "/submit"
        assert bytes(request.body) == b"data"

    def test_build_keeps_explicit_host(self):
        """Test an explicit Host header wins over the URI."""
        request = Request.build("GET", "http://example.com/", headers={"Host": "proxy.local"})
        assert request.get_header_line("Host") == "proxy.local"

    def test_with_returns_new_instance(self):
        """Test with_* calls leave the source request untouched."""
        request = Request.build("GET", "http://example.com/")
        request.with_method("DELETE").with_header("X-A", ["1"]).with_uri("http://other/")
        assert request.method is HttpMethod.GET
        assert request.uri.host == "example.com"
        assert not request.has_header("X-A")
