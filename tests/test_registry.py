"""
Tests for the RubyGems registry adapter — urlopen is patched, no network.
"""

import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

from addgem.adapters.mock import MockRegistry
from addgem.adapters.registry.rubygems import RubyGemsRegistry
from addgem.core.models.gem import GemInfo, GemNotFound, RegistryError

_URLOPEN = "addgem.adapters.registry.rubygems.urllib.request.urlopen"


def _response(payload) -> MagicMock:
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    resp = MagicMock()
    resp.__enter__.return_value.read.return_value = body
    return resp


def _http_error(code: int, reason: str) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(
        "https://rubygems.org/api/v1/gems/x.json", code, reason, hdrs=None, fp=io.BytesIO(b""),
    )


class TestRubyGemsLookup:
    def test_found(self):
        with patch(_URLOPEN, return_value=_response(
            {"name": "nokogiri", "description": "HTML parser", "downloads": 1},
        )):
            result = RubyGemsRegistry().lookup("nokogiri")
        assert result == GemInfo(name="nokogiri", description="HTML parser")

    def test_falls_back_to_info(self):
        with patch(_URLOPEN, return_value=_response(
            {"name": "rack", "info": "Rack provides a minimal,\n  modular interface"},
        )):
            result = RubyGemsRegistry().lookup("rack")
        assert result.description == "Rack provides a minimal, modular interface"

    def test_missing_description(self):
        with patch(_URLOPEN, return_value=_response({"name": "puma"})):
            result = RubyGemsRegistry().lookup("puma")
        assert isinstance(result, GemInfo)
        assert result.description is None

    def test_not_found(self):
        with patch(_URLOPEN, side_effect=_http_error(404, "Not Found")):
            result = RubyGemsRegistry().lookup("ghostgem")
        assert result == GemNotFound(name="ghostgem")
        assert "ghostgem" in result.message

    def test_http_error(self):
        with patch(_URLOPEN, side_effect=_http_error(500, "Internal Server Error")):
            result = RubyGemsRegistry().lookup("rails")
        assert isinstance(result, RegistryError)
        assert result.status == 500
        assert result.reason == "Internal Server Error"
        assert result.message == "500 - Internal Server Error"

    def test_connection_error(self):
        with patch(_URLOPEN, side_effect=urllib.error.URLError("Name or service not known")):
            result = RubyGemsRegistry().lookup("rails")
        assert isinstance(result, RegistryError)
        assert result.status is None
        assert "Name or service not known" in result.message

    def test_socket_error(self):
        with patch(_URLOPEN, side_effect=ConnectionResetError("reset by peer")):
            result = RubyGemsRegistry().lookup("rails")
        assert isinstance(result, RegistryError)
        assert "reset by peer" in result.message

    def test_invalid_json(self):
        with patch(_URLOPEN, return_value=_response(b"<html>oops</html>")):
            result = RubyGemsRegistry().lookup("rails")
        assert isinstance(result, RegistryError)
        assert "Invalid registry response" in result.message

    def test_body_not_utf8(self):
        with patch(_URLOPEN, return_value=_response(b'{"name": "x", "description": "\xff"}')):
            result = RubyGemsRegistry().lookup("x")
        assert isinstance(result, RegistryError)
        assert "Invalid registry response" in result.message

    def test_url_without_scheme(self):
        with patch(_URLOPEN) as urlopen:
            result = RubyGemsRegistry("rubygems.org/api").lookup("puma")
        assert isinstance(result, RegistryError)
        assert "Invalid registry URL" in result.message
        assert urlopen.call_count == 0

    def test_json_without_name(self):
        with patch(_URLOPEN, return_value=_response({"description": "nameless"})):
            result = RubyGemsRegistry().lookup("rails")
        assert isinstance(result, RegistryError)

    def test_one_request_per_lookup(self):
        with patch(_URLOPEN, return_value=_response({"name": "rails"})) as urlopen:
            RubyGemsRegistry().lookup("rails")
        assert urlopen.call_count == 1
        request = urlopen.call_args.args[0]
        assert request.full_url == "https://rubygems.org/api/v1/gems/rails.json"
        assert request.get_method() == "GET"

    def test_no_timeout_by_default(self):
        with patch(_URLOPEN, return_value=_response({"name": "rails"})) as urlopen:
            RubyGemsRegistry().lookup("rails")
        assert "timeout" not in urlopen.call_args.kwargs

    def test_configured_timeout(self):
        with patch(_URLOPEN, return_value=_response({"name": "rails"})) as urlopen:
            RubyGemsRegistry(timeout=5).lookup("rails")
        assert urlopen.call_args.kwargs["timeout"] == 5


class TestUrlFor:
    def test_custom_base_url(self):
        registry = RubyGemsRegistry("https://gems.example.com/api/v1/gems/")
        assert registry.url_for("pg") == "https://gems.example.com/api/v1/gems/pg.json"

    def test_name_is_quoted(self):
        assert RubyGemsRegistry().url_for("a/b").endswith("/a%2Fb.json")


class TestMockRegistry:
    def test_known_and_unknown(self):
        mock = MockRegistry({"nokogiri": "HTML parser"})
        assert mock.lookup("nokogiri").description == "HTML parser"
        assert isinstance(mock.lookup("ghostgem"), GemNotFound)
        assert mock.call_log == ["nokogiri", "ghostgem"]

    def test_set_error(self):
        mock = MockRegistry()
        mock.set_error("rails", "boom", status=503, reason="Service Unavailable")
        result = mock.lookup("rails")
        assert isinstance(result, RegistryError)
        assert result.status == 503

    def test_reset(self):
        mock = MockRegistry({"pg": None})
        mock.lookup("pg")
        mock.reset()
        assert mock.call_count == 0
        assert isinstance(mock.lookup("pg"), GemInfo)
