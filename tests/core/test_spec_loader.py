"""Tests for spec loading from URLs and files."""

import json
from pathlib import Path
from unittest.mock import Mock, patch

import httpx
import pytest

from swagger2jmeter.core.spec_loader import SpecLoader, is_url
from swagger2jmeter.exceptions import InvalidSpecException, SpecFetchException


def _response(status_code: int, text: str = "") -> httpx.Response:
    request = httpx.Request("GET", "https://api.example.com/openapi.json")
    return httpx.Response(status_code, text=text, request=request)


class TestIsUrl:
    """Tests for is_url()."""

    @pytest.mark.parametrize(
        "source", ["http://x/openapi.json", "https://x/swagger.json", "HTTPS://X/spec"]
    )
    def test_urls(self, source):
        assert is_url(source) is True

    @pytest.mark.parametrize("source", ["openapi.yaml", "./specs/api.json", "ftp://x/spec"])
    def test_paths(self, source):
        assert is_url(source) is False


class TestSpecLoaderFetch:
    """Tests for SpecLoader.fetch()."""

    @pytest.fixture
    def loader(self) -> SpecLoader:
        """Create a SpecLoader instance for testing."""
        return SpecLoader(timeout=5.0)

    def test_fetch_json(self, loader, openapi3_doc):
        with patch("httpx.get", return_value=_response(200, json.dumps(openapi3_doc))) as get:
            doc = loader.fetch("https://api.example.com/openapi.json")

        assert doc == openapi3_doc
        get.assert_called_once()
        assert get.call_args.kwargs["timeout"] == 5.0
        assert get.call_args.kwargs["follow_redirects"] is True

    def test_fetch_yaml_fallback(self, loader):
        body = "openapi: 3.0.0\npaths:\n  /users:\n    get: {}\n"

        with patch("httpx.get", return_value=_response(200, body)):
            doc = loader.fetch("https://api.example.com/openapi.yaml")

        assert doc["paths"] == {"/users": {"get": {}}}

    def test_non_success_status(self, loader):
        with patch("httpx.get", return_value=_response(404, "missing")):
            with pytest.raises(SpecFetchException, match="404"):
                loader.fetch("https://api.example.com/openapi.json")

    def test_server_error_status(self, loader):
        with patch("httpx.get", return_value=_response(503)):
            with pytest.raises(SpecFetchException, match="Failed to fetch: 503"):
                loader.fetch("https://api.example.com/openapi.json")

    def test_connection_error(self, loader):
        with patch("httpx.get", side_effect=httpx.ConnectError("connection refused")):
            with pytest.raises(SpecFetchException, match="connection refused"):
                loader.fetch("https://api.example.com/openapi.json")

    def test_unparseable_body(self, loader):
        with patch("httpx.get", return_value=_response(200, "key: [unclosed")):
            with pytest.raises(SpecFetchException, match="neither JSON nor YAML"):
                loader.fetch("https://api.example.com/openapi.json")

    def test_load_dispatches_urls_to_fetch(self, loader):
        with patch.object(loader, "fetch", Mock(return_value={"swagger": "2.0"})) as fetch:
            assert loader.load("https://api.example.com/swagger.json") == {"swagger": "2.0"}

        fetch.assert_called_once_with("https://api.example.com/swagger.json")


class TestSpecLoaderFiles:
    """Tests for SpecLoader.load_file()."""

    @pytest.fixture
    def loader(self) -> SpecLoader:
        """Create a SpecLoader instance for testing."""
        return SpecLoader()

    def test_load_json_file(self, loader, openapi3_file: Path, openapi3_doc):
        assert loader.load(str(openapi3_file)) == openapi3_doc

    def test_load_yaml_file(self, loader, swagger2_yaml_file: Path):
        doc = loader.load(str(swagger2_yaml_file))

        assert doc["swagger"] == "2.0"
        assert list(doc["paths"]) == ["/items", "/status"]

    def test_missing_file(self, loader, temp_dir: Path):
        with pytest.raises(FileNotFoundError, match="Spec file not found"):
            loader.load(str(temp_dir / "missing.yaml"))

    def test_unsupported_extension(self, loader, temp_dir: Path):
        spec_path = temp_dir / "openapi.txt"
        spec_path.write_text("{}")

        with pytest.raises(InvalidSpecException, match="Unsupported file format"):
            loader.load(str(spec_path))

    def test_invalid_json(self, loader, temp_dir: Path):
        spec_path = temp_dir / "openapi.json"
        spec_path.write_text("{not json")

        with pytest.raises(InvalidSpecException, match="Invalid syntax"):
            loader.load(str(spec_path))

    def test_invalid_yaml(self, loader, temp_dir: Path):
        spec_path = temp_dir / "openapi.yml"
        spec_path.write_text("paths: [unclosed")

        with pytest.raises(InvalidSpecException, match="Invalid syntax"):
            loader.load(str(spec_path))
