"""Loading of Swagger/OpenAPI documents from URLs and local files.

Documents are returned as parsed, without any structural validation;
the endpoint extractor copes with whatever shape they have.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from swagger2jmeter.exceptions import InvalidSpecException, SpecFetchException

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

ACCEPT_HEADER = "application/json, application/yaml;q=0.9, */*;q=0.8"


def is_url(source: str) -> bool:
    """Check whether a spec source is an http(s) URL rather than a file path."""
    return source.lower().startswith(("http://", "https://"))


class SpecLoader:
    """Fetch or read Swagger/OpenAPI documents."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize spec loader.

        Args:
            timeout: HTTP timeout in seconds
        """
        self.timeout = timeout

    def load(self, source: str) -> Any:
        """Load a document from a URL or a local file path.

        Args:
            source: http(s) URL or path to a .json/.yaml/.yml file

        Returns:
            Parsed document (normally a dict)
        """
        if is_url(source):
            return self.fetch(source)
        return self.load_file(source)

    def fetch(self, url: str) -> Any:
        """Fetch a document over HTTP(S).

        The body is parsed as JSON, falling back to YAML.

        Args:
            url: Document URL

        Returns:
            Parsed document

        Raises:
            SpecFetchException: Connection failure, non-2xx status or unparseable body

        Example:
            >>> loader = SpecLoader()
            >>> doc = loader.fetch("https://petstore.swagger.io/v2/swagger.json")
            >>> doc["swagger"]
            '2.0'
        """
        logger.debug("Fetching spec from %s", url)
        try:
            response = httpx.get(
                url,
                timeout=self.timeout,
                follow_redirects=True,
                headers={"Accept": ACCEPT_HEADER},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SpecFetchException(f"Failed to fetch {url}: {e}") from e

        logger.debug("Received %s from %s", response.status_code, url)
        if not response.is_success:
            raise SpecFetchException(
                f"Failed to fetch: {response.status_code} {response.reason_phrase}"
            )

        try:
            return json.loads(response.text)
        except ValueError:
            pass

        try:
            return yaml.safe_load(response.text)
        except yaml.YAMLError as e:
            raise SpecFetchException(f"Response from {url} is neither JSON nor YAML: {e}") from e

    def load_file(self, spec_path: str) -> Any:
        """Read a document from a local JSON or YAML file.

        Args:
            spec_path: Path to spec file (.json, .yaml or .yml)

        Returns:
            Parsed document

        Raises:
            FileNotFoundError: Spec file doesn't exist
            InvalidSpecException: Unsupported extension or invalid syntax
        """
        spec_file = Path(spec_path)

        if not spec_file.exists():
            raise FileNotFoundError(f"Spec file not found: {spec_path}")

        suffix = spec_file.suffix.lower()
        try:
            if suffix in [".yaml", ".yml"]:
                with open(spec_file, encoding="utf-8") as f:
                    return yaml.safe_load(f)
            elif suffix == ".json":
                with open(spec_file, encoding="utf-8") as f:
                    return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise InvalidSpecException(f"Invalid syntax in {spec_path}: {e}") from e

        raise InvalidSpecException(
            f"Unsupported file format: {spec_file.suffix}. Expected .yaml, .yml, or .json"
        )
