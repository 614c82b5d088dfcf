"""Loader for load plan configuration files.

A plan file is a small YAML document:

    title: Checkout load
    base_url: https://staging.example.com
    threads: 25
    ramp_time: 5
    duration: 300
    headers:
      - key: Authorization
        value: Bearer ${TOKEN}

Every key is optional. "headers" may also be written as a mapping of
header name to value.
"""

from pathlib import Path
from typing import Any

import yaml

from swagger2jmeter.core.data_structures import HeaderEntry, LoadPlanConfig
from swagger2jmeter.exceptions import PlanConfigException

NUMERIC_FIELDS = ["threads", "ramp_time", "duration"]


class PlanConfigLoader:
    """Parse load plan YAML files into LoadPlanConfig."""

    def load(self, config_path: str) -> LoadPlanConfig:
        """Parse a plan configuration file.

        Args:
            config_path: Path to the YAML file

        Returns:
            LoadPlanConfig with defaults for missing keys

        Raises:
            FileNotFoundError: Config file doesn't exist
            PlanConfigException: YAML or field values are invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Plan config file not found: {config_path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PlanConfigException(f"Invalid YAML syntax in {config_path}: {e}")

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise PlanConfigException(
                f"Invalid plan config format in {config_path}: expected dictionary"
            )

        return self.from_dict(data)

    def from_dict(self, data: dict[str, Any]) -> LoadPlanConfig:
        """Build a LoadPlanConfig from an already parsed mapping.

        Args:
            data: Mapping with any of title, base_url, threads, ramp_time,
                duration and headers

        Returns:
            LoadPlanConfig

        Raises:
            PlanConfigException: A numeric field is not a number or headers are malformed
        """
        kwargs: dict[str, Any] = {}

        if data.get("title") is not None:
            kwargs["title"] = str(data["title"])
        if data.get("base_url") is not None:
            kwargs["base_url"] = str(data["base_url"])

        for name in NUMERIC_FIELDS:
            if data.get(name) is None:
                continue
            try:
                kwargs[name] = int(data[name])
            except (TypeError, ValueError):
                raise PlanConfigException(
                    f"Invalid '{name}' in plan config: expected a number, got {data[name]!r}"
                )

        if "headers" in data:
            kwargs["common_headers"] = self.parse_headers(data["headers"])

        return LoadPlanConfig(**kwargs)

    def parse_headers(self, headers_data: Any) -> list[HeaderEntry]:
        """Parse the headers section (list of key/value items or a mapping)."""
        if headers_data is None:
            return []

        if isinstance(headers_data, dict):
            return [
                HeaderEntry(str(key), "" if value is None else str(value))
                for key, value in headers_data.items()
            ]

        if not isinstance(headers_data, list):
            raise PlanConfigException("Invalid 'headers' in plan config: expected list or mapping")

        headers = []
        for item in headers_data:
            if not isinstance(item, dict):
                raise PlanConfigException(
                    f"Invalid header entry in plan config: {item!r} (expected key/value mapping)"
                )
            key = item.get("key")
            value = item.get("value")
            headers.append(
                HeaderEntry(
                    "" if key is None else str(key),
                    "" if value is None else str(value),
                )
            )
        return headers
