"""Shared pytest fixtures for all tests."""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing.

    Yields:
        Path object pointing to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def swagger2_doc() -> dict:
    """Swagger 2.0 document with two tagged paths and one untagged operation."""
    return {
        "swagger": "2.0",
        "info": {"title": "Pet Store", "version": "1.0.5"},
        "host": "petstore.example.com",
        "basePath": "/v2",
        "schemes": ["https", "http"],
        "paths": {
            "/pets": {
                "get": {
                    "tags": ["pets"],
                    "summary": "List pets",
                    "operationId": "listPets",
                    "parameters": [{"name": "limit", "in": "query", "type": "integer"}],
                },
                "post": {
                    "tags": ["pets"],
                    "operationId": "addPet",
                    "parameters": [
                        {"name": "body", "in": "body", "schema": {"type": "object"}}
                    ],
                },
            },
            "/pets/{petId}": {
                "parameters": [{"name": "petId", "in": "path", "required": True}],
                "delete": {"tags": ["pets"], "summary": "Delete a pet"},
            },
            "/health": {
                "get": {"summary": "Health check"},
            },
        },
    }


@pytest.fixture
def openapi3_doc() -> dict:
    """OpenAPI 3.0 document with a server entry and a request body."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Users API", "version": "2.1.0"},
        "servers": [{"url": "https://api.example.com/v1"}],
        "paths": {
            "/users": {
                "get": {"tags": ["users"], "summary": "List users"},
                "post": {
                    "tags": ["users"],
                    "summary": "Create user",
                    "requestBody": {
                        "required": True,
                        "content": {"application/json": {"schema": {"type": "object"}}},
                    },
                },
            },
            "/users/{id}": {
                "get": {"tags": ["users"], "operationId": "getUser"},
            },
            "/orders": {
                "get": {"tags": ["orders"], "summary": "List orders"},
            },
        },
    }


@pytest.fixture
def openapi3_file(temp_dir: Path, openapi3_doc: dict) -> Path:
    """Write the OpenAPI 3.0 document to a JSON file."""
    spec_path = temp_dir / "openapi.json"
    spec_path.write_text(json.dumps(openapi3_doc), encoding="utf-8")
    return spec_path


@pytest.fixture
def swagger2_yaml_file(temp_dir: Path) -> Path:
    """Write a small Swagger 2.0 document to a YAML file."""
    spec_content = """swagger: "2.0"
info:
  title: Inventory API
  version: 0.9.0
host: localhost:8080
basePath: /api
paths:
  /items:
    get:
      tags: [items]
      summary: List items
    put:
      tags: [items]
      summary: Replace items
  /status:
    get:
      summary: Service status
"""
    spec_path = temp_dir / "swagger.yaml"
    spec_path.write_text(spec_content, encoding="utf-8")
    return spec_path


@pytest.fixture
def plan_config_file(temp_dir: Path) -> Path:
    """Write a load plan configuration file."""
    config_content = """title: Nightly Load
base_url: http://staging.example.com:8081
threads: 25
ramp_time: 5
duration: 300
headers:
  - key: X-Api-Key
    value: ${API_KEY}
"""
    config_path = temp_dir / "plan.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path
