"""Swagger/OpenAPI endpoint extraction for JMeter test generation.

This module normalizes Swagger 2.0 and OpenAPI 3.x documents into a flat,
ordered list of EndpointDescriptor objects.

Documents are read loosely: there is no schema validation, and every
optional field falls back to a default so that imperfect third-party
documents still produce as many endpoints as possible.
"""

import logging
from typing import Any

from swagger2jmeter.core.data_structures import EndpointDescriptor, SpecInfo

logger = logging.getLogger(__name__)

DIALECT_OPENAPI = "openapi"
DIALECT_SWAGGER = "swagger"


def detect_dialect(doc: Any) -> str:
    """Detect whether a document is OpenAPI 3.x or Swagger 2.0.

    Anything whose "openapi" field does not start with "3" is treated as
    Swagger, including documents with no version field at all.

    Args:
        doc: Parsed Swagger/OpenAPI document

    Returns:
        DIALECT_OPENAPI or DIALECT_SWAGGER

    Example:
        >>> detect_dialect({"openapi": "3.0.3"})
        'openapi'
        >>> detect_dialect({"swagger": "2.0"})
        'swagger'
    """
    if isinstance(doc, dict):
        version = doc.get("openapi")
        if version is not None and str(version).startswith("3"):
            return DIALECT_OPENAPI
    return DIALECT_SWAGGER


def get_spec_info(doc: Any) -> SpecInfo:
    """Read display metadata (title, version, dialect) from a document.

    Args:
        doc: Parsed Swagger/OpenAPI document

    Returns:
        SpecInfo with defaults for every missing field
    """
    info = doc.get("info") if isinstance(doc, dict) else None
    if not isinstance(info, dict):
        info = {}

    title = info.get("title")
    if title is None and isinstance(doc, dict):
        title = doc.get("swagger")
    version = info.get("version")

    return SpecInfo(
        title=str(title) if title is not None else "OpenAPI",
        version=str(version) if version is not None else "-",
        dialect=detect_dialect(doc),
    )


class OpenAPIParser:
    """Extract endpoint descriptors from Swagger 2.0 and OpenAPI 3.x documents."""

    def extract(self, doc: Any) -> list[EndpointDescriptor]:
        """Extract one descriptor per (path, method) pair of a document.

        Paths are visited in document order, then the keys of each path item
        in document order. Entries whose value is not a mapping are skipped.
        The request body is only carried for OpenAPI 3.x; Swagger 2.0 body
        parameters stay inside the pass-through parameter list.

        Args:
            doc: Parsed Swagger/OpenAPI document (may be None or malformed)

        Returns:
            List of EndpointDescriptor, empty when the document has no paths

        Example:
            >>> parser = OpenAPIParser()
            >>> doc = {"openapi": "3.0.0", "paths": {"/users": {"get": {"summary": "List"}}}}
            >>> [ep.display_name for ep in parser.extract(doc)]
            ['GET /users']
        """
        endpoints: list[EndpointDescriptor] = []

        if not isinstance(doc, dict):
            return endpoints

        paths = doc.get("paths")
        if not isinstance(paths, dict):
            return endpoints

        is_v3 = detect_dialect(doc) == DIALECT_OPENAPI

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                logger.debug("Skipping path %s: path item is not an object", path)
                continue

            for method, operation in path_item.items():
                if not isinstance(operation, dict):
                    continue
                endpoints.append(self._build_descriptor(str(path), str(method), operation, is_v3))

        logger.debug(
            "Extracted %d endpoint(s) from %s document",
            len(endpoints),
            DIALECT_OPENAPI if is_v3 else DIALECT_SWAGGER,
        )
        return endpoints

    def _build_descriptor(
        self, path: str, method: str, operation: dict[str, Any], is_v3: bool
    ) -> EndpointDescriptor:
        """Build a descriptor from one operation object without mutating it."""
        parameters = operation.get("parameters")
        tags = operation.get("tags")

        return EndpointDescriptor(
            path=path,
            method=method.upper(),
            summary=operation.get("summary") or operation.get("operationId"),
            description=operation.get("description"),
            tags=list(tags) if isinstance(tags, list) else [],
            parameters=list(parameters) if isinstance(parameters, list) else [],
            request_body=operation.get("requestBody") if is_v3 else None,
            raw_operation=operation,
        )
