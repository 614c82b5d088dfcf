"""Base URL resolution for generated test plans.

The generated plan never hard-codes the target server in its samplers.
Instead it declares four user defined variables (BASE_URL, PROTOCOL,
SERVER_NAME, PORT) and every sampler references ${PROTOCOL}, ${SERVER_NAME}
and ${PORT}. This module computes the values of those variables.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

from swagger2jmeter.core.data_structures import ResolvedBaseUrl

logger = logging.getLogger(__name__)

# JMeter variable references used when a value cannot be resolved
BASE_URL_PLACEHOLDER = "${BASE_URL}"
PROTOCOL_PLACEHOLDER = "${PROTOCOL}"
SERVER_NAME_PLACEHOLDER = "${SERVER_NAME}"
PORT_PLACEHOLDER = "${PORT}"

DEFAULT_PORTS = {"http": 80, "https": 443}


def resolve_base_url(override: Optional[str], doc: Any) -> str:
    """Pick the base URL for a test plan.

    Precedence:
    1. Non-empty override
    2. url of the first entry in "servers" (OpenAPI 3.x)
    3. "host" with the first of "schemes" (default http) and "basePath" (Swagger 2.0)
    4. The ${BASE_URL} placeholder, to be supplied at run time

    Args:
        override: Base URL typed by the user (may be empty or None)
        doc: Parsed Swagger/OpenAPI document

    Returns:
        Base URL string or BASE_URL_PLACEHOLDER

    Example:
        >>> resolve_base_url("", {"host": "api.x.com", "schemes": ["https"], "basePath": "/v1"})
        'https://api.x.com/v1'
    """
    if override:
        return override

    if not isinstance(doc, dict):
        return BASE_URL_PLACEHOLDER

    servers = doc.get("servers")
    if isinstance(servers, list) and servers:
        first = servers[0]
        url = first.get("url") if isinstance(first, dict) else None
        return str(url) if url else BASE_URL_PLACEHOLDER

    host = doc.get("host")
    if host:
        schemes = doc.get("schemes")
        scheme = schemes[0] if isinstance(schemes, list) and schemes else "http"
        base_path = doc.get("basePath") or ""
        return f"{scheme}://{host}{base_path}"

    return BASE_URL_PLACEHOLDER


def split_base_url(base_url: Optional[str]) -> ResolvedBaseUrl:
    """Split a base URL into protocol, host and port.

    A URL is usable when it has both a scheme and a host name. The port is
    the explicit one, else 443 for https and 80 for anything else. Values
    that cannot be parsed (including placeholders such as ${BASE_URL})
    yield the ${PROTOCOL}, ${SERVER_NAME} and ${PORT} placeholders instead,
    so the plan stays valid and can be configured at run time.

    Args:
        base_url: Base URL to split

    Returns:
        ResolvedBaseUrl with string fields

    Example:
        >>> split_base_url("https://api.x.com:8443/v1")
        ResolvedBaseUrl(protocol='https', host='api.x.com', port='8443')
    """
    placeholders = ResolvedBaseUrl(
        protocol=PROTOCOL_PLACEHOLDER,
        host=SERVER_NAME_PLACEHOLDER,
        port=PORT_PLACEHOLDER,
    )

    if not isinstance(base_url, str) or not base_url:
        return placeholders

    try:
        parts = urlsplit(base_url)
        port = parts.port
    except ValueError:
        logger.debug("Base URL %r is not parseable, using placeholders", base_url)
        return placeholders

    if not parts.scheme or not parts.hostname:
        logger.debug("Base URL %r has no scheme or host, using placeholders", base_url)
        return placeholders

    protocol = parts.scheme
    if port is None:
        port = 443 if protocol == "https" else 80

    return ResolvedBaseUrl(protocol=protocol, host=parts.hostname, port=str(port))


def extract_origin(spec_url: Optional[str]) -> str:
    """Return the scheme://host[:port] origin of the URL a document came from.

    Default ports are omitted. Used as the default base URL when a document
    is fetched over HTTP, since most APIs serve their description from the
    same server.

    Args:
        spec_url: URL of the Swagger/OpenAPI document

    Returns:
        Origin string, or "" when the URL cannot be parsed

    Example:
        >>> extract_origin("https://localhost:5000/swagger/v1/swagger.json")
        'https://localhost:5000'
    """
    if not isinstance(spec_url, str) or not spec_url:
        return ""

    try:
        parts = urlsplit(spec_url)
        port = parts.port
    except ValueError:
        return ""

    if not parts.scheme or not parts.hostname:
        return ""

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"

    if port is not None and port != DEFAULT_PORTS.get(parts.scheme):
        return f"{parts.scheme}://{host}:{port}"
    return f"{parts.scheme}://{host}"
