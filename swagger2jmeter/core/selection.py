"""Endpoint grouping and selection.

Grouping is for display only (endpoints listed under their first tag).
Selection filters the extracted endpoints down to the ones that get a
sampler in the generated plan.
"""

import logging
from typing import Iterable, Optional

from swagger2jmeter.core.data_structures import EndpointDescriptor
from swagger2jmeter.exceptions import EmptySelectionException, EndpointNotFoundException

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"
TAG_PREFIX = "tag:"


def primary_tag(endpoint: EndpointDescriptor) -> str:
    """Return the tag an endpoint is grouped under."""
    return str(endpoint.tags[0]) if endpoint.tags else DEFAULT_TAG


def group_by_tag(
    endpoints: list[EndpointDescriptor],
) -> list[tuple[str, list[tuple[int, EndpointDescriptor]]]]:
    """Group endpoints by their first tag.

    Groups appear in the order their tag is first seen. Each entry keeps the
    endpoint's index in the full list so a selection made on the grouped
    view can be mapped back.

    Args:
        endpoints: Extracted endpoints

    Returns:
        List of (tag, [(index, endpoint), ...]) pairs

    Example:
        >>> eps = [EndpointDescriptor("/a", "GET", tags=["x"]), EndpointDescriptor("/b", "GET")]
        >>> [(tag, [i for i, _ in items]) for tag, items in group_by_tag(eps)]
        [('x', [0]), ('default', [1])]
    """
    groups: dict[str, list[tuple[int, EndpointDescriptor]]] = {}
    for index, endpoint in enumerate(endpoints):
        groups.setdefault(primary_tag(endpoint), []).append((index, endpoint))
    return list(groups.items())


def select_endpoints(
    endpoints: list[EndpointDescriptor],
    selectors: Optional[Iterable[str]] = None,
) -> list[EndpointDescriptor]:
    """Filter endpoints by selectors.

    Selector forms:
    - "3": 1-based index into the endpoint list
    - "GET /users/{id}": method and path
    - "tag:users": every endpoint carrying the tag ("tag:default" also
      matches untagged endpoints)

    No selectors selects everything. The result keeps document order and
    contains each endpoint once.

    Args:
        endpoints: Extracted endpoints
        selectors: Selector strings

    Returns:
        Selected endpoints

    Raises:
        EndpointNotFoundException: A selector matches no endpoint
        EmptySelectionException: Nothing is selected
    """
    selectors = [s.strip() for s in selectors or [] if s and s.strip()]

    if not selectors:
        chosen = set(range(len(endpoints)))
    else:
        chosen = set()
        for selector in selectors:
            matches = _match_selector(endpoints, selector)
            if not matches:
                raise EndpointNotFoundException(selector)
            chosen.update(matches)

    if not chosen:
        raise EmptySelectionException("No endpoints selected")

    logger.debug("Selected %d of %d endpoint(s)", len(chosen), len(endpoints))
    return [endpoints[i] for i in sorted(chosen)]


def _match_selector(endpoints: list[EndpointDescriptor], selector: str) -> list[int]:
    """Return indexes of the endpoints matched by one selector."""
    if selector.isascii() and selector.isdigit():
        index = int(selector) - 1
        return [index] if 0 <= index < len(endpoints) else []

    if selector.lower().startswith(TAG_PREFIX):
        tag = selector[len(TAG_PREFIX):].strip()
        return [
            i
            for i, ep in enumerate(endpoints)
            if tag in ep.tags or (tag == DEFAULT_TAG and not ep.tags)
        ]

    parts = selector.split(None, 1)
    if len(parts) != 2:
        return []
    method, path = parts[0].upper(), parts[1].strip()
    return [i for i, ep in enumerate(endpoints) if ep.method == method and ep.path == path]
