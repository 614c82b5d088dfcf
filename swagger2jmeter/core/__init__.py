"""Core modules for swagger2jmeter."""

from swagger2jmeter.core.base_url import extract_origin, resolve_base_url, split_base_url
from swagger2jmeter.core.data_structures import (
    EndpointDescriptor,
    HeaderEntry,
    LoadPlanConfig,
    ResolvedBaseUrl,
    SpecInfo,
)
from swagger2jmeter.core.jmx_generator import JMXGenerator, suggest_filename
from swagger2jmeter.core.openapi_parser import OpenAPIParser, detect_dialect, get_spec_info
from swagger2jmeter.core.plan_config import PlanConfigLoader
from swagger2jmeter.core.selection import group_by_tag, select_endpoints
from swagger2jmeter.core.spec_loader import SpecLoader

__all__ = [
    # translation pipeline
    "OpenAPIParser",
    "JMXGenerator",
    "resolve_base_url",
    "split_base_url",
    "extract_origin",
    "detect_dialect",
    "get_spec_info",
    "suggest_filename",
    # loading and selection
    "SpecLoader",
    "PlanConfigLoader",
    "group_by_tag",
    "select_endpoints",
    # data structures
    "EndpointDescriptor",
    "HeaderEntry",
    "LoadPlanConfig",
    "ResolvedBaseUrl",
    "SpecInfo",
]
