"""MCP Server for swagger2jmeter.

This module provides a Model Context Protocol (MCP) server that exposes
endpoint listing and JMX generation to AI assistants and other MCP clients.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from swagger2jmeter.core.base_url import extract_origin, resolve_base_url
from swagger2jmeter.core.jmx_generator import JMXGenerator, suggest_filename
from swagger2jmeter.core.openapi_parser import OpenAPIParser, get_spec_info
from swagger2jmeter.core.plan_config import PlanConfigLoader
from swagger2jmeter.core.selection import primary_tag, select_endpoints
from swagger2jmeter.core.spec_loader import SpecLoader, is_url
from swagger2jmeter.exceptions import Swagger2JMeterException

logger = logging.getLogger(__name__)

# Initialize MCP Server
app = Server("swagger2jmeter")


@app.list_tools()
async def list_tools() -> List[Tool]:
    """List available MCP tools.

    Returns:
        List of available tools with their schemas
    """
    return [
        Tool(
            name="list_endpoints",
            description=(
                "List the endpoints of a Swagger 2.0 or OpenAPI 3.x document. "
                "Accepts an http(s) URL or a local JSON/YAML file. Returns the API "
                "title, version, dialect and every endpoint with its method, path, "
                "summary and tag. Use the returned numbers or 'METHOD /path' values "
                "as the endpoints argument of generate_jmx_from_swagger."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "URL or file path of the Swagger/OpenAPI document",
                    },
                },
                "required": ["source"],
            },
        ),
        Tool(
            name="generate_jmx_from_swagger",
            description=(
                "Generate a JMeter JMX test plan from a Swagger/OpenAPI document. "
                "Creates one HTTP sampler per endpoint inside a thread group with "
                "the given load settings and common headers. When the document is "
                "fetched from a URL and no base_url is given, requests target that "
                "URL's origin."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "URL or file path of the Swagger/OpenAPI document",
                    },
                    "output_path": {
                        "type": "string",
                        "description": "Output path for the JMX file (default: title-based name)",
                    },
                    "config_path": {
                        "type": "string",
                        "description": "YAML plan config file (values below override it)",
                    },
                    "title": {
                        "type": "string",
                        "description": "Test plan title",
                        "default": "Generated Test Plan",
                    },
                    "threads": {
                        "type": "integer",
                        "description": "Number of virtual users/threads",
                        "default": 10,
                        "minimum": 0,
                    },
                    "ramp_time": {
                        "type": "integer",
                        "description": "Ramp-up period in seconds",
                        "default": 1,
                        "minimum": 0,
                    },
                    "duration": {
                        "type": "integer",
                        "description": "Test duration in seconds",
                        "default": 60,
                        "minimum": 0,
                    },
                    "base_url": {
                        "type": "string",
                        "description": "Base URL of the API under test (e.g., http://localhost:8080)",
                    },
                    "use_spec_base_url": {
                        "type": "boolean",
                        "description": "Resolve the base URL from the document even for URL sources",
                        "default": False,
                    },
                    "headers": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "key": {"type": "string"},
                                "value": {"type": "string"},
                            },
                        },
                        "description": "Common headers (replaces the default Authorization/Content-Type pair)",
                    },
                    "endpoints": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": (
                            "Endpoints to include: number, 'METHOD /path' or 'tag:name' "
                            "(default: all)"
                        ),
                    },
                },
                "required": ["source"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> List[TextContent]:
    """Handle tool calls from MCP clients.

    Args:
        name: Name of the tool to call
        arguments: Tool arguments as dictionary

    Returns:
        List of TextContent with tool results

    Raises:
        ValueError: If tool name is unknown
    """
    if name == "list_endpoints":
        return await _list_endpoints(arguments)
    elif name == "generate_jmx_from_swagger":
        return await _generate_jmx(arguments)
    else:
        raise ValueError(f"Unknown tool: {name}")


def _json_response(payload: Dict[str, Any]) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2, default=str))]


def _error_response(e: Exception) -> List[TextContent]:
    return _json_response({"success": False, "error": str(e), "error_type": type(e).__name__})


async def _list_endpoints(arguments: Dict[str, Any]) -> List[TextContent]:
    """List the endpoints of a document.

    Args:
        arguments: Dictionary with source

    Returns:
        List with single TextContent containing the endpoint list
    """
    try:
        source = arguments.get("source")
        if not source:
            raise ValueError("source is required")

        # Fetching blocks, keep it off the event loop
        doc = await asyncio.to_thread(SpecLoader().load, source)
        info = get_spec_info(doc)
        found = OpenAPIParser().extract(doc)

        response = {
            "success": True,
            "api_title": info.title,
            "api_version": info.version,
            "dialect": info.dialect,
            "endpoint_count": len(found),
            "endpoints": [
                {
                    "number": index + 1,
                    "method": endpoint.method,
                    "path": endpoint.path,
                    "summary": endpoint.summary,
                    "tag": primary_tag(endpoint),
                }
                for index, endpoint in enumerate(found)
            ],
        }
        return _json_response(response)

    except (Swagger2JMeterException, OSError, ValueError) as e:
        return _error_response(e)


async def _generate_jmx(arguments: Dict[str, Any]) -> List[TextContent]:
    """Generate a JMX file from a Swagger/OpenAPI document.

    Args:
        arguments: Dictionary with generation parameters

    Returns:
        List with single TextContent containing generation results
    """
    try:
        source = arguments.get("source")
        if not source:
            raise ValueError("source is required")

        doc = await asyncio.to_thread(SpecLoader().load, source)
        found = OpenAPIParser().extract(doc)
        if not found:
            raise ValueError("No endpoints found in the document")

        loader = PlanConfigLoader()
        config_path = arguments.get("config_path")
        config = loader.load(config_path) if config_path else loader.from_dict({})

        if arguments.get("title") is not None:
            config.title = str(arguments["title"])
        for field in ("threads", "ramp_time", "duration"):
            if arguments.get(field) is not None:
                setattr(config, field, int(arguments[field]))
        if arguments.get("headers") is not None:
            config.common_headers = loader.parse_headers(arguments["headers"])

        override = arguments.get("base_url") or config.base_url
        if not override and is_url(source) and not arguments.get("use_spec_base_url"):
            override = extract_origin(source)
        config.base_url = resolve_base_url(override, doc)
        logger.debug("Resolved base URL: %s", config.base_url)

        chosen = select_endpoints(found, arguments.get("endpoints"))
        output_path = arguments.get("output_path") or suggest_filename(config.title)

        result = JMXGenerator().write(config, chosen, output_path)
        result["base_url"] = config.base_url
        result["endpoints"] = [endpoint.display_name for endpoint in chosen]
        result["next_steps"] = [
            "Open the JMX file in JMeter GUI to review it",
            f"Run the test using: jmeter -n -t {output_path} -l results.jtl",
        ]
        return _json_response(result)

    except (Swagger2JMeterException, OSError, TypeError, ValueError) as e:
        return _error_response(e)


async def main() -> None:
    """Main entry point for MCP server.

    Starts the MCP server using stdio transport for communication
    with MCP clients.
    """
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run_server() -> None:
    """Synchronous wrapper to run the MCP server.

    This is called from the CLI mcp command.
    """
    asyncio.run(main())


if __name__ == "__main__":
    run_server()
