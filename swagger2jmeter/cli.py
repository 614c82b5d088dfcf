"""Command-line interface for swagger2jmeter.

This module provides a Click-based CLI for listing the endpoints of a
Swagger/OpenAPI document and generating JMeter JMX test plans from it.
"""

import logging
import sys
from typing import Optional, Tuple

import click
import questionary
from questionary import Style
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from swagger2jmeter import __version__
from swagger2jmeter.core.base_url import extract_origin, resolve_base_url
from swagger2jmeter.core.data_structures import EndpointDescriptor, HeaderEntry, LoadPlanConfig
from swagger2jmeter.core.jmx_generator import JMXGenerator, suggest_filename
from swagger2jmeter.core.openapi_parser import OpenAPIParser, get_spec_info
from swagger2jmeter.core.plan_config import PlanConfigLoader
from swagger2jmeter.core.selection import group_by_tag, select_endpoints
from swagger2jmeter.core.spec_loader import SpecLoader, is_url
from swagger2jmeter.exceptions import EmptySelectionException, Swagger2JMeterException

console = Console()

logger = logging.getLogger(__name__)

# Custom style for the endpoint picker
PICKER_STYLE = Style([
    ("question", "bold"),
    ("answer", "fg:green"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan"),
    ("selected", "fg:green"),
    ("separator", "fg:yellow"),
])


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _parse_header_option(value: str) -> HeaderEntry:
    """Parse a --header value of the form "Name: value"."""
    key, _, header_value = value.partition(":")
    return HeaderEntry(key.strip(), header_value.strip())


def _load_endpoints(source: str) -> tuple[dict, list[EndpointDescriptor]]:
    """Load a document and extract its endpoints, printing progress."""
    console.print(f"[bold]Loading specification:[/bold] {source}")
    doc = SpecLoader().load(source)

    info = get_spec_info(doc)
    endpoints = OpenAPIParser().extract(doc)

    console.print(
        f"[green]✓[/green] Loaded {escape(info.title)} v{escape(info.version)} ({info.dialect})"
    )
    console.print(f"[dim]  Found {len(endpoints)} endpoint(s)[/dim]\n")
    return doc, endpoints


def _prompt_endpoint_selection(endpoints: list[EndpointDescriptor]) -> list[EndpointDescriptor]:
    """Let the user tick endpoints in a checkbox list grouped by tag."""
    choices: list = []
    for tag, items in group_by_tag(endpoints):
        choices.append(questionary.Separator(f"-- {tag} --"))
        for index, endpoint in items:
            label = f"[{endpoint.method}] {endpoint.path}"
            if endpoint.summary:
                label += f"  {endpoint.summary}"
            choices.append(questionary.Choice(label, value=index))

    selected = questionary.checkbox(
        "Select endpoints:",
        choices=choices,
        style=PICKER_STYLE,
    ).ask()

    if selected is None:
        raise KeyboardInterrupt

    if not selected:
        raise EmptySelectionException("No endpoints selected")

    return [endpoints[i] for i in sorted(selected)]


@click.group()
@click.version_option(version=__version__, prog_name="swagger2jmeter")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """swagger2jmeter - Generate JMeter JMX test plans from Swagger/OpenAPI documents.

    Point the tool at a Swagger 2.0 or OpenAPI 3.x JSON/YAML document (URL or
    local file), pick endpoints and load settings, and get a .jmx file.
    """
    _configure_logging(verbose)


@cli.command()
@click.argument("source")
def endpoints(source: str):
    """List the endpoints of a Swagger/OpenAPI document grouped by tag.

    The numbers in the first column can be passed to 'generate --select'.

    Example:
        swagger2jmeter endpoints https://petstore.swagger.io/v2/swagger.json
        swagger2jmeter endpoints ./openapi.yaml
    """
    try:
        _, found = _load_endpoints(source)

        if not found:
            console.print("[yellow]No endpoints found in the document.[/yellow]")
            return

        table = Table(title="Detected Endpoints", show_header=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Tag", style="magenta")
        table.add_column("Method", style="cyan")
        table.add_column("Path", style="green")
        table.add_column("Summary")

        for tag, items in group_by_tag(found):
            for index, endpoint in items:
                table.add_row(
                    str(index + 1),
                    escape(tag),
                    endpoint.method,
                    escape(endpoint.path),
                    escape(str(endpoint.summary or "")),
                )

        console.print(table)
        console.print(f"\n[dim]Next step:[/dim] swagger2jmeter generate {source}")

    except (Swagger2JMeterException, FileNotFoundError) as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@cli.command()
@click.argument("source")
@click.option(
    "--output",
    default=None,
    help="Output JMX file path (default: plan title with spaces replaced, in the current directory)",
    type=click.Path(),
)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="YAML file with plan settings (title, base_url, threads, ramp_time, duration, headers)",
    type=click.Path(exists=True),
)
@click.option("--title", default=None, help="Test plan title (default: Generated Test Plan)")
@click.option(
    "--threads",
    default=None,
    help="Number of virtual users/threads (default: 10)",
    type=click.IntRange(min=0),
)
@click.option(
    "--ramp-time",
    default=None,
    help="Ramp-up period in seconds (default: 1)",
    type=click.IntRange(min=0),
)
@click.option(
    "--duration",
    default=None,
    help="Test duration in seconds (default: 60)",
    type=click.IntRange(min=0),
)
@click.option(
    "--base-url",
    default=None,
    help="Base URL of the API under test (e.g., https://staging.example.com)",
)
@click.option(
    "--spec-base-url",
    is_flag=True,
    help="Resolve the base URL from the document instead of the URL it was fetched from",
)
@click.option(
    "--header",
    "headers",
    multiple=True,
    help='Common header "Name: value" added to every request (repeatable)',
)
@click.option(
    "--no-default-headers",
    is_flag=True,
    help="Drop the default Authorization and Content-Type headers",
)
@click.option(
    "--select",
    "selectors",
    multiple=True,
    help='Endpoint to include: number, "METHOD /path" or "tag:name" (repeatable, default: all)',
)
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    help="Pick endpoints from a checkbox list",
)
def generate(
    source: str,
    output: Optional[str],
    config_path: Optional[str],
    title: Optional[str],
    threads: Optional[int],
    ramp_time: Optional[int],
    duration: Optional[int],
    base_url: Optional[str],
    spec_base_url: bool,
    headers: Tuple[str, ...],
    no_default_headers: bool,
    selectors: Tuple[str, ...],
    interactive: bool,
):
    """Generate a JMeter JMX test plan from a Swagger/OpenAPI document.

    Creates one HTTP sampler per selected endpoint with the common headers
    attached, inside a thread group running for the given duration.

    Example:
        swagger2jmeter generate https://localhost:5000/swagger/v1/swagger.json
        swagger2jmeter generate openapi.yaml --threads 50 --ramp-time 10 --duration 300
        swagger2jmeter generate openapi.yaml --select "GET /users" --select tag:orders
        swagger2jmeter generate openapi.yaml --header "X-Api-Key: ${API_KEY}" -i
        swagger2jmeter generate openapi.yaml --config plan.yaml --output tests/load.jmx
    """
    try:
        doc, found = _load_endpoints(source)

        if not found:
            console.print("[bold red]Error:[/bold red] No endpoints found in the document.")
            sys.exit(1)

        # Settings: defaults < config file < command-line options
        config = PlanConfigLoader().load(config_path) if config_path else LoadPlanConfig()
        if title is not None:
            config.title = title
        if threads is not None:
            config.threads = threads
        if ramp_time is not None:
            config.ramp_time = ramp_time
        if duration is not None:
            config.duration = duration
        if no_default_headers:
            config.common_headers = []
        config.common_headers.extend(_parse_header_option(h) for h in headers)

        override = base_url or config.base_url
        if not override and is_url(source) and not spec_base_url:
            override = extract_origin(source)
        config.base_url = resolve_base_url(override, doc)

        if interactive:
            chosen = _prompt_endpoint_selection(found)
        else:
            chosen = select_endpoints(found, selectors)

        output = output or suggest_filename(config.title)

        console.print(f"[bold]Generating JMX file:[/bold] {output}")
        console.print(f"[dim]  Endpoints: {len(chosen)} of {len(found)}[/dim]")
        console.print(f"[dim]  Threads: {config.threads}[/dim]")
        console.print(f"[dim]  Ramp-up: {config.ramp_time}s[/dim]")
        console.print(f"[dim]  Duration: {config.duration}s[/dim]")
        console.print(f"[dim]  Base URL: {config.base_url}[/dim]\n")

        result = JMXGenerator().write(config, chosen, output)

        panel = Panel(
            f"[bold green]✓ JMX file generated successfully![/bold green]\n\n"
            f"[cyan]File:[/cyan] {result['jmx_path']}\n"
            f"[cyan]Samplers:[/cyan] {result['samplers_created']}\n"
            f"[cyan]Common headers:[/cyan] {result['headers_added']}\n"
            f"[cyan]Configuration:[/cyan] {result['threads']} threads, "
            f"{result['ramp_time']}s ramp-up, {result['duration']}s duration\n\n"
            f"[dim]Next step: Open in JMeter GUI or run headless[/dim]",
            title="Generation Complete",
            border_style="green",
        )
        console.print(panel)

    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(1)
    except (Swagger2JMeterException, FileNotFoundError) as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected error during generation", exc_info=True)
        console.print(f"\n[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


@cli.command()
def mcp():
    """Start MCP Server mode for AI assistant integration.

    Launches the MCP (Model Context Protocol) server that lets MCP clients
    list endpoints and generate JMeter test plans.

    Example:
        swagger2jmeter mcp
    """
    try:
        from swagger2jmeter.mcp_server import run_server

        # stdout carries the MCP protocol
        Console(stderr=True).print(
            Panel(
                "[bold green]Starting MCP Server...[/bold green]\n\n"
                "The server is now running and ready to accept connections.\n\n"
                "[dim]Press Ctrl+C to stop the server[/dim]",
                title="MCP Server",
                border_style="green",
            )
        )

        run_server()

    except KeyboardInterrupt:
        console.print("\n[yellow]MCP Server stopped by user[/yellow]")
    except Exception as e:
        console.print(f"\n[bold red]Error starting MCP server:[/bold red] {e}")
        sys.exit(1)


def main():
    """Entry point for CLI application."""
    cli()


if __name__ == "__main__":
    main()
