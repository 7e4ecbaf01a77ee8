#!/usr/bin/env python3
"""
Container Control CLI - talk to a running Container Control API.

Usage:
  python scripts/container_cli.py create alpine -e FOO=bar
  python scripts/container_cli.py status container-alpine-latest-...
  python scripts/container_cli.py list
  python scripts/container_cli.py delete <name-or-id>

The API base URL is read from CONTAINER_API_URL (default http://localhost:8000).
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich import box

console = Console()

API_URL = os.environ.get("CONTAINER_API_URL", "http://localhost:8000")


# ============================================================================
# HTTP Helpers
# ============================================================================

def get_client(base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=300)


def print_error(response: httpx.Response):
    """Print an API error body."""
    try:
        data = response.json()
    except ValueError:
        console.print(f"[red]HTTP {response.status_code}:[/red] {response.text}")
        return

    console.print(f"[red]HTTP {response.status_code}:[/red] {data.get('message')}")
    if data.get("details"):
        console.print(f"[dim]{data['details']}[/dim]")


def parse_env(pairs: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE arguments."""
    env = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{pair}'")
        env[key] = value
    return env


# ============================================================================
# Formatting Helpers
# ============================================================================

def format_state(state: str) -> str:
    colors = {"running": "green", "exited": "yellow", "created": "cyan", "dead": "red"}
    color = colors.get(state, "white")
    return f"[{color}]{state}[/{color}]"


def build_containers_table(containers: List[Dict[str, Any]]) -> Table:
    table = Table(title="Managed Containers", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Image")
    table.add_column("State")
    table.add_column("Status", style="dim")

    for container in containers:
        table.add_row(
            container["id"][:12],
            ", ".join(name.lstrip("/") for name in container["names"]),
            container["image"],
            format_state(container["state"]),
            container["status"],
        )
    return table


# ============================================================================
# CLI Commands
# ============================================================================

async def cmd_create(args):
    """Create and start a container."""
    body = {"imageName": args.image}
    if args.env:
        body["envVariables"] = parse_env(args.env)

    async with get_client(args.url) as client:
        with console.status(f"Starting {args.image}..."):
            response = await client.post("/container", json=body)

    if response.status_code != 201:
        print_error(response)
        return 1

    data = response.json()
    console.print()
    console.print(Panel(
        f"[bold green]{data['message']}[/bold green]\n\n"
        f"[cyan]Name:[/cyan]     {data['containerName']}\n"
        f"[cyan]ID:[/cyan]       {data['containerId']}\n"
        f"[cyan]Location:[/cyan] {response.headers.get('location', '-')}",
        border_style="green"
    ))
    return 0


async def cmd_status(args):
    """Show a container's status."""
    async with get_client(args.url) as client:
        response = await client.get(f"/container/{args.target}")

    if response.status_code != 200:
        print_error(response)
        return 1

    data = response.json()
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Names", ", ".join(data["containerName"]))
    table.add_row("ID", data["containerId"])
    table.add_row("Image", data["image"])
    table.add_row("State", format_state(data["state"]))
    table.add_row("Status", data["status"])

    console.print()
    console.print(table)
    console.print()
    return 0


async def cmd_list(args):
    """List managed containers."""
    async with get_client(args.url) as client:
        response = await client.get("/container")

    if response.status_code != 200:
        print_error(response)
        return 1

    containers = response.json()
    if not containers:
        console.print("[dim]No managed containers[/dim]")
        return 0

    console.print()
    console.print(build_containers_table(containers))
    console.print()
    return 0


async def cmd_delete(args):
    """Force-remove a container."""
    if not args.force:
        if not Confirm.ask(f"Remove container {args.target}?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            return 0

    async with get_client(args.url) as client:
        response = await client.delete(f"/container/{args.target}")

    if response.status_code != 200:
        print_error(response)
        return 1

    console.print(f"[green]{response.json()['message']}[/green]")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Container Control CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s create alpine                      # Pull if needed, create and start
  %(prog)s create alpine:3.18 -e FOO=bar      # With environment variables
  %(prog)s status container-alpine-latest-... # Status by name or id
  %(prog)s list                               # All managed containers
  %(prog)s delete <name-or-id> -f             # Remove without confirmation
"""
    )
    parser.add_argument("--url", default=API_URL, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # create
    create_p = subparsers.add_parser("create", help="Create and start a container")
    create_p.add_argument("image", help="Image reference (name[:tag])")
    create_p.add_argument(
        "-e", "--env", action="append", default=[], metavar="KEY=VALUE",
        help="Environment variable (repeatable)"
    )

    # status
    status_p = subparsers.add_parser("status", help="Show container status")
    status_p.add_argument("target", help="Container name or id")

    # list
    subparsers.add_parser("list", help="List managed containers")

    # delete
    delete_p = subparsers.add_parser("delete", help="Force-remove a container")
    delete_p.add_argument("target", help="Container name or id")
    delete_p.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    args = parser.parse_args()

    handlers = {
        "create": cmd_create,
        "status": cmd_status,
        "list": cmd_list,
        "delete": cmd_delete,
    }

    try:
        exit_code = asyncio.run(handlers[args.command](args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except httpx.HTTPError as e:
        console.print(f"[red]Error:[/red] Cannot reach API at {args.url}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(0)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
