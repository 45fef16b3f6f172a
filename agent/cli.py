"""Command-line interface for the NetCores tool service."""

from __future__ import annotations

import asyncio
import json
import os
import sys
import time

import click

from modules.netcores.client import NetCoresClient
from modules.netcores.dispatcher import Dispatcher
from shared.config import get_settings
from shared.log_config import configure_logging

# Arguments used by ``test-all`` to exercise every tool once.
SMOKE_TEST_CASES = [
    ("netcores_health_check", {}, "System health check"),
    ("netcores_data_summary", {}, "Data availability summary"),
    ("netcores_snapshots", {}, "Available snapshots"),
    ("netcores_scheduler_status", {}, "Scheduler status"),
    ("netcores_asn_trend", {"asn": 15169}, "ASN trend analysis (Google AS15169)"),
    (
        "netcores_multiple_asn_trends",
        {"asns": [15169, 32934]},
        "Multiple ASN trends (Google, Meta)",
    ),
]


def run_async(coro):
    """Run an async function in a new event loop."""
    return asyncio.run(coro)


def _client(ctx: click.Context) -> NetCoresClient:
    return NetCoresClient.from_settings(get_settings(), base_url=ctx.obj["api_url"])


@click.group()
@click.option(
    "--api-url",
    default=None,
    help="NetCores API URL (default: $NETCORES_API_URL or https://netcores.fi.uba.ar)",
)
@click.pass_context
def cli(ctx, api_url):
    """NetCores k-core analysis tools for conversational agents."""
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    configure_logging(get_settings().log_level)


# --- Servers ---


@cli.command("serve-mcp")
@click.pass_context
def serve_mcp(ctx):
    """Serve the tools over MCP on stdin/stdout."""
    from modules.netcores.mcp_server import serve_stdio

    dispatcher = Dispatcher.for_client(_client(ctx))
    run_async(serve_stdio(dispatcher))


@cli.command("serve-http")
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.pass_context
def serve_http(ctx, host, port):
    """Serve the tools as a FastAPI module (/manifest, /execute, /health)."""
    import uvicorn

    if ctx.obj["api_url"]:
        # The app reads its settings at startup.
        os.environ["NETCORES_API_URL"] = ctx.obj["api_url"]
        get_settings.cache_clear()
    uvicorn.run("modules.netcores.main:app", host=host, port=port)


# --- Diagnostics ---


@cli.command("test")
@click.pass_context
def test_connection(ctx):
    """Test the connection to the NetCores API."""
    click.echo("Testing NetCores API connection...")
    report = run_async(_client(ctx).test_connection())

    if report.success:
        click.echo("✅ Connection successful!")
        click.echo(f"   URL: {report.base_url}")
        click.echo(f"   Status: {report.status}")
        click.echo(f"   Version: {report.version}")
        click.echo(f"   Data Status: {report.data_status}")
        return

    click.echo("❌ Connection failed!")
    click.echo(f"   URL: {report.base_url}")
    click.echo(f"   Error: {report.error}")
    sys.exit(1)


@cli.command("tools")
@click.pass_context
def list_tools(ctx):
    """List the available tools."""
    dispatcher = Dispatcher.for_client(_client(ctx))
    for definition in dispatcher.registry:
        click.echo(f"{definition.name:32} {definition.description}")
    click.echo(f"\nTotal: {len(dispatcher.registry)}")


@cli.command("call")
@click.argument("tool_name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object")
@click.pass_context
def call_tool(ctx, tool_name, raw_args):
    """Invoke one tool and print its text."""
    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args")

    dispatcher = Dispatcher.for_client(_client(ctx))
    outcome = run_async(dispatcher.run(tool_name, arguments))
    click.echo(outcome.text)
    if not outcome.success:
        sys.exit(1)


@cli.command("test-all")
@click.pass_context
def test_all(ctx):
    """Run every tool once against the API and report failures."""
    client = _client(ctx)
    dispatcher = Dispatcher.for_client(client)
    click.echo(f"🌐 API URL: {client.base_url}\n")

    passed = failed = 0
    for tool_name, arguments, description in SMOKE_TEST_CASES:
        click.echo(f"📋 {description}")
        outcome = run_async(dispatcher.run(tool_name, arguments))
        summary = outcome.text.replace("\n", " ")
        if len(summary) > 200:
            summary = summary[:200] + "..."
        if outcome.success:
            passed += 1
            click.echo(f"   ✅ {tool_name}: {summary}")
        else:
            failed += 1
            click.echo(f"   {summary}")

    total = passed + failed
    click.echo(f"\nPassed: {passed}  Failed: {failed}  Success rate: {round(passed / total * 100)}%")
    if failed:
        sys.exit(1)


@cli.command("benchmark")
@click.option("--count", default=10, type=click.IntRange(min=1), help="Concurrent health checks")
@click.pass_context
def benchmark(ctx, count):
    """Issue concurrent health checks and report timing."""
    dispatcher = Dispatcher.for_client(_client(ctx))
    outcomes, duration = run_async(_benchmark(dispatcher, count))

    failures = sum(1 for o in outcomes if not o.success)
    average_ms = duration * 1000 / count
    click.echo(f"Completed {count} requests in {duration * 1000:.0f}ms")
    click.echo(f"   Average request time: {average_ms:.1f}ms")
    click.echo(f"   Requests per second: {count / duration if duration else 0:.1f}")
    click.echo(f"   Failures: {failures}")
    if failures:
        sys.exit(1)


async def _benchmark(dispatcher: Dispatcher, count: int):
    started = time.perf_counter()
    outcomes = await asyncio.gather(
        *(dispatcher.run("netcores_health_check", {}) for _ in range(count))
    )
    return outcomes, time.perf_counter() - started


if __name__ == "__main__":
    cli()
