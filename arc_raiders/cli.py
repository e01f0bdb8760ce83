"""
Arc Raiders API — CLI entry point.

Every command follows this pattern:
  1. The root callback loads ``AppConfig``, configures logging and builds ONE
     ``ArcRaidersClient``, stored on the typer context.
  2. The command runs its async work against that client.
  3. Results are printed to stdout as JSON (2-space indent).
  4. Any failure prints ``[ERROR] <message>`` to stderr and exits 1.

Install and run::

    pip install -e .
    arc-raiders --help
    arc-raiders items
    arc-raiders weapons --rarity legendary
    arc-raiders export json --output data.json
    arc-raiders stats
    arc-raiders --browser quests
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer

from arc_raiders.analytics.stats import find_best_weapon, rarity_distribution, weapon_stats
from arc_raiders.client.client import ArcRaidersClient
from arc_raiders.errors import ArcRaidersError
from arc_raiders.reporting.export import (
    export_to_csv,
    export_to_json,
    to_csv_string,
    to_json_string,
)

T = TypeVar("T")

EXPORT_FORMATS = ("json", "csv")

# stats keys are reported under the API's field names
_STAT_WIRE_NAMES = {"fire_rate": "fireRate"}

app = typer.Typer(
    name="arc-raiders",
    help="Arc Raiders game data — items, weapons, quests, ARCs and traders from the MetaForge API.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from arc_raiders.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from arc_raiders.utils.logging import configure_logging
    configure_logging(config.logging)


def _run(client: ArcRaidersClient, work: Callable[[ArcRaidersClient], Awaitable[T]]) -> T:
    """Run ``work(client)`` on a fresh event loop, closing the client after.

    Exits with code 1 on any error.
    """

    async def _main() -> T:
        async with client:
            return await work(client)

    try:
        return asyncio.run(_main())
    except Exception as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _print_json(data: Any) -> None:
    typer.echo(to_json_string(data))


# ── Root callback ─────────────────────────────────────────────────────────────

@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    browser: Optional[bool] = typer.Option(
        None,
        "--browser/--no-browser",
        help="Fetch through a headless browser instead of direct HTTP.",
    ),
) -> None:
    """Build the shared client for the chosen command."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if ctx.obj is not None or ctx.invoked_subcommand == "help":
        return

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ctx.obj = ArcRaidersClient.from_config(config, use_browser=browser)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("items")
def items(ctx: typer.Context) -> None:
    """List all items."""
    _print_json(_run(ctx.obj, lambda c: c.get_items()))


@app.command("weapons")
def weapons(
    ctx: typer.Context,
    rarity: Optional[str] = typer.Option(
        None,
        "--rarity",
        "-r",
        help="Only weapons of this rarity (case-insensitive, e.g. legendary).",
    ),
) -> None:
    """List all weapons."""
    filters = {"rarity": rarity} if rarity else None
    _print_json(_run(ctx.obj, lambda c: c.get_weapons(filters)))


@app.command("quests")
def quests(ctx: typer.Context) -> None:
    """List all quests."""
    _print_json(_run(ctx.obj, lambda c: c.get_quests()))


@app.command("arcs")
def arcs(ctx: typer.Context) -> None:
    """List all ARCs."""
    _print_json(_run(ctx.obj, lambda c: c.get_arcs()))


@app.command("traders")
def traders(ctx: typer.Context) -> None:
    """List all traders and their inventories."""
    _print_json(_run(ctx.obj, lambda c: c.get_traders()))


@app.command("export")
def export(
    ctx: typer.Context,
    fmt: str = typer.Argument(..., metavar="TYPE", help="Export format: json or csv."),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to this file instead of stdout.",
    ),
) -> None:
    """Export all items as JSON or CSV.

    \b
    Without --output the export is printed to stdout.
    CSV columns come from the first item; nested fields become dotted columns.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        typer.echo('[ERROR] Invalid export type. Use "json" or "csv".', err=True)
        raise typer.Exit(code=1)

    all_items = _run(ctx.obj, lambda c: c.get_items())

    try:
        if output:
            out_path = Path(output)
            if fmt == "json":
                export_to_json(all_items, out_path)
            else:
                export_to_csv(all_items, out_path)
            typer.echo(f"Exported {len(all_items)} items to {out_path}")
        elif fmt == "json":
            _print_json(all_items)
        else:
            typer.echo(to_csv_string(all_items).rstrip("\n"))
    except (ArcRaidersError, OSError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Show weapon statistics and the item rarity distribution."""

    async def _fetch(c: ArcRaidersClient):
        return await c.get_weapons(), await c.get_items()

    all_weapons, all_items = _run(ctx.obj, _fetch)
    best = find_best_weapon(all_weapons)

    summary = {
        "weapons": {
            "total": len(all_weapons),
            "stats": {
                _STAT_WIRE_NAMES.get(k, k): v.to_dict()
                for k, v in weapon_stats(all_weapons).items()
            },
            "best": {"name": best.name, "damage": getattr(best, "damage", None)} if best else None,
        },
        "items": {
            "total": len(all_items),
            "rarityDistribution": rarity_distribution(all_items),
        },
    }
    typer.echo(json.dumps(summary, indent=2))


@app.command("help")
def help_(ctx: typer.Context) -> None:
    """Show this help message."""
    typer.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
