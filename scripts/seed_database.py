#!/usr/bin/env python3
"""
CLI script to migrate the database and seed emission reference data.

Usage:
    # Basic seeding
    python scripts/seed_database.py

    # Clear existing reference data before seeding
    python scripts/seed_database.py --clear

    # Also create a demo organization and admin, and print a bearer token
    python scripts/seed_database.py --demo-admin admin@example.com

    # Use a different data directory
    python scripts/seed_database.py --data-dir path/to/csv/files
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from carbon_ledger.core.config import get_config
from carbon_ledger.core.security import create_access_token
from carbon_ledger.database.base import apply_db_migration, get_db_url, get_engine_kw
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.seed_database import DEFAULT_DATA_DIR, DatabaseSeeder
from carbon_ledger.utils.constants import ConfigFile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create Rich console
console = Console()


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_config(args):
    """Print configuration details."""
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Setting", style="bold yellow")
    config_table.add_column("Value", style="green")

    config_table.add_row("⚙️  Config", args.config)
    config_table.add_row("📁 Data Directory", str(args.data_dir))
    config_table.add_row("🗑️  Clear Existing", "Yes" if args.clear else "No")
    config_table.add_row("👤 Demo Admin", args.demo_admin or "-")

    console.print(config_table)
    console.print()


def print_stats(stats: dict):
    """Print seeding statistics using Rich Table."""
    print_header("SEEDING STATISTICS", "bold green")

    stats_table = Table(show_header=True, box=None, padding=(0, 2))
    stats_table.add_column("Category", style="bold cyan", width=30)
    stats_table.add_column("Created", justify="right", style="bold green")

    stats_table.add_row("🏷️  Emission Categories", str(stats["emission_categories"]))
    stats_table.add_row("📊 Emission Factors", str(stats["emission_factors"]))

    console.print(stats_table)

    if stats.get("errors"):
        console.print()
        console.print(
            Panel(
                f"[yellow]⚠️  {len(stats['errors'])} errors occurred during seeding[/yellow]",
                border_style="yellow",
            )
        )
        for i, error in enumerate(stats["errors"][:5], 1):
            console.print(f"  {i}. [dim]{error}[/dim]")
        if len(stats["errors"]) > 5:
            console.print(f"  [dim]... and {len(stats['errors']) - 5} more[/dim]")

    console.print()


async def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(
        description="Migrate the database and seed emission categories and factors"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing reference data before seeding",
    )
    parser.add_argument(
        "--data-dir",
        default=DEFAULT_DATA_DIR,
        help="Directory containing CSV files (default: carbon_ledger/seed_data)",
    )
    parser.add_argument(
        "--config",
        default=ConfigFile.DEVELOPMENT,
        help="Configuration file name (default: development.toml)",
    )
    parser.add_argument(
        "--demo-admin",
        metavar="EMAIL",
        help="Create a demo organization with this admin and print a bearer token",
    )

    args = parser.parse_args()

    print_header("DATABASE SEEDING", "bold cyan")
    print_config(args)

    try:
        config = get_config(args.config)

        with console.status("[bold cyan]Applying migrations...", spinner="dots"):
            await apply_db_migration(config)

        async_db_url = get_db_url(config)
        Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
        logger.info("Database initialized")

        with console.status("[bold cyan]Seeding database...", spinner="dots") as status:
            async with DatabaseSeeder(data_dir=args.data_dir) as seeder:
                status.update("[bold yellow]Loading emission reference data...")
                stats = await seeder.seed_all(clear_existing=args.clear)

                admin = None
                if args.demo_admin:
                    status.update("[bold yellow]Creating demo admin...")
                    admin = await seeder.seed_demo_admin(
                        email=args.demo_admin,
                        organization_name="Demo Organization",
                        fiscal_id="DEMO-0001",
                    )

        await Database.dispose()
        print_stats(stats)

        if admin is not None:
            token = create_access_token(config, admin.id, minutes=24 * 60)
            console.print(
                Panel(
                    f"[bold]{admin.email}[/bold]\n\n[green]{token}[/green]",
                    title="Bearer token (24h)",
                    border_style="cyan",
                )
            )

        console.print(
            Panel(
                Text("✅ SEEDING COMPLETED SUCCESSFULLY", justify="center"),
                border_style="bold green",
                style="bold green",
            )
        )

    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)

        console.print()
        console.print(
            Panel(
                f"[bold red]❌ SEEDING FAILED[/bold red]\n\n[red]{e!s}[/red]",
                border_style="bold red",
            )
        )
        console.print()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
