#!/usr/bin/env python3
"""
Lookup Example for bdbreader

Opens a BTree database file and shows:
- The decoded metadata header
- The pages visited from the root
- Lookups for the keys given on the command line

Run with: python examples/lookup_example.py path/to/file.db key [key ...]
"""

import os
import sys

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bdbreader import BdbError, KeyNotFoundError, describe_page, open_file  # noqa: E402


console = Console()


def print_header(title: str, subtitle: str = ""):
    """Print a header panel"""
    if subtitle:
        full_title = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
    else:
        full_title = f"[bold blue]{title}[/bold blue]"

    console.print(Panel(full_title, style="bright_blue", box=box.DOUBLE,
                        padding=(1, 2)))


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {message}")


def print_warning(message: str):
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def print_error(message: str):
    console.print(f"[bold red]✗[/bold red] {message}")


def create_metadata_table(metadata) -> Table:
    table = Table(title="Metadata", box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", justify="right")

    table.add_row("magic", f"0x{metadata.magic:06x}")
    table.add_row("version", str(metadata.version))
    table.add_row("page size", str(metadata.page_size))
    table.add_row("last page", str(metadata.last_pgno))
    table.add_row("root page", str(metadata.root))
    table.add_row("keys (cached)", str(metadata.key_count))
    table.add_row("records (cached)", str(metadata.record_count))
    table.add_row("encrypted", "yes" if metadata.is_encrypted else "no")
    return table


def create_page_table(reader, pgnos) -> Table:
    table = Table(title="Pages", box=box.ROUNDED)
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("Level", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Prev/Next", style="dim")

    for pgno in pgnos:
        info = describe_page(reader, pgno)
        table.add_row(str(info.pgno), info.page_type, str(info.level),
                      str(info.entries), f"{info.prev_pgno}/{info.next_pgno}")
    return table


def lookup(reader, key: str):
    try:
        value = reader.get(key)
    except KeyNotFoundError:
        print_warning(f"{key!r}: not found")
        return
    print_success(f"{key!r} = {value!r}")


def main():
    if len(sys.argv) < 2:
        print_error("usage: lookup_example.py FILE [KEY ...]")
        sys.exit(2)

    path, keys = sys.argv[1], sys.argv[2:]
    print_header("bdbreader lookup", path)

    try:
        with open_file(path) as reader:
            console.print(create_metadata_table(reader.metadata))
            console.print()

            for key in keys:
                lookup(reader, key)
            console.print()

            console.print(create_page_table(reader, sorted(
                pgno for pgno in range(1, reader.metadata.page_count)
                if pgno in reader.page_cache)))
    except (BdbError, OSError) as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
