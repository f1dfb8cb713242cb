# state.py
from dataclasses import dataclass
from datetime import date
from typing import Optional

import dateparser
import typer
from rich.console import Console

from reti.STORAGE import legacy_parser
from reti.STORAGE.errors import StorageError
from reti.STORAGE.storage import Storage

console = Console()


@dataclass
class AppState:
    storage_file: str
    save_pretty: bool = False
    editor: Optional[str] = None

    def load_store(self) -> Storage:
        try:
            return Storage.load(self.storage_file)
        except StorageError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)

    def save_store(self, store: Storage):
        try:
            store.save(self.storage_file, self.save_pretty)
        except StorageError as e:
            console.print(f"[bold red]Error:[/bold red] Unable to write file: {e}")
            raise typer.Exit(code=1)


def get_state(ctx: typer.Context) -> AppState:
    return ctx.find_root().obj


def parse_date_arg(date_str: str) -> date:
    # Try the legacy YYYY-MM-DD form first, then natural language
    parsed = legacy_parser.parse_date(date_str)
    if parsed:
        return parsed
    parsed_dt = dateparser.parse(date_str, settings={"PREFER_DATES_FROM": "past"})
    if parsed_dt:
        return parsed_dt.date()
    console.print(f"[bold red]Error:[/bold red] Could not parse date: '{date_str}'")
    raise typer.Exit(code=1)
