# TIMESHEET/timesheet_app.py
import logging
import os
from datetime import datetime
from typing import List, Optional

import typer
from rich.markup import escape

from reti.STORAGE import legacy_parser
from reti.STORAGE.errors import EditorError, ParseError, StorageError
from reti.STORAGE.model import Part
from reti.STORAGE.storage import Storage
from reti.TIMESHEET.editor import build_edit_text, run_editor
from reti.state import console, get_state, parse_date_arg

logger = logging.getLogger(__name__)

add_app = typer.Typer(help="Add times to the store.")
get_app = typer.Typer(help="Read settings of the store.")
set_app = typer.Typer(help="Change settings of the store.")


def print_skipped(failures: List[ParseError]):
    for failure in failures:
        text = escape(failure.text or "")
        console.print(f"[yellow]Ignore line {failure.line}:[/yellow] '{text}' ({failure.message})")


def parse_time_arg(time_str: str, what: str):
    parsed = legacy_parser.parse_time(time_str)
    if parsed is None:
        console.print(f"[bold red]Error:[/bold red] Unable to parse {what} as time: format HH:MM or HHMM")
        raise typer.Exit(code=1)
    return parsed


# --- Top level commands ---

def init_store(
    ctx: typer.Context,
    storage_file: Optional[str] = typer.Argument(None, help="File of the new store (default: configured storage file)."),
    legacy_file: Optional[str] = typer.Option(None, "--legacy-file", "-l", help="Legacy timesheet to import."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing store."),
):
    """Create a new, empty store, optionally filled from a legacy file."""
    state = get_state(ctx)
    if storage_file:
        state.storage_file = storage_file

    if os.path.exists(state.storage_file) and not force:
        console.print(f"[bold red]Error:[/bold red] '{state.storage_file}' already exists. Use --force to overwrite.")
        raise typer.Exit(code=1)

    store = Storage()
    if legacy_file:
        try:
            print_skipped(store.import_legacy_file(legacy_file))
        except StorageError as e:
            console.print(f"[bold red]Error:[/bold red] Unable to import data! {e}")
            raise typer.Exit(code=1)

    state.save_store(store)
    console.print(f"New store has been created: [bold cyan]{state.storage_file}[/bold cyan]")


def import_legacy(
    ctx: typer.Context,
    legacy_file: str = typer.Argument(..., help="Legacy timesheet to import."),
):
    """Import a legacy timesheet.  Lines replace existing days with the same date."""
    state = get_state(ctx)
    store = state.load_store()
    try:
        failures = store.import_legacy_file(legacy_file)
    except StorageError as e:
        console.print(f"[bold red]Error:[/bold red] Unable to import data! {e}")
        raise typer.Exit(code=1)

    print_skipped(failures)
    state.save_store(store)
    console.print(f"Imported '[bold cyan]{legacy_file}[/bold cyan]' "
                  f"({len(failures)} line(s) skipped).")


def remove_days(
    ctx: typer.Context,
    dates: List[str] = typer.Argument(..., help="Dates to remove (YYYY-MM-DD or e.g. 'yesterday')."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
):
    """Remove whole days from the store."""
    state = get_state(ctx)
    store = state.load_store()

    removed = False
    for date_str in dates:
        day_date = parse_date_arg(date_str)
        if not force and not typer.confirm(f"Really remove {day_date} from store?", default=False):
            console.print(f"Skip removal of {day_date}.")
            continue
        if store.remove_day(day_date):
            removed = True
            console.print(f"[green]{day_date} has been removed![/green]")
        else:
            console.print(f"[yellow]{day_date} doesn't exist![/yellow]")

    if not removed:
        console.print("Removal failed, nothing will be saved!")
        raise typer.Exit(code=1)
    state.save_store(store)


def edit_days(
    ctx: typer.Context,
    dates: Optional[List[str]] = typer.Argument(None, help="Dates to edit (default: today)."),
):
    """
    Edit days in your $EDITOR.  Every saved line replaces the day with
    the same date.  Lines starting with '#' are ignored.
    """
    state = get_state(ctx)
    store = state.load_store()

    days = []
    for date_str in dates or []:
        day_date = parse_date_arg(date_str)
        day = store.get_day(day_date.year, day_date.month, day_date.day)
        if day is None:
            console.print(f"[yellow]{day_date} doesn't exist, skipping.[/yellow]")
        else:
            days.append(day)

    logger.debug("Editing %d existing day(s)", len(days))
    today = datetime.now().date()
    text = build_edit_text(days, store.get_day(today.year, today.month, today.day))

    try:
        edited = run_editor(text, state.editor)
    except EditorError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        console.print("Edit canceled, nothing will be saved!")
        raise typer.Exit(code=1)

    print_skipped(store.import_legacy(edited))
    state.save_store(store)


# --- add ---

@add_app.command("part")
def add_part(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="Start time (HH:MM or HHMM)."),
    stop: Optional[str] = typer.Argument(None, help="Stop time; leave out to keep the part open."),
    factor: Optional[float] = typer.Option(None, "--factor", help="Mark the part as a break credited at this factor."),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Day to add to (default: today)."),
):
    """Append a part to a day, creating the day if needed."""
    state = get_state(ctx)
    day_date = parse_date_arg(on) if on else datetime.now().date()

    try:
        part = Part(
            start=parse_time_arg(start, "start"),
            stop=parse_time_arg(stop, "stop") if stop else None,
            factor=factor,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    store = state.load_store()
    store.add_part(day_date, part)
    state.save_store(store)
    console.print(f"Added [bold cyan]{part.as_legacy()}[/bold cyan] to {day_date}.")


@add_app.command("parse")
def add_parse(
    ctx: typer.Context,
    data: List[str] = typer.Argument(..., help="One legacy line, e.g. 2016-04-25 08:00-12:00 13:00-17:00-0.5"),
):
    """Add a day given as one legacy line.  Existing days are left alone."""
    state = get_state(ctx)
    try:
        day = legacy_parser.parse_line(" ".join(data))
    except ParseError as e:
        console.print(f"[bold red]Error:[/bold red] Unable to parse data: {escape(str(e))}")
        raise typer.Exit(code=1)

    store = state.load_store()
    if not store.add_day(day):
        console.print(f"[yellow]{day.key} already exists. Use 'reti edit {day.key}' to change it.[/yellow]")
        console.print("Add did not work, nothing will be saved!")
        raise typer.Exit(code=1)
    state.save_store(store)
    console.print(f"Added [bold cyan]{day.as_legacy()}[/bold cyan]")


# --- get / set ---

@get_app.command("fee")
def get_fee(ctx: typer.Context):
    """Print the hourly fee."""
    store = get_state(ctx).load_store()
    console.print(f"Current fee: {store.get_fee()}")


@set_app.command("fee")
def set_fee(
    ctx: typer.Context,
    value: float = typer.Argument(..., help="Fee per hour."),
):
    """Set the hourly fee used for earnings."""
    state = get_state(ctx)
    store = state.load_store()
    try:
        store.set_fee(value)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        console.print("Setting did not succeed, nothing will be saved!")
        raise typer.Exit(code=1)
    state.save_store(store)
    console.print(f"Fee set to {store.get_fee()}")
