# REPORT/show_app.py
from datetime import datetime
from typing import List, Optional

import typer

from reti.REPORT.printer import Printer, ShowOptions
from reti.STORAGE.aggregate import iso_week_of
from reti.STORAGE.errors import InvalidQueryError
from reti.state import console, get_state

show_app = typer.Typer(help="Show recorded times per year, month, week or day.")


@show_app.callback()
def show_main(
    ctx: typer.Context,
    days: bool = typer.Option(False, "--days", "-d", help="List the days of every period."),
    worked: bool = typer.Option(False, "--worked", "-w", help="Show worked time (default)."),
    breaks: bool = typer.Option(False, "--breaks", "-b", help="Show credited break time."),
    parts: bool = typer.Option(False, "--parts", "-p", help="Show the recorded parts of each day."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print assumed defaults and longer labels."),
):
    """
    Show worked and break time.  Without a period argument the current one is used.
    """
    ctx.obj = ShowOptions(
        days=days,
        worked=worked or not breaks,
        breaks=breaks,
        parts=parts,
        verbose=verbose,
    )


def _assume(options: ShowOptions, message: str):
    if options.verbose:
        console.print(f"[dim]{message}[/dim]")


@show_app.command("year")
def show_year(
    ctx: typer.Context,
    years: Optional[List[int]] = typer.Argument(None, help="Years to show (default: current year)."),
):
    """Show whole years, broken down by month."""
    options: ShowOptions = ctx.obj
    if not years:
        years = [datetime.now().year]
        _assume(options, f"Assume current year: {years[0]}")

    store = get_state(ctx).load_store()
    found = []
    try:
        for y in years:
            year = store.get_year(y)
            if year is None:
                console.print(f"[yellow]Year {y} not available![/yellow]")
            else:
                found.append(year)
    except InvalidQueryError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    printer = Printer(options, store.get_fee())
    for table in printer.years(found):
        console.print(table)


@show_app.command("month")
def show_month(
    ctx: typer.Context,
    months: Optional[List[int]] = typer.Argument(None, help="Months to show, 1-12 (default: current month)."),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Calendar year (default: current year)."),
):
    """Show calendar months."""
    options: ShowOptions = ctx.obj
    today = datetime.now().date()
    year = year or today.year
    if not months:
        months = [today.month]
        _assume(options, f"Assume current month: {months[0]}")

    store = get_state(ctx).load_store()
    found = []
    try:
        for m in months:
            month = store.get_month(year, m)
            if month is None:
                console.print(f"[yellow]Month {m} not available for year {year}![/yellow]")
            else:
                found.append(month)
    except InvalidQueryError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    if found:
        console.print(Printer(options, store.get_fee()).months(found))


@show_app.command("week")
def show_week(
    ctx: typer.Context,
    weeks: Optional[List[int]] = typer.Argument(None, help="ISO week numbers to show (default: current week)."),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="ISO week-year (default: the one holding today)."),
):
    """
    Show ISO-8601 weeks.  Weeks are keyed by ISO week-year, so the last
    days of December can belong to week 1 of the next year.
    """
    options: ShowOptions = ctx.obj
    current_year, current_week = iso_week_of(datetime.now().date())
    year = year or current_year
    if not weeks:
        weeks = [current_week]
        _assume(options, f"Assume current week: {year}-W{current_week:02}")

    store = get_state(ctx).load_store()
    found = []
    try:
        for w in weeks:
            week = store.get_week(year, w)
            if week is None:
                console.print(f"[yellow]Week {w} not available for year {year}![/yellow]")
            else:
                found.append(week)
    except InvalidQueryError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    if found:
        console.print(Printer(options, store.get_fee()).weeks(found))


@show_app.command("day")
def show_day(
    ctx: typer.Context,
    days: Optional[List[int]] = typer.Argument(None, help="Days of the month to show (default: today)."),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Calendar year (default: current year)."),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month (default: current month)."),
):
    """Show single days."""
    options: ShowOptions = ctx.obj
    today = datetime.now().date()
    year = year or today.year
    month = month or today.month
    if not days:
        days = [today.day]
        _assume(options, f"Assume current day: {days[0]}")

    store = get_state(ctx).load_store()
    found = []
    for d in days:
        day = store.get_day(year, month, d)
        if day is None:
            console.print(f"[yellow]Day {d} not available for month {month} in year {year}![/yellow]")
        else:
            found.append(day)

    if found:
        console.print(Printer(options).days(found))
