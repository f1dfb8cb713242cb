# REPORT/printer.py
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional, Sequence, Tuple, Union

from rich import box
from rich.table import Table
from rich.text import Text

from reti.STORAGE.aggregate import Month, Period, Week, Year
from reti.STORAGE.model import Day, Part


@dataclass
class ShowOptions:
    days: bool = False
    worked: bool = True
    breaks: bool = False
    parts: bool = False
    verbose: bool = False


def format_duration(duration: timedelta) -> str:
    """HH:MM, hours are not wrapped at 24."""
    total_minutes = int(round(duration.total_seconds() / 60))
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02}:{minutes:02}"


def format_money(amount: float) -> str:
    return f"{amount:.2f}"


def format_part(part: Part) -> Text:
    text = Text(part.as_legacy())
    if part.is_open:
        text.stylize("bold yellow")
    elif part.is_break:
        text.stylize("cyan")
    return text


def week_label(week: Week, verbose: bool = False) -> str:
    label = f"{week.iso_year}-W{week.week:02}"
    if verbose:
        label += f" ({week.first_date:%b %d} - {week.last_date:%b %d})"
    return label


def month_label(month: Month, verbose: bool = False) -> str:
    if verbose:
        return f"{month.name} {month.year}"
    return f"{month.year}-{month.month:02}"


def day_label(day: Day) -> str:
    return day.date.strftime("%a %Y-%m-%d")


class Printer:
    """Builds rich tables for periods and days with the chosen columns."""

    def __init__(self, options: ShowOptions, fee: float = 0.0):
        self.options = options
        self.fee = fee

    @property
    def show_money(self) -> bool:
        return self.options.worked and self.fee > 0

    def _new_table(self, title: str, first_column: str) -> Table:
        table = Table(title=title, show_header=True, header_style="bold magenta",
                      box=box.ROUNDED)
        table.add_column(first_column)
        table.add_column("Days", justify="right")
        if self.options.worked:
            table.add_column("Worked", justify="right", style="green")
        if self.options.breaks:
            table.add_column("Breaks", justify="right", style="cyan")
        if self.show_money:
            table.add_column("Earnings", justify="right", style="bold")
        if self.options.parts:
            table.add_column("Parts")
        return table

    def _row(self, label, count: str, entry: Union[Period, Day], parts=None) -> list:
        row = [label, count]
        if self.options.worked:
            row.append(format_duration(entry.worked_duration))
        if self.options.breaks:
            row.append(format_duration(entry.credited_break_duration))
        if self.show_money:
            hours = entry.worked_duration.total_seconds() / 3600
            row.append(format_money(hours * self.fee))
        if self.options.parts:
            row.append(parts if parts is not None else "")
        return row

    def periods(self, title: str, first_column: str,
                labelled: Sequence[Tuple[str, Period]],
                total: Optional[Period] = None) -> Table:
        table = self._new_table(title, first_column)
        for label, period in labelled:
            table.add_row(*self._row(Text(label, style="bold cyan"),
                                     str(period.day_count), period))
            if self.options.days:
                for day in period.days:
                    parts = Text(" ").join(format_part(p) for p in day.parts)
                    table.add_row(*self._row(f"  {day_label(day)}", "", day, parts))
                table.add_section()
        if total is not None:
            table.add_row(*self._row(Text("Total", style="bold"),
                                     str(total.day_count), total), style="bold blue")
        return table

    def years(self, years: List[Year]) -> List[Table]:
        """One table per year, broken down by month."""
        tables = []
        for year in years:
            months = [(month_label(m, self.options.verbose), m) for m in year.months()]
            tables.append(self.periods(f"Year {year.year}", "Month", months, total=year))
        return tables

    def months(self, months: List[Month]) -> Table:
        labelled = [(month_label(m, self.options.verbose), m) for m in months]
        return self.periods("Months", "Month", labelled, total=_combined(months))

    def weeks(self, weeks: List[Week]) -> Table:
        labelled = [(week_label(w, self.options.verbose), w) for w in weeks]
        return self.periods("Weeks", "Week", labelled, total=_combined(weeks))

    def days(self, days: List[Day]) -> Table:
        table = Table(title="Days", show_header=True, header_style="bold magenta",
                      box=box.ROUNDED)
        table.add_column("Day")
        if self.options.worked:
            table.add_column("Worked", justify="right", style="green")
        if self.options.breaks:
            table.add_column("Breaks", justify="right", style="cyan")
        show_parts = self.options.parts or self.options.verbose
        if show_parts:
            table.add_column("Parts")
        for day in days:
            row = [day_label(day)]
            if self.options.worked:
                row.append(format_duration(day.worked_duration))
            if self.options.breaks:
                row.append(format_duration(day.credited_break_duration))
            if show_parts:
                row.append(Text(" ").join(format_part(p) for p in day.parts))
            table.add_row(*row)
        return table


def _combined(periods: Sequence[Period]) -> Optional[Period]:
    # A total row only makes sense for several periods
    if len(periods) < 2:
        return None
    return Period([d for p in periods for d in p.days])
