# STORAGE/storage.py
import json
import logging
import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from reti.STORAGE import legacy_parser
from reti.STORAGE.aggregate import Month, Week, Year
from reti.STORAGE.errors import (
    ParseError, SnapshotFormatError, SnapshotIOError
)
from reti.STORAGE.model import DATE_FORMAT, TIME_FORMAT, Day, Part

logger = logging.getLogger(__name__)


def _part_from_dict(data: dict) -> Part:
    stop = data.get("stop")
    return Part(
        start=datetime.strptime(data["start"], TIME_FORMAT).time(),
        stop=datetime.strptime(stop, TIME_FORMAT).time() if stop else None,
        factor=data.get("factor"),
    )


class Storage:
    """
    Every recorded day, keyed by date, plus the hourly fee.

    Weeks, months and years are built on demand from the days held here.
    """

    def __init__(self, fee: float = 0.0):
        self._days: Dict[date, Day] = {}
        self._fee = 0.0
        self.set_fee(fee)

    def __len__(self):
        return len(self._days)

    def __contains__(self, day_date: date):
        return day_date in self._days

    def __repr__(self):
        return f"<Storage(days={len(self._days)}, fee={self._fee})>"

    # --- Snapshot ---

    @classmethod
    def from_snapshot(cls, snapshot: dict) -> "Storage":
        if not isinstance(snapshot, dict):
            raise SnapshotFormatError("Snapshot must be a JSON object.")
        try:
            store = cls(fee=float(snapshot.get("fee") or 0.0))
            for key, data in (snapshot.get("days") or {}).items():
                day_date = legacy_parser.parse_date(key)
                if day_date is None:
                    raise SnapshotFormatError(f"Invalid date key: {key!r}")
                parts = [_part_from_dict(p) for p in data.get("parts", [])]
                if not parts:
                    raise SnapshotFormatError(f"Day {key} has no parts.")
                store._days[day_date] = Day(date=day_date, parts=parts)
        except SnapshotFormatError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SnapshotFormatError(f"Malformed snapshot: {e}") from e
        return store

    def to_snapshot(self) -> dict:
        return {
            "fee": self._fee,
            "days": {d.key: d.to_dict() for d in self.days()},
        }

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Storage":
        """Reads a store from `path`.  A missing file gives an empty store."""
        path = Path(path)
        if not path.exists():
            logger.info("No storage file at %s, starting empty", path)
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                snapshot = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(f"{path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise SnapshotFormatError(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise SnapshotIOError(f"Unable to read {path}: {e}") from e
        store = cls.from_snapshot(snapshot)
        logger.debug("Loaded %d days from %s", len(store), path)
        return store

    def save(self, path: Union[str, Path], pretty: bool = False):
        """
        Writes the store to `path`.  The data goes to a temporary file in
        the same directory first, which then replaces `path`, so a failed
        write leaves the previous file untouched.
        """
        path = Path(path)
        directory = path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                    "w", encoding="utf-8", dir=directory,
                    prefix=f".{path.name}.", suffix=".tmp",
                    delete=False) as f:
                tmp_name = f.name
                json.dump(self.to_snapshot(), f, indent=4 if pretty else None)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise SnapshotIOError(f"Unable to write {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
        logger.debug("Saved %d days to %s", len(self), path)

    # --- Fee ---

    def get_fee(self) -> float:
        return self._fee

    def set_fee(self, value: float):
        value = float(value)
        if value < 0:
            raise ValueError("Fee must not be negative.")
        self._fee = value

    # --- Days ---

    def days(self) -> List[Day]:
        return [self._days[k] for k in sorted(self._days)]

    def get_day(self, year: int, month: int, day: int) -> Optional[Day]:
        try:
            return self._days.get(date(year, month, day))
        except ValueError:
            return None

    @staticmethod
    def _check_day(day: Day):
        # A day without parts has no legacy line that parses back
        if not day.parts:
            raise ValueError(f"Day {day.key} has no parts.")

    def add_day(self, day: Day) -> bool:
        """Adds `day` unless its date is taken.  Returns False on collision."""
        self._check_day(day)
        if day.date in self._days:
            logger.debug("Not adding %s, day exists", day.key)
            return False
        self._days[day.date] = day
        return True

    def add_day_force(self, day: Day):
        """Adds `day`, replacing every part of an existing day at that date."""
        self._check_day(day)
        if day.date in self._days:
            logger.debug("Replacing %s", day.key)
        self._days[day.date] = day

    def remove_day(self, day_date: date) -> bool:
        if self._days.pop(day_date, None) is None:
            return False
        logger.debug("Removed %s", day_date.strftime(DATE_FORMAT))
        return True

    def add_part(self, day_date: date, part: Part) -> bool:
        day = self._days.get(day_date)
        if day is None:
            self._days[day_date] = Day(date=day_date, parts=[part])
        else:
            day.add_part(part)
        return True

    # --- Legacy text ---

    def import_legacy(self, text: str) -> List[ParseError]:
        """
        Parses `text` line by line and force-adds every day found.

        Malformed lines are skipped and returned, one error per line.
        """
        result = legacy_parser.parse_text(text)
        for day in result.days:
            self.add_day_force(day)
        for failure in result.failures:
            logger.debug("Skipped: %s", failure)
        logger.info("Imported %d days, skipped %d lines",
                    len(result.days), len(result.failures))
        return result.failures

    def import_legacy_file(self, path: Union[str, Path]) -> List[ParseError]:
        # Undecodable bytes only spoil the line they are on
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            raise SnapshotIOError(f"Unable to read {path}: {e}") from e
        return self.import_legacy(text)

    @staticmethod
    def as_legacy(day: Day) -> str:
        return day.as_legacy()

    # --- Aggregates ---

    def get_week(self, iso_year: int, week: int) -> Optional[Week]:
        found = Week.build(self._days.values(), iso_year, week)
        return found if found else None

    def get_month(self, year: int, month: int) -> Optional[Month]:
        found = Month.build(self._days.values(), year, month)
        return found if found else None

    def get_year(self, year: int) -> Optional[Year]:
        found = Year.build(self._days.values(), year)
        return found if found else None
