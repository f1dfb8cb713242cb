# STORAGE/legacy_parser.py
"""
Parser for the legacy, line oriented timesheet format.

Every non-empty line that does not start with ``#`` describes one day:

    2016-04-25   08:00-12:00  13:00-17:00-0.5   # comment

The first field is the date (``YYYY-MM-DD``).  It is followed by one or
more parts separated by whitespace.  A part is either a closed span
``start-stop``, a closed span with a break factor ``start-stop-factor``,
or a lone ``start`` which leaves the span open.  Times are written as
``HH:MM`` or ``HHMM``.  Everything after a ``#`` is a comment.
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import date, time
from typing import List, Optional

from reti.STORAGE.errors import ParseError
from reti.STORAGE.model import Day, Part

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{2}):?([0-9]{2})")
_FACTOR_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


@dataclass
class ParseResult:
    days: List[Day] = field(default_factory=list)
    failures: List[ParseError] = field(default_factory=list)


def parse_date(text: str) -> Optional[date]:
    match = _DATE_RE.fullmatch(text.strip())
    if not match:
        return None
    try:
        return date(*(int(g) for g in match.groups()))
    except ValueError:
        return None


def parse_time(text: str) -> Optional[time]:
    match = _TIME_RE.fullmatch(text.strip())
    if not match:
        return None
    hour, minute = (int(g) for g in match.groups())
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def parse_factor(text: str) -> Optional[float]:
    if not _FACTOR_RE.fullmatch(text.strip()):
        return None
    value = float(text)
    if not 0.0 < value <= 1.0:
        return None
    return value


def parse_part(token: str) -> Part:
    """Parses ``start``, ``start-stop`` or ``start-stop-factor``."""
    # The factor may carry an exponent sign, so split at most twice
    fields = token.split("-", 2)

    start = parse_time(fields[0])
    if start is None:
        raise ParseError("invalid start time", token=token)

    stop = None
    if len(fields) > 1:
        stop = parse_time(fields[1])
        if stop is None:
            raise ParseError("invalid stop time", token=token)

    factor = None
    if len(fields) > 2:
        factor = parse_factor(fields[2])
        if factor is None:
            raise ParseError("factor must be a number in (0, 1]", token=token)

    try:
        return Part(start=start, stop=stop, factor=factor)
    except ValueError as e:
        raise ParseError(str(e), token=token) from e


def strip_comment(line: str) -> str:
    return line.split(COMMENT_CHAR, 1)[0]


def is_ignored(line: str) -> bool:
    """True for blank lines and lines whose first visible char is ``#``."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_CHAR)


def parse_line(line: str, lineno: Optional[int] = None) -> Day:
    tokens = strip_comment(line).split()
    if not tokens:
        raise ParseError("no date", text=line, line=lineno)

    day_date = parse_date(tokens[0])
    if day_date is None:
        raise ParseError("invalid date, expected YYYY-MM-DD",
                         text=line, token=tokens[0], line=lineno)

    if len(tokens) == 1:
        raise ParseError("no time parts", text=line, line=lineno)

    parts = []
    for token in tokens[1:]:
        try:
            parts.append(parse_part(token))
        except ParseError as e:
            e.text = line
            e.line = lineno
            raise
    return Day(date=day_date, parts=parts)


def parse_text(text: str) -> ParseResult:
    """
    Parses every line of `text`, collecting failures instead of raising.

    A malformed line is skipped as a whole; the lines around it are
    still parsed.
    """
    result = ParseResult()
    for lineno, line in enumerate(text.splitlines(), start=1):
        if is_ignored(line):
            continue
        try:
            result.days.append(parse_line(line, lineno))
        except ParseError as e:
            logger.debug("Skipping line %d: %s", lineno, e)
            result.failures.append(e)
    return result
