# STORAGE/model.py
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"


def format_factor(factor: float) -> str:
    # Shortest text that reads back to the same float, 1.0 -> "1"
    text = repr(float(factor))
    if text.endswith(".0"):
        text = text[:-2]
    return text


@dataclass
class Part:
    start: time
    stop: Optional[time] = None
    factor: Optional[float] = None  # None: worked time, otherwise a credited break

    def __post_init__(self):
        # Only hour and minute are recorded
        self.start = self.start.replace(second=0, microsecond=0)
        if self.stop is not None:
            self.stop = self.stop.replace(second=0, microsecond=0)
            if self.stop < self.start:
                raise ValueError(
                    f"stop {self.stop.strftime(TIME_FORMAT)} is before start "
                    f"{self.start.strftime(TIME_FORMAT)}")
        if self.factor is not None:
            if self.stop is None:
                raise ValueError("an open part cannot carry a factor")
            self.factor = float(self.factor)
            if not 0.0 < self.factor <= 1.0:
                raise ValueError(f"factor {self.factor} is not in (0, 1]")

    @property
    def is_open(self) -> bool:
        return self.stop is None

    @property
    def is_break(self) -> bool:
        return self.factor is not None

    @property
    def duration(self) -> timedelta:
        """Length of the span, zero while it is still open."""
        if self.stop is None:
            return timedelta(0)
        return (datetime.combine(date.min, self.stop)
                - datetime.combine(date.min, self.start))

    @property
    def credited(self) -> timedelta:
        if self.factor is None:
            return timedelta(0)
        return self.duration * self.factor

    def as_legacy(self) -> str:
        text = self.start.strftime(TIME_FORMAT)
        if self.stop is None:
            return text
        text = f"{text}-{self.stop.strftime(TIME_FORMAT)}"
        if self.factor is not None:
            text = f"{text}-{format_factor(self.factor)}"
        return text

    def to_dict(self):
        return {
            "start": self.start.strftime(TIME_FORMAT),
            "stop": self.stop.strftime(TIME_FORMAT) if self.stop else None,
            "factor": self.factor,
        }


@dataclass
class Day:
    date: date
    parts: List[Part] = field(default_factory=list)

    @classmethod
    def today(cls) -> "Day":
        return cls(date=datetime.now().date())

    @property
    def key(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    @property
    def worked_duration(self) -> timedelta:
        return sum((p.duration for p in self.parts if not p.is_break), timedelta(0))

    @property
    def credited_break_duration(self) -> timedelta:
        return sum((p.credited for p in self.parts if p.is_break), timedelta(0))

    @property
    def total_duration(self) -> timedelta:
        return sum((p.duration for p in self.parts), timedelta(0))

    def add_part(self, part: Part):
        self.parts.append(part)

    def as_legacy(self) -> str:
        return " ".join([self.key] + [p.as_legacy() for p in self.parts])

    def to_dict(self):
        return {"parts": [p.to_dict() for p in self.parts]}
