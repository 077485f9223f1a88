"""Work-history durations: human-readable length of a position.

Invariants:
    - Counts whole calendar months: (years * 12) + month difference, days ignored
    - Open-ended positions (no end date) run until today
    - Start dates in the future read as "0 months"
"""

from datetime import date


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'}"


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def calculate_duration(start: date, end: date | None = None) -> str:
    """Render the span between two dates as "N years, M months"."""
    months = max(0, months_between(start, end or date.today()))
    years, remaining = divmod(months, 12)
    if years == 0:
        return _plural(remaining, "month")
    if remaining == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')}, {_plural(remaining, 'month')}"
