"""Jinja2 filters for XHTML template rendering.

These filters are used in the templates under resources/templates to
format issue dates and labels.
"""

import re
from datetime import date, datetime

from .titles import strip_tags

GERMAN_NAMES = {
    "January": "Januar",
    "February": "Februar",
    "March": "März",
    "May": "Mai",
    "June": "Juni",
    "July": "Juli",
    "October": "Oktober",
    "December": "Dezember",
    "Monday": "Montag",
    "Tuesday": "Dienstag",
    "Wednesday": "Mittwoch",
    "Thursday": "Donnerstag",
    "Friday": "Freitag",
    "Saturday": "Samstag",
    "Sunday": "Sonntag",
    "Mar": "Mär",
    "Oct": "Okt",
    "Dec": "Dez",
    "Tue": "Di",
    "Wed": "Mi",
    "Thu": "Do",
    "Fri": "Fr",
    "Sat": "Sa",
    "Sun": "So",
    "Mon": "Mo",
}

GERMAN_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(GERMAN_NAMES, key=len, reverse=True)) + r")\b"
)


def german_date(value: date | datetime | None, fmt: str = "%d.%m.%Y") -> str:
    """Format a date with German month and weekday names.

    Args:
        value: Date to format
        fmt: strftime format

    Returns:
        Formatted date, e.g. "21. Aug. 2020" for ``"%d. %b. %Y"``

    Examples:
        >>> german_date(date(2020, 3, 5), "%d. %B %Y")
        '05. März 2020'
        >>> german_date(date(2020, 10, 5), "%d. %b. %Y")
        '05. Okt. 2020'
    """
    if value is None:
        return ""
    return GERMAN_PATTERN.sub(
        lambda match: GERMAN_NAMES[match.group(1)], value.strftime(fmt)
    )


def detag(markup: str) -> str:
    """Remove all tags from ``markup``.

    Examples:
        >>> detag("<b>Wetter</b> heute")
        'Wetter heute'
    """
    return strip_tags(markup)


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "german_date": german_date,
    "detag": detag,
}
