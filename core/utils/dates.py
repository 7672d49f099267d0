from datetime import date, datetime

from core.enums import ChartLocale

MONTH_ABBREVIATIONS: dict[ChartLocale, tuple[str, ...]] = {
    ChartLocale.es: ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"),
    ChartLocale.en: ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def to_date_key(value: date | datetime) -> str:
    """Format the value's own calendar fields as ``YYYY-MM-DD``.

    Aware datetimes are not converted to UTC first, so a date picked in the
    user's timezone keeps its calendar day.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def from_date_key(key: str | None) -> date:
    """Parse a ``YYYY-MM-DD`` key into its calendar day.

    An empty or missing key yields today; this is a display default, not a
    validation step.
    """
    if not key:
        return date.today()
    year, month, day = (int(part) for part in key.strip()[:10].split("-"))
    return date(year, month, day)


def today_key() -> str:
    return to_date_key(date.today())


def _locale(locale: ChartLocale | str) -> ChartLocale:
    try:
        return ChartLocale(str(locale).split("-", 1)[0].lower())
    except ValueError:
        return ChartLocale.es


def short_label(value: date | datetime, locale: ChartLocale | str = ChartLocale.es) -> str:
    """Short day/month label as shown on chart axes (``1 ene`` / ``Jan 1``)."""
    resolved = _locale(locale)
    month = MONTH_ABBREVIATIONS[resolved][value.month - 1]
    if resolved is ChartLocale.en:
        return f"{month} {value.day}"
    return f"{value.day} {month}"


def month_label(value: date | datetime, locale: ChartLocale | str = ChartLocale.es) -> str:
    month = MONTH_ABBREVIATIONS[_locale(locale)][value.month - 1]
    return f"{month} {value.year}"
