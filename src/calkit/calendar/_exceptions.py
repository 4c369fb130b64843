class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class InvalidDate(CalendarError, ValueError):
    """A year/month/day triple that is not a real Gregorian date."""


class InvalidRange(CalendarError, ValueError):
    """A range or span whose start lies after its end."""


class InvalidPattern(CalendarError, ValueError):
    """A recurrence pattern with an out-of-range interval or filter value."""


class RuleUnsatisfiable(CalendarError):
    """A holiday rule that has no matching date in the requested year."""
