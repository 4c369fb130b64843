from __future__ import annotations

import datetime as _dt
from typing import Optional, Protocol, Union


class Clock(Protocol):
    """Wall-clock source.  The only I/O any calkit component performs."""

    def now(self) -> _dt.datetime: ...

    def today(self) -> _dt.date: ...


class SystemClock:
    """Reads the host clock, optionally in a fixed time zone."""

    def __init__(self, tz: Optional[_dt.tzinfo] = None) -> None:
        self._tz = tz

    def now(self) -> _dt.datetime:
        return _dt.datetime.now(self._tz)

    def today(self) -> _dt.date:
        return self.now().date()

    def __repr__(self) -> str:
        return f"SystemClock(tz={self._tz!r})"


class FixedClock:
    """Always reports the same moment.  Used for tests and replays."""

    def __init__(self, moment: Union[_dt.datetime, _dt.date]) -> None:
        if not isinstance(moment, _dt.datetime):
            moment = _dt.datetime.combine(moment, _dt.time.min)
        self._moment: _dt.datetime = moment

    def now(self) -> _dt.datetime:
        return self._moment

    def today(self) -> _dt.date:
        return self._moment.date()

    def __repr__(self) -> str:
        return f"FixedClock({self._moment.isoformat()!r})"
